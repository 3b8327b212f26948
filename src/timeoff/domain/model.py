"""
Modèle de domaine des demandes de congés.

Ce module contient les value objects (Boundary, TimeOffRequest),
les états possibles d'une demande, et la reconstruction de l'état
par rejeu des événements (event sourcing).

Rien ici ne fait d'I/O : l'état courant d'une demande est toujours
une fonction pure de son historique d'événements.
"""

from __future__ import annotations

import enum
import uuid
from dataclasses import dataclass
from datetime import date
from typing import Iterable

from timeoff.domain import events


class HalfDay(enum.Enum):
    """Demi-journée : matin ou après-midi."""

    AM = "AM"
    PM = "PM"


_HALF_DAY_ORDER = {HalfDay.AM: 0, HalfDay.PM: 1}


@dataclass(frozen=True)
class Boundary:
    """
    Value Object représentant une borne de congé à la demi-journée.

    Les bornes sont ordonnées par (date, demi-journée), le matin
    précédant l'après-midi.
    """

    date: date
    half_day: HalfDay

    @property
    def sort_key(self) -> tuple[date, int]:
        return self.date, _HALF_DAY_ORDER[self.half_day]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Boundary):
            return NotImplemented
        return self.sort_key < other.sort_key

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Boundary):
            return NotImplemented
        return self.sort_key <= other.sort_key


@dataclass(frozen=True)
class TimeOffRequest:
    """
    Value Object représentant une demande de congé.

    Une demande est immuable : tout changement de cycle de vie
    est porté par un événement, jamais par une modification de la demande.
    """

    user_id: int
    request_id: uuid.UUID
    start: Boundary
    end: Boundary

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise ValueError(
                f"La demande {self.request_id} se termine avant de commencer"
            )


# --- États d'une demande ---


class RequestState:
    """Classe de base pour tous les états d'une demande."""

    @property
    def is_active(self) -> bool:
        return is_active(self)


@dataclass(frozen=True)
class NotCreated(RequestState):
    """État initial : aucun événement pour cet identifiant."""


@dataclass(frozen=True)
class PendingValidation(RequestState):
    request: TimeOffRequest


@dataclass(frozen=True)
class ToCancelTimeOffRequested(RequestState):
    request: TimeOffRequest


@dataclass(frozen=True)
class ToCancelTimeOffRefused(RequestState):
    request: TimeOffRequest


@dataclass(frozen=True)
class ToCancelTimeOffAccepted(RequestState):
    request: TimeOffRequest


@dataclass(frozen=True)
class Cancelled(RequestState):
    request: TimeOffRequest


@dataclass(frozen=True)
class Refused(RequestState):
    request: TimeOffRequest


@dataclass(frozen=True)
class Validated(RequestState):
    request: TimeOffRequest


ACTIVE_STATES = (
    PendingValidation,
    ToCancelTimeOffRequested,
    ToCancelTimeOffRefused,
    Validated,
)

# Chaque type d'événement détermine à lui seul l'état résultant.
STATE_AFTER: dict[type[events.Event], type[RequestState]] = {
    events.RequestCreated: PendingValidation,
    events.CancellationRequested: ToCancelTimeOffRequested,
    events.CancellationRefused: ToCancelTimeOffRefused,
    events.CancellationAccepted: ToCancelTimeOffAccepted,
    events.RequestCancelled: Cancelled,
    events.RequestRefused: Refused,
    events.RequestValidated: Validated,
}


def is_active(state: RequestState) -> bool:
    """Une demande active est ouverte : en attente, validée ou en cours d'annulation."""
    return isinstance(state, ACTIVE_STATES)


# --- Reconstruction de l'état ---


def evolve(state: RequestState, event: events.Event) -> RequestState:
    """
    Applique un événement à un état.

    L'état précédent est ignoré : seul le type de l'événement compte.
    L'ordre des événements reste significatif car le dernier l'emporte.
    """
    return STATE_AFTER[type(event)](event.request)


def get_request_state(history: Iterable[events.Event]) -> RequestState:
    """Rejoue l'historique d'une demande, à partir de NotCreated."""
    state: RequestState = NotCreated()
    for event in history:
        state = evolve(state, event)
    return state


def get_all_requests(
    history: Iterable[events.Event],
) -> dict[uuid.UUID, RequestState]:
    """
    Rejoue un flux mêlant plusieurs demandes.

    Chaque événement ne fait évoluer que l'entrée de sa propre demande ;
    l'ordre compte par demande, pas entre demandes.
    """
    requests: dict[uuid.UUID, RequestState] = {}
    for event in history:
        request_id = event.request.request_id
        state = requests.get(request_id, NotCreated())
        requests[request_id] = evolve(state, event)
    return requests
