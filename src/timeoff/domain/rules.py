"""
Règles de validation des commands.

Chaque règle est une fonction pure : à partir de l'état courant
(et de la date du jour, passée explicitement), elle renvoie soit
la liste des events à enregistrer (Ok), soit un refus (Rejected).

Un refus n'est jamais une exception : c'est une valeur que
l'appelant inspecte.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import date
from typing import Callable, Iterable, Union

from timeoff.domain import events
from timeoff.domain.model import (
    PendingValidation,
    RequestState,
    TimeOffRequest,
    ToCancelTimeOffRequested,
    is_active,
)


class ErrorKind(enum.Enum):
    """Motifs de refus d'une command."""

    OVERLAPPING_REQUEST = "overlapping_request"
    STARTS_IN_PAST = "starts_in_past"
    STARTS_IN_FUTURE = "starts_in_future"
    INVALID_TRANSITION = "invalid_transition"

    @property
    def message(self) -> str:
        return _MESSAGES[self]


_MESSAGES = {
    ErrorKind.OVERLAPPING_REQUEST: "Overlapping request",
    ErrorKind.STARTS_IN_PAST: "The request starts in the past",
    ErrorKind.STARTS_IN_FUTURE: "The request starts in the future",
    ErrorKind.INVALID_TRANSITION: "The request cannot make this transition",
}


@dataclass(frozen=True)
class Ok:
    events: list[events.Event]


@dataclass(frozen=True)
class Rejected:
    error: ErrorKind


Result = Union[Ok, Rejected]

OverlapPredicate = Callable[[Iterable[TimeOffRequest], TimeOffRequest], bool]


def overlap_with_any_request(
    requests: Iterable[TimeOffRequest], request: TimeOffRequest
) -> bool:
    """Prédicat de chevauchement par défaut : ne détecte jamais rien."""
    # TODO: comparer les bornes à la demi-journée une fois la règle métier arrêtée
    return False


# --- Règles sur dates ---


def create_request(
    active_requests: Iterable[TimeOffRequest],
    request: TimeOffRequest,
    today: date,
    overlaps: OverlapPredicate = overlap_with_any_request,
) -> Result:
    """Une nouvelle demande doit commencer strictement après aujourd'hui."""
    if overlaps(active_requests, request):
        return Rejected(ErrorKind.OVERLAPPING_REQUEST)
    if request.start.date <= today:
        return Rejected(ErrorKind.STARTS_IN_PAST)
    return Ok([events.RequestCreated(request)])


def request_cancellation(
    active_requests: Iterable[TimeOffRequest],
    request: TimeOffRequest,
    today: date,
    overlaps: OverlapPredicate = overlap_with_any_request,
) -> Result:
    """
    Seul un congé déjà commencé (ou commençant aujourd'hui) peut
    faire l'objet d'une demande d'annulation.
    """
    if overlaps(active_requests, request):
        return Rejected(ErrorKind.OVERLAPPING_REQUEST)
    if request.start.date > today:
        return Rejected(ErrorKind.STARTS_IN_FUTURE)
    return Ok([events.CancellationRequested(request)])


def cancel_request(
    all_requests: Iterable[TimeOffRequest],
    request: TimeOffRequest,
    today: date,
    overlaps: OverlapPredicate = overlap_with_any_request,
) -> Result:
    """
    Refus par le manager d'une demande qui n'a pas encore commencé.

    Miroir de create_request : la frontière est la même, aujourd'hui
    compte comme passé.
    """
    if overlaps(all_requests, request):
        return Rejected(ErrorKind.OVERLAPPING_REQUEST)
    if request.start.date <= today:
        return Rejected(ErrorKind.STARTS_IN_PAST)
    return Ok([events.RequestRefused(request)])


# --- Règles sur état ---


def validate_request(state: RequestState) -> Result:
    if isinstance(state, PendingValidation):
        return Ok([events.RequestValidated(state.request)])
    return Rejected(ErrorKind.INVALID_TRANSITION)


def cancel_active_requests(state: RequestState) -> Result:
    if is_active(state):
        return Ok([events.RequestRefused(state.request)])
    return Rejected(ErrorKind.INVALID_TRANSITION)


def accept_cancellation(state: RequestState) -> Result:
    """L'annulation acceptée est enregistrée, puis le congé est annulé."""
    if isinstance(state, ToCancelTimeOffRequested):
        return Ok([
            events.CancellationAccepted(state.request),
            events.RequestCancelled(state.request),
        ])
    return Rejected(ErrorKind.INVALID_TRANSITION)


def refuse_cancellation(state: RequestState) -> Result:
    if isinstance(state, ToCancelTimeOffRequested):
        return Ok([events.CancellationRefused(state.request)])
    return Rejected(ErrorKind.INVALID_TRANSITION)
