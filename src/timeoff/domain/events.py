"""
Events du domaine.

Les events représentent des faits qui se sont produits dans le système.
Ils sont immuables et nommés au passé (quelque chose s'est passé).

En event sourcing, ils sont aussi le seul enregistrement durable :
l'état d'une demande est dérivé de ses events.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from timeoff.domain.model import TimeOffRequest


class Event:
    """Classe de base pour tous les events du domaine."""

    request: TimeOffRequest


@dataclass(frozen=True)
class RequestCreated(Event):
    """Une demande de congé a été créée."""

    request: TimeOffRequest


@dataclass(frozen=True)
class CancellationRequested(Event):
    """L'employé a demandé l'annulation d'un congé."""

    request: TimeOffRequest


@dataclass(frozen=True)
class CancellationRefused(Event):
    """La demande d'annulation a été refusée."""

    request: TimeOffRequest


@dataclass(frozen=True)
class CancellationAccepted(Event):
    """La demande d'annulation a été acceptée."""

    request: TimeOffRequest


@dataclass(frozen=True)
class RequestCancelled(Event):
    """Le congé a été annulé."""

    request: TimeOffRequest


@dataclass(frozen=True)
class RequestRefused(Event):
    """La demande de congé a été refusée."""

    request: TimeOffRequest


@dataclass(frozen=True)
class RequestValidated(Event):
    """La demande de congé a été validée."""

    request: TimeOffRequest
