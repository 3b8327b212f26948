"""
Commands du domaine.

Les commands représentent des intentions : quelque chose que
le système doit faire. Contrairement aux events (faits passés),
les commands sont des demandes qui peuvent échouer.

Chaque command expose `user_id`, qui désigne le flux
d'events à relire pour la traiter.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from timeoff.domain.model import TimeOffRequest


class Command:
    """Classe de base pour toutes les commands."""

    user_id: int


class _RequestCommand(Command):
    """Command portant la demande complète."""

    request: TimeOffRequest

    @property
    def user_id(self) -> int:
        return self.request.user_id


@dataclass(frozen=True)
class RequestTimeOff(_RequestCommand):
    """Un employé demande un congé."""

    request: TimeOffRequest


@dataclass(frozen=True)
class RequestToCancelTimeOff(_RequestCommand):
    """Un employé demande l'annulation d'un congé déjà commencé."""

    request: TimeOffRequest


@dataclass(frozen=True)
class RefuseRequest(_RequestCommand):
    """Le manager refuse une demande qui n'a pas encore commencé."""

    request: TimeOffRequest


@dataclass(frozen=True)
class CancelRequest(Command):
    """Le manager annule une demande active."""

    user_id: int
    request_id: uuid.UUID


@dataclass(frozen=True)
class ValidateRequest(Command):
    """Le manager valide une demande en attente."""

    user_id: int
    request_id: uuid.UUID


@dataclass(frozen=True)
class AcceptCancellation(Command):
    """Le manager accepte une demande d'annulation."""

    user_id: int
    request_id: uuid.UUID


@dataclass(frozen=True)
class RefuseCancellation(Command):
    """Le manager refuse une demande d'annulation."""

    user_id: int
    request_id: uuid.UUID
