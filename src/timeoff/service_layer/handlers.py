"""
Handlers pour les commands et events.

Les handlers sont les fonctions qui traitent les commands et events
transitant par le message bus.

- Command handlers : décident puis enregistrent (peuvent échouer)
- Event handlers : réagissent à un fait passé (ne doivent pas échouer)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from timeoff import config
from timeoff.domain import commands, events, rules
from timeoff.service_layer import dispatcher

if TYPE_CHECKING:
    from timeoff.adapters.clock import AbstractClock
    from timeoff.adapters.notifications import AbstractNotifications
    from timeoff.service_layer.unit_of_work import AbstractUnitOfWork

logger = logging.getLogger(__name__)


# --- Exceptions ---


class RequestRejected(Exception):
    """Levée quand une command est refusée par les règles métier."""

    def __init__(self, error: rules.ErrorKind):
        super().__init__(error.message)
        self.error = error


# --- Command Handlers ---


def decide(
    cmd: commands.Command,
    uow: AbstractUnitOfWork,
    clock: AbstractClock,
) -> list[events.Event]:
    """
    Traite n'importe quelle command de demande de congé.

    Relit le flux de l'employé, laisse les règles décider, puis
    ajoute les events produits au flux dans la même transaction.
    Lève RequestRejected si la command est refusée.
    """
    with uow:
        result = dispatcher.handle_command(uow.events, cmd, today=clock.today())
        if isinstance(result, rules.Rejected):
            logger.info("Command %s refusée : %s", cmd, result.error.value)
            raise RequestRejected(result.error)
        uow.events.get_stream(cmd.user_id).append(result.events)
        uow.commit()
    return result.events


# --- Event Handlers ---


def notify_manager(
    event: events.Event,
    notifications: AbstractNotifications,
) -> None:
    """Prévient le manager qu'une décision est attendue de sa part."""
    request = event.request
    notifications.send(
        destination=config.get_manager_email(),
        message=(
            f"{type(event).__name__} : demande {request.request_id} "
            f"de l'employé {request.user_id} "
            f"du {request.start.date} au {request.end.date}"
        ),
    )


def notify_employee(
    event: events.Event,
    notifications: AbstractNotifications,
) -> None:
    """Informe l'employé de la décision prise sur sa demande."""
    request = event.request
    notifications.send(
        destination=config.get_employee_email(request.user_id),
        message=f"{type(event).__name__} : demande {request.request_id}",
    )
