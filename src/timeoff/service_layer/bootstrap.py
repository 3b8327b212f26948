"""
Bootstrap : assemblage de l'application (Composition Root).

Seul endroit qui choisit les implémentations concrètes (SQLAlchemy,
SMTP, horloge système) ; les tests y injectent leurs fakes.
Les dépendances sont liées aux handlers une fois pour toutes, ici,
d'après le nom de leurs paramètres.
"""

from __future__ import annotations

import functools
import inspect
from typing import Any, Callable

from timeoff.adapters import clock as clock_adapter
from timeoff.adapters import notifications
from timeoff.domain import commands, events
from timeoff.service_layer import handlers, messagebus, unit_of_work


def bootstrap(
    uow: unit_of_work.AbstractUnitOfWork | None = None,
    notifications_adapter: notifications.AbstractNotifications | None = None,
    clock: clock_adapter.AbstractClock | None = None,
) -> messagebus.MessageBus:
    if uow is None:
        uow = unit_of_work.SqlAlchemyUnitOfWork()
    if notifications_adapter is None:
        notifications_adapter = notifications.EmailNotifications()
    if clock is None:
        clock = clock_adapter.SystemClock()

    dependencies = {"uow": uow, "notifications": notifications_adapter, "clock": clock}

    return messagebus.MessageBus(
        uow=uow,
        event_handlers={
            event_type: [inject_dependencies(h, dependencies) for h in event_handlers]
            for event_type, event_handlers in EVENT_HANDLERS.items()
        },
        command_handlers={
            command_type: inject_dependencies(handler, dependencies)
            for command_type, handler in COMMAND_HANDLERS.items()
        },
    )


def inject_dependencies(handler: Callable, dependencies: dict[str, Any]) -> Callable:
    """Lie au handler les dépendances que sa signature réclame par nom."""
    params = inspect.signature(handler).parameters
    return functools.partial(
        handler,
        **{name: dep for name, dep in dependencies.items() if name in params},
    )


# --- Routage des messages vers les handlers ---

EVENT_HANDLERS: dict[type[events.Event], list[Callable]] = {
    events.RequestCreated: [handlers.notify_manager],
    events.CancellationRequested: [handlers.notify_manager],
    events.RequestValidated: [handlers.notify_employee],
    events.RequestRefused: [handlers.notify_employee],
    events.CancellationRefused: [handlers.notify_employee],
    events.RequestCancelled: [handlers.notify_employee],
}

COMMAND_HANDLERS: dict[type[commands.Command], Callable] = {
    command_type: handlers.decide
    for command_type in (
        commands.RequestTimeOff,
        commands.RequestToCancelTimeOff,
        commands.RefuseRequest,
        commands.CancelRequest,
        commands.ValidateRequest,
        commands.AcceptCancellation,
        commands.RefuseCancellation,
    )
}
