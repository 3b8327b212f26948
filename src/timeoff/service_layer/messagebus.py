"""
Message Bus.

Une command a exactement un handler, dont l'erreur remonte à
l'appelant. Un event a zéro ou plusieurs handlers ; l'échec de
l'un d'eux est loggé sans interrompre les autres.

Après chaque message, les events ajoutés au journal sont
récupérés auprès du Unit of Work et traités à leur tour.
Les handlers reçus ici ont déjà leurs dépendances liées
(voir bootstrap.inject_dependencies).
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Union

from timeoff.domain import commands, events
from timeoff.service_layer import unit_of_work

logger = logging.getLogger(__name__)

Message = Union[commands.Command, events.Event]


class MessageBus:
    def __init__(
        self,
        uow: unit_of_work.AbstractUnitOfWork,
        event_handlers: dict[type[events.Event], list[Callable]],
        command_handlers: dict[type[commands.Command], Callable],
    ):
        self.uow = uow
        self.event_handlers = event_handlers
        self.command_handlers = command_handlers

    def handle(self, message: Message) -> list[Any]:
        """Traite le message et sa cascade d'events ; renvoie les résultats des commands."""
        # File locale à l'appel : le bus est partagé entre threads.
        queue: list[Message] = [message]
        results: list[Any] = []
        while queue:
            message = queue.pop(0)
            if isinstance(message, commands.Command):
                results.append(self._handle_command(message))
            elif isinstance(message, events.Event):
                self._handle_event(message)
            else:
                raise ValueError(f"Message de type inconnu : {type(message)}")
            queue.extend(self.uow.collect_new_events())
        return results

    def _handle_command(self, command: commands.Command) -> Any:
        handler = self.command_handlers.get(type(command))
        if handler is None:
            raise ValueError(f"Aucun handler pour la command {type(command)}")
        logger.debug("Command %s", command)
        return handler(command)

    def _handle_event(self, event: events.Event) -> None:
        for handler in self.event_handlers.get(type(event), []):
            logger.debug("Event %s", event)
            try:
                handler(event)
            except Exception:
                logger.exception("Échec d'un handler pour l'event %s", event)
