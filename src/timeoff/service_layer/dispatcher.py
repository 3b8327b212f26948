"""
Dispatch des commands vers les règles métier.

handle_command relit le flux d'events de l'employé concerné,
reconstruit l'état de toutes ses demandes, puis confie la décision
à la règle correspondant à la command.

C'est la seule lecture du store dans le cœur métier ; il n'y a
aucune écriture ici : enregistrer les events produits est la
responsabilité de l'appelant.
"""

from __future__ import annotations

import uuid
from datetime import date
from typing import Callable

from timeoff.adapters.event_store import AbstractEventStore
from timeoff.domain import commands, model, rules
from timeoff.domain.model import RequestState, TimeOffRequest


def handle_command(
    store: AbstractEventStore,
    command: commands.Command,
    today: date,
    overlaps: rules.OverlapPredicate = rules.overlap_with_any_request,
) -> rules.Result:
    history = store.get_stream(command.user_id).read_all()
    user_requests = model.get_all_requests(history)

    if isinstance(command, commands.RequestTimeOff):
        return rules.create_request(
            _active_requests(user_requests), command.request, today, overlaps
        )
    if isinstance(command, commands.RequestToCancelTimeOff):
        return rules.request_cancellation(
            _active_requests(user_requests), command.request, today, overlaps
        )
    if isinstance(command, commands.RefuseRequest):
        all_requests = [
            state.request for state in user_requests.values()
        ]
        return rules.cancel_request(all_requests, command.request, today, overlaps)

    rule = STATE_RULES.get(type(command))
    if rule is None:
        raise ValueError(f"Aucune règle pour la command {type(command)}")
    state = user_requests.get(command.request_id, model.NotCreated())
    return rule(state)


# Commands ne portant qu'un identifiant : la décision ne dépend
# que de l'état courant de la demande visée.
STATE_RULES: dict[type[commands.Command], Callable[[RequestState], rules.Result]] = {
    commands.CancelRequest: rules.cancel_active_requests,
    commands.ValidateRequest: rules.validate_request,
    commands.AcceptCancellation: rules.accept_cancellation,
    commands.RefuseCancellation: rules.refuse_cancellation,
}


def _active_requests(
    user_requests: dict[uuid.UUID, RequestState],
) -> list[TimeOffRequest]:
    return [state.request for state in user_requests.values() if state.is_active]
