"""
Views (lecture) pour le pattern CQRS.

Côté lecture, on ne passe ni par les règles métier ni par le
message bus : on rejoue simplement le flux de l'employé pour
exposer l'état courant de chacune de ses demandes.
"""

from __future__ import annotations

from timeoff.domain import model
from timeoff.service_layer import unit_of_work


def requests(user_id: int, uow: unit_of_work.AbstractUnitOfWork) -> list[dict]:
    """Retourne les demandes d'un employé avec leur état courant."""
    with uow:
        history = uow.events.get_stream(user_id).read_all()
    return [
        dict(
            request_id=str(request_id),
            state=type(state).__name__,
            active=state.is_active,
            start=_boundary(state.request.start),
            end=_boundary(state.request.end),
        )
        for request_id, state in model.get_all_requests(history).items()
    ]


def _boundary(boundary: model.Boundary) -> dict:
    return dict(date=boundary.date.isoformat(), half_day=boundary.half_day.value)
