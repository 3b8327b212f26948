"""
Pattern Event Store.

Le store fournit une abstraction sur le journal d'events.
Il est découpé en flux (streams), un par employé ; chaque flux
est en ajout seul et se relit toujours en entier, dans l'ordre.

Comme le repository classique, le store trace ce qui a été
ajouté pendant la transaction (`new_events`), ce qui permet
au Unit of Work de publier ces events sur le message bus.
"""

from __future__ import annotations

import abc
import uuid
from typing import Iterable

from sqlalchemy import func, insert, select
from sqlalchemy.orm import Session

from timeoff.adapters import orm
from timeoff.domain import events
from timeoff.domain.model import Boundary, HalfDay, TimeOffRequest

EVENT_TYPES: dict[str, type[events.Event]] = {
    cls.__name__: cls
    for cls in (
        events.RequestCreated,
        events.CancellationRequested,
        events.CancellationRefused,
        events.CancellationAccepted,
        events.RequestCancelled,
        events.RequestRefused,
        events.RequestValidated,
    )
}


class EventStream:
    """Flux d'events d'un employé."""

    def __init__(self, store: AbstractEventStore, user_id: int):
        self.store = store
        self.user_id = user_id

    def read_all(self) -> list[events.Event]:
        return self.store.read(self.user_id)

    def append(self, new_events: Iterable[events.Event]) -> None:
        self.store.append(self.user_id, list(new_events))


class AbstractEventStore(abc.ABC):
    """
    Interface abstraite de l'event store.

    Les méthodes publiques (read, append) gèrent le tracking via
    `new_events`, puis délèguent aux méthodes abstraites préfixées _.
    """

    def __init__(self) -> None:
        self.new_events: list[events.Event] = []

    def get_stream(self, user_id: int) -> EventStream:
        return EventStream(self, user_id)

    def read(self, user_id: int) -> list[events.Event]:
        return self._read(user_id)

    def append(self, user_id: int, new_events: list[events.Event]) -> None:
        self._append(user_id, new_events)
        self.new_events.extend(new_events)

    @abc.abstractmethod
    def _read(self, user_id: int) -> list[events.Event]:
        raise NotImplementedError

    @abc.abstractmethod
    def _append(self, user_id: int, new_events: list[events.Event]) -> None:
        raise NotImplementedError


class SqlAlchemyEventStore(AbstractEventStore):
    """Implémentation concrète de l'event store avec SQLAlchemy."""

    def __init__(self, session: Session):
        super().__init__()
        self.session = session

    def _read(self, user_id: int) -> list[events.Event]:
        rows = self.session.execute(
            select(orm.request_events)
            .where(orm.request_events.c.user_id == user_id)
            .order_by(orm.request_events.c.sequence)
        )
        return [_to_event(user_id, row) for row in rows]

    def _append(self, user_id: int, new_events: list[events.Event]) -> None:
        last = self.session.execute(
            select(func.max(orm.request_events.c.sequence))
            .where(orm.request_events.c.user_id == user_id)
        ).scalar()
        sequence = last or 0
        for event in new_events:
            sequence += 1
            self.session.execute(
                insert(orm.request_events).values(
                    user_id=user_id,
                    sequence=sequence,
                    **_to_row(event),
                )
            )


def _to_row(event: events.Event) -> dict:
    request = event.request
    return dict(
        event_type=type(event).__name__,
        request_id=str(request.request_id),
        start_date=request.start.date,
        start_half_day=request.start.half_day.value,
        end_date=request.end.date,
        end_half_day=request.end.half_day.value,
    )


def _to_event(user_id: int, row) -> events.Event:
    request = TimeOffRequest(
        user_id=user_id,
        request_id=uuid.UUID(row.request_id),
        start=Boundary(row.start_date, HalfDay(row.start_half_day)),
        end=Boundary(row.end_date, HalfDay(row.end_half_day)),
    )
    return EVENT_TYPES[row.event_type](request)
