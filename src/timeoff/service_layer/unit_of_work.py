"""
Unit of Work sur le journal d'events.

Une transaction couvre le cycle complet d'une command :
relecture du flux, décision, ajout des events produits.
Sans appel à commit(), la sortie du bloc `with` annule tout.

Les events ajoutés pendant la transaction restent disponibles
via collect_new_events(), pour publication par le message bus.
"""

from __future__ import annotations

import abc
import threading

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from timeoff import config
from timeoff.adapters import event_store, orm


def default_session_factory() -> sessionmaker:
    engine = create_engine(
        config.get_db_uri(),
        isolation_level="SERIALIZABLE",
    )
    orm.create_tables(engine)
    return sessionmaker(bind=engine)


class AbstractUnitOfWork(abc.ABC):
    events: event_store.AbstractEventStore

    def __enter__(self) -> AbstractUnitOfWork:
        return self

    def __exit__(self, *args: object) -> None:
        self.rollback()

    def commit(self) -> None:
        self._commit()

    def collect_new_events(self):
        new_events = self.events.new_events
        while new_events:
            yield new_events.pop(0)

    @abc.abstractmethod
    def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def rollback(self) -> None:
        raise NotImplementedError


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    """
    UoW SQLAlchemy, partageable entre threads.

    Une seule instance sert toute l'application (via le bus), mais
    chaque thread ouvre sa propre session et son propre event store :
    deux requêtes HTTP simultanées ne partagent jamais une transaction.
    """

    def __init__(self, session_factory: sessionmaker | None = None):
        self._session_factory = session_factory
        self._factory_lock = threading.Lock()
        self._local = threading.local()

    @property
    def session_factory(self) -> sessionmaker:
        # Le moteur par défaut n'est créé qu'au premier usage.
        with self._factory_lock:
            if self._session_factory is None:
                self._session_factory = default_session_factory()
        return self._session_factory

    @property
    def session(self) -> Session:
        return self._local.session

    @property
    def events(self) -> event_store.AbstractEventStore:
        return self._local.events

    def __enter__(self) -> SqlAlchemyUnitOfWork:
        self._local.session = self.session_factory()
        self._local.events = event_store.SqlAlchemyEventStore(self._local.session)
        return super().__enter__()

    def __exit__(self, *args: object) -> None:
        super().__exit__(*args)
        self.session.close()

    def _commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()
