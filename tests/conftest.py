"""
Configuration partagée pour les tests.

Fournit une base SQLite en mémoire pour les tests d'intégration
et e2e, sans interférer avec les tests unitaires.
"""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from timeoff.adapters import orm


@pytest.fixture
def sqlite_session_factory():
    """
    Fabrique de sessions sur une base SQLite en mémoire.

    StaticPool partage l'unique connexion entre les sessions :
    sans lui, chaque connexion verrait une base vide.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    orm.create_tables(engine)
    yield sessionmaker(bind=engine)
    engine.dispose()
