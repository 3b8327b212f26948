"""
Schéma SQL du journal d'events (SQLAlchemy Core).

Un seul journal, découpé en flux par employé. Chaque ligne est un
event, avec la demande qu'il concerne mise à plat en colonnes.

La contrainte d'unicité (user_id, sequence) garantit qu'une
position dans un flux ne peut être écrite qu'une fois : deux
transactions concurrentes sur le même flux ne peuvent pas
toutes les deux commiter.
"""

from sqlalchemy import (
    Column,
    Date,
    Integer,
    MetaData,
    String,
    Table,
    UniqueConstraint,
)

metadata = MetaData()

# --- Définition des tables ---

request_events = Table(
    "request_events",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("user_id", Integer, nullable=False, index=True),
    Column("sequence", Integer, nullable=False),
    Column("event_type", String(64), nullable=False),
    Column("request_id", String(36), nullable=False),
    Column("start_date", Date, nullable=False),
    Column("start_half_day", String(2), nullable=False),
    Column("end_date", Date, nullable=False),
    Column("end_half_day", String(2), nullable=False),
    UniqueConstraint("user_id", "sequence", name="uq_stream_position"),
)


def create_tables(engine) -> None:
    """Crée les tables si elles n'existent pas encore."""
    metadata.create_all(engine)
