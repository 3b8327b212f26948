"""
Adapter pour l'horloge.

Les règles métier comparent les dates des demandes à "aujourd'hui".
Plutôt que de lire la date système au fond du domaine, on l'obtient
d'une horloge injectée, ce qui permet de la figer dans les tests.
"""

from __future__ import annotations

import abc
from datetime import date


class AbstractClock(abc.ABC):
    """Interface abstraite de l'horloge."""

    @abc.abstractmethod
    def today(self) -> date:
        raise NotImplementedError


class SystemClock(AbstractClock):
    """Horloge réelle, basée sur la date locale du système."""

    def today(self) -> date:
        return date.today()
