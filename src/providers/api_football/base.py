from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from core.models import Fixture, InjuryList, StatisticsState


class DataSource(ABC):
    """
    Interfaccia astratta verso il provider dati.

    Ogni metodo è una singola chiamata di rete, senza retry (gestiti dal client HTTP).
    Gli errori di rete/HTTP si propagano come TransportError.
    """

    @abstractmethod
    async def get_fixtures(self, date: str) -> List[Fixture]:
        """
        Tutte le fixtures della data (YYYY-MM-DD), di tutte le leghe.
        Lista vuota è un risultato valido.
        """
        raise NotImplementedError

    @abstractmethod
    async def get_team_statistics(self, team_id: int, season: int) -> StatisticsState:
        """
        Statistiche della squadra per la stagione.
        Payload vuoto -> UNAVAILABLE (non è un errore).
        """
        raise NotImplementedError

    @abstractmethod
    async def get_team_injuries(self, team_id: int) -> InjuryList:
        """Infortuni correnti della squadra; payload vuoto -> []."""
        raise NotImplementedError
