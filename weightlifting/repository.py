"""
Persistence boundary

Storage is owned by the outer layers; the core only needs whole
competitions to be saved and loaded by their stable id.
"""
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from loguru import logger

from .competition import Competition


class CompetitionRepository(ABC):
    """Load/save whole competition aggregates by identity"""

    @abstractmethod
    def save(self, competition: Competition) -> str:
        """Store the competition and return its id"""

    @abstractmethod
    def get(self, competition_id: str) -> Optional[Competition]:
        ...

    @abstractmethod
    def delete(self, competition_id: str) -> bool:
        ...

    @abstractmethod
    def list_all(self) -> List[Competition]:
        ...


class InMemoryCompetitionRepository(CompetitionRepository):
    """Process-local repository, used by the CLI and in tests"""

    def __init__(self):
        self._competitions: Dict[str, Competition] = {}

    def save(self, competition: Competition) -> str:
        self._competitions[competition.competition_id] = competition
        logger.debug(f"Competition saved: {competition.competition_id} ({competition.name})")
        return competition.competition_id

    def get(self, competition_id: str) -> Optional[Competition]:
        return self._competitions.get(competition_id)

    def delete(self, competition_id: str) -> bool:
        return self._competitions.pop(competition_id, None) is not None

    def list_all(self) -> List[Competition]:
        return sorted(self._competitions.values(), key=lambda c: c.competition_date)
