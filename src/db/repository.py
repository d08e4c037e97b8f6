"""Protocol repository (implemented with SQLAlchemy in sql_repository.py, tests use an in-memory version)"""

from typing import Optional, Protocol
from uuid import UUID

from src.core.models import MatchModel, MoveModel


class MatchRepository(Protocol):
    """Persistence layer orchestration"""

    def get_match(self, match_id: UUID) -> MatchModel | None:
        """Get match (with its latest game state) by ID, if record exists."""
        ...

    def list_matches(
        self,
        status: Optional[str] = None,
        variant: Optional[str] = None,
        player_name: Optional[str] = None,
    ) -> list[tuple[UUID, MatchModel]]:
        """All matches, optionally filtered."""
        ...

    def create_match(self, match: MatchModel) -> tuple[MatchModel, UUID]:
        """Store new match (and its first game state) and return the stored data + newly created match ID."""
        ...

    def update_match(self, match_id: UUID, match: MatchModel, moves: list[MoveModel]) -> MatchModel | None:
        """Update the match record, append its current game state and any new moves to the history."""
        ...

    def get_moves(self, match_id: UUID) -> list[MoveModel] | None:
        """Move history, oldest first. None if the match does not exist."""
        ...

    def delete_match(self, match_id: UUID) -> MatchModel | None:
        """Remove a match's record (and its history)."""
        ...
