"""Implementation of (Match)Repository using SQLAlchemy"""

from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.orm import Session

from src.core.models import GameStateModel, MatchModel, MoveModel
from src.db.schema import DBGameState, DBMatch, DBMove


class SQLMatchRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get_match(self, match_id: UUID) -> MatchModel | None:
        """Get match (with its latest game state) by ID, if record exists."""
        match_db = self._fetch_match(match_id)
        if match_db:
            return self._to_model(match_db)
        return None

    def list_matches(
        self,
        status: Optional[str] = None,
        variant: Optional[str] = None,
        player_name: Optional[str] = None,
    ) -> list[tuple[UUID, MatchModel]]:
        """All matches, optionally filtered. Newest first."""
        query = select(DBMatch).order_by(DBMatch.created_at.desc())
        if status:
            query = query.where(DBMatch.status == status)
        if variant:
            query = query.where(DBMatch.variant == variant)

        matches = [(match_db.id, self._to_model(match_db)) for match_db in self.db.scalars(query)]
        if player_name:
            # players live in a JSON column: filter after loading
            matches = [(id_, match) for id_, match in matches if player_name in match.registered_players.values()]
        return matches

    def create_match(self, match: MatchModel) -> tuple[MatchModel, UUID]:
        """Store new match (and its first game state) and return the stored data + newly created match ID."""

        new_id = uuid4()
        match_db = DBMatch(
            id=new_id,
            variant=match.variant,
            mode=match.mode,
            status=match.status,
            registered_players=match.registered_players,
            current_player_color=match.current_player_color,
            winner_color=match.winner_color,
        )
        match_db.game_states.append(self._to_state_row(match.state))
        self.db.add(match_db)
        self.db.commit()
        self.db.refresh(match_db)
        return self._to_model(match_db), new_id

    def update_match(self, match_id: UUID, match: MatchModel, moves: list[MoveModel]) -> MatchModel | None:
        """Update the match record, append its current game state and any new moves to the history."""
        match_db = self._fetch_match(match_id)
        if not match_db:
            return None
        match_db.status = match.status
        match_db.registered_players = match.registered_players
        match_db.current_player_color = match.current_player_color
        match_db.winner_color = match.winner_color
        match_db.game_states.append(self._to_state_row(match.state))
        match_db.moves.extend(self._to_move_row(move) for move in moves)
        self.db.commit()
        self.db.refresh(match_db)
        return self._to_model(match_db)

    def get_moves(self, match_id: UUID) -> list[MoveModel] | None:
        """Move history, oldest first. None if the match does not exist."""
        match_db = self._fetch_match(match_id)
        if not match_db:
            return None
        return [self._to_move_model(move_db) for move_db in match_db.moves]

    def delete_match(self, match_id: UUID) -> MatchModel | None:
        """Remove a match's record (and its history)."""
        match_db = self._fetch_match(match_id)
        if not match_db:
            return None
        match_model = self._to_model(match_db)
        self.db.delete(match_db)
        self.db.commit()
        return match_model

    def _fetch_match(self, match_id: UUID) -> DBMatch | None:
        query = select(DBMatch).where(DBMatch.id == match_id)
        return self.db.scalar(query)

    def _to_model(self, match_db: DBMatch) -> MatchModel:
        """Convert SQLAlchemy model to data transfer model."""
        latest_state = match_db.game_states[-1]
        return MatchModel(
            variant=match_db.variant,
            mode=match_db.mode,
            status=match_db.status,
            registered_players=dict(match_db.registered_players),
            current_player_color=match_db.current_player_color,
            winner_color=match_db.winner_color,
            state=GameStateModel(
                board_state=list(latest_state.board_state),
                dice=list(latest_state.dice),
                available_moves=list(latest_state.available_moves),
                turn_number=latest_state.turn_number,
                phase=latest_state.phase,
            ),
        )

    def _to_state_row(self, state: GameStateModel) -> DBGameState:
        return DBGameState(
            board_state=state.board_state,
            dice=state.dice,
            available_moves=state.available_moves,
            turn_number=state.turn_number,
            phase=state.phase,
        )

    def _to_move_row(self, move: MoveModel) -> DBMove:
        return DBMove(
            player_color=move.player_color,
            from_point=move.from_point,
            to_point=move.to_point,
            dice_value=move.dice_value,
            move_type=move.move_type,
            turn_number=move.turn_number,
        )

    def _to_move_model(self, move_db: DBMove) -> MoveModel:
        return MoveModel(
            player_color=move_db.player_color,
            from_point=move_db.from_point,
            to_point=move_db.to_point,
            dice_value=move_db.dice_value,
            move_type=move_db.move_type,
            turn_number=move_db.turn_number,
        )
