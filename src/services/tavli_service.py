"""Orchestration of communication from API router to business logic and persistence layers (and the reverse direction)."""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional
from uuid import UUID

from src.api.models import (
    AbandonMatchRequest,
    AiMoveRequest,
    CreateMatchRequest,
    DeleteMatchRequest,
    GameStateResponse,
    GetMatchRequest,
    JoinMatchRequest,
    LegalMovesRequest,
    LegalMovesResponse,
    MatchFilters,
    MatchResponse,
    MoveRequest,
    MoveResponse,
    NotationMoveRequest,
    RollDiceRequest,
)
from src.core.config import Settings
from src.core.exceptions import GameError, GameStateError, RepositoryError
from src.core.models import MatchModel, MoveModel
from src.core.shared_types import Color, GameMode, MatchStatus, Phase
from src.db.repository import MatchRepository
from src.tavli import ai
from src.tavli.game import Match
from src.tavli.moves import DiceRoller, MoveRecord, default_roller

logger = logging.getLogger(__name__)


class TavliService:
    """Orchestration of layers for tavli matches."""

    def __init__(
        self,
        repository: MatchRepository,
        settings: Optional[Settings] = None,
        roller: DiceRoller = default_roller,
    ) -> None:
        self.repo = repository
        self.settings = settings or Settings()
        self.roller = roller

    # -- API routes logic ---
    def create_match(self, request: CreateMatchRequest) -> MatchResponse:
        """First player requested to create a new match."""

        # Use info in CreateMatchRequest to create a new Match, and convert into MatchModel
        new_match = Match.new_match(
            player=request.player_name,
            variant=request.variant,
            mode=request.mode,
            ai_player=self.settings.ai_player_name,
        )

        # Store the MatchModel in the repository
        stored_match, match_id = self.repo.create_match(new_match.to_model())
        logger.info(
            "Match %s created: %s %s by %s", match_id, request.variant, request.mode, request.player_name
        )
        return self._create_match_response(match_id, stored_match)

    def join_match(self, request: JoinMatchRequest) -> MatchResponse:
        """Second player requested to join a match."""

        match = self._load_match(request.match_id)
        with _log_rejection("join", request.match_id, request.player_name):
            match.register_player(request.player_name)

        stored = self._store(request.match_id, match)
        logger.info("Player %s joined match %s", request.player_name, request.match_id)
        return self._create_match_response(request.match_id, stored)

    def get_match(self, request: GetMatchRequest) -> MatchResponse:
        """
        Retrieve current match.
        ----
        Used in "polling" loop by frontend to check when it is the player's turn for instance.
        """
        return self._create_match_response(request.match_id, self._fetch_match(request.match_id))

    def list_matches(self, filters: Optional[MatchFilters] = None) -> list[MatchResponse]:
        """Show all recorded matches (newest first), optionally filtered."""
        filters = filters or MatchFilters()
        matches = self.repo.list_matches(
            status=filters.status.value if filters.status else None,
            variant=filters.variant.value if filters.variant else None,
            player_name=filters.player_name,
        )
        return [self._create_match_response(match_id, model) for match_id, model in matches]

    def get_game_state(self, request: GetMatchRequest) -> GameStateResponse:
        """Board, dice and phase of the match."""
        model = self._fetch_match(request.match_id)
        return self._create_state_response(request.match_id, model)

    def roll_dice(self, request: RollDiceRequest) -> MatchResponse:
        """Roll for the player to move."""

        match = self._load_match(request.match_id)
        with _log_rejection("roll", request.match_id, request.player_name):
            dice = match.roll(request.player_name, self.roller)

        stored = self._store(request.match_id, match)
        logger.info("Player %s rolled %s in match %s", request.player_name, dice, request.match_id)
        if match.state.phase == Phase.ROLLING:
            logger.info("No legal move for %s in match %s, turn passes", request.player_name, request.match_id)
        return self._create_match_response(request.match_id, stored)

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """retrieve set of legal moves."""

        match = self._load_match(request.match_id)
        legal_moves = match.legal_moves(request.player_name)
        return LegalMovesResponse(
            match_id=request.match_id,
            player_name=request.player_name,
            color=match.current_color,
            legal_moves=legal_moves,
        )

    def make_move(self, request: MoveRequest) -> MoveResponse:
        """Make a move attempt."""

        match = self._load_match(request.match_id)
        with _log_rejection("move", request.match_id, request.player_name):
            record = match.play(request.player_name, request.from_point, request.to_point, request.dice_value)

        self._store(request.match_id, match, [record])
        self._log_move(request.match_id, record, match)
        return self._create_move_response(request.match_id, record)

    def make_notation_move(self, request: NotationMoveRequest) -> MoveResponse:
        """Make a move picked from the legal moves list."""

        match = self._load_match(request.match_id)
        with _log_rejection("move", request.match_id, request.player_name):
            record = match.play_notation(request.player_name, request.notation)

        self._store(request.match_id, match, [record])
        self._log_move(request.match_id, record, match)
        return self._create_move_response(request.match_id, record)

    def make_ai_move(self, request: AiMoveRequest) -> list[MoveResponse]:
        """
        Play the computer's whole turn.
        ---

        Rolls (if not done yet), then keeps asking the AI for a move until the turn passes or the match ends.
        Every roll and every move is stored separately, so the history shows each step.
        """
        match = self._load_match(request.match_id)
        ai_player = self.settings.ai_player_name
        ai_color = self._ai_color(match)
        if match.mode != GameMode.AI or match.status != MatchStatus.ACTIVE or match.current_color != ai_color:
            logger.warning("AI move rejected for match %s: not the computer's turn", request.match_id)
            raise GameStateError(f"It is not the computer's turn in match {request.match_id}.")

        if match.state.phase == Phase.ROLLING:
            dice = match.roll(ai_player, self.roller)
            self._store(request.match_id, match)
            logger.info("AI rolled %s in match %s", dice, request.match_id)

        played: list[MoveResponse] = []
        while (
            match.status == MatchStatus.ACTIVE
            and match.current_color == ai_color
            and match.state.phase == Phase.MOVING
        ):
            choice = ai.make_ai_move(match.state, match.variant, request.match_id, ai_color)
            if choice is None:
                logger.warning("AI found no move in match %s although dice %s remain", request.match_id, match.state.available_moves)
                break
            record = match.play(ai_player, choice.from_point, choice.to_point, choice.dice_value)
            self._store(request.match_id, match, [record])
            self._log_move(request.match_id, record, match)
            played.append(self._create_move_response(request.match_id, record))
        return played

    def get_moves(self, request: GetMatchRequest) -> list[MoveResponse]:
        """Move history of the match, oldest first."""
        moves = self.repo.get_moves(request.match_id)
        if moves is None:
            raise RepositoryError(f"Match with match_id={request.match_id} not found.")
        return [
            MoveResponse(match_id=request.match_id, **vars(move))
            for move in moves
        ]

    def abandon_match(self, request: AbandonMatchRequest) -> MatchResponse:
        match = self._load_match(request.match_id)
        with _log_rejection("abandon", request.match_id, request.player_name):
            match.abandon(request.player_name)
        stored = self._store(request.match_id, match)
        logger.info("Player %s abandoned match %s", request.player_name, request.match_id)
        return self._create_match_response(request.match_id, stored)

    def delete_match(self, request: DeleteMatchRequest) -> None:
        """Handle a request to delete a Match record."""
        if self.repo.delete_match(request.match_id) is None:
            raise RepositoryError(f"Match with match_id={request.match_id} not found.")
        logger.info("Match %s deleted", request.match_id)

    # -- Internal helpers --
    def _fetch_match(self, match_id: UUID) -> MatchModel:
        """Attempt to find the match in the repository and raise error if it fails."""
        match_model = self.repo.get_match(match_id)
        if match_model is None:
            logger.warning("Match %s not found", match_id)
            raise RepositoryError(f"Match with {match_id=} not found.")
        return match_model

    def _load_match(self, match_id: UUID) -> Match:
        return Match.from_model(self._fetch_match(match_id))

    def _store(self, match_id: UUID, match: Match, records: Optional[list[MoveRecord]] = None) -> MatchModel:
        moves = [
            MoveModel(
                player_color=record.player_color.value,
                from_point=record.from_point,
                to_point=record.to_point,
                dice_value=record.dice_value,
                move_type=record.move_type.value,
                turn_number=record.turn_number,
            )
            for record in records or []
        ]
        stored = self.repo.update_match(match_id, match.to_model(), moves)
        if stored is None:
            raise RepositoryError(f"Match with {match_id=} not found.")
        return stored

    def _ai_color(self, match: Match) -> Color:
        for color, player in match.players.items():
            if player == self.settings.ai_player_name:
                return color
        return ai.DEFAULT_AI_COLOR

    def _log_move(self, match_id: UUID, record: MoveRecord, match: Match) -> None:
        logger.info(
            "Match %s: %s played %d/%d:%d (%s)",
            match_id,
            record.player_color,
            record.from_point,
            record.to_point,
            record.dice_value,
            record.move_type,
        )
        if match.status == MatchStatus.COMPLETED:
            logger.info("Match %s completed, winner: %s (%s)", match_id, match.winner_name, match.winner)

    def _create_match_response(self, match_id: UUID, model: MatchModel) -> MatchResponse:
        """Convert info in MatchModel to a MatchResponse (for match with given ID.)"""
        winner = model.registered_players.get(model.winner_color) if model.winner_color else None
        return MatchResponse(
            match_id=match_id,
            variant=model.variant,
            mode=model.mode,
            status=model.status,
            players=model.registered_players,
            current_player_color=model.current_player_color,
            winner=winner,
            game_state=self._create_state_response(match_id, model),
        )

    def _create_state_response(self, match_id: UUID, model: MatchModel) -> GameStateResponse:
        state = model.state
        return GameStateResponse(
            match_id=match_id,
            board_state=state.board_state,
            dice=state.dice,
            available_moves=state.available_moves,
            turn_number=state.turn_number,
            phase=state.phase,
        )

    def _create_move_response(self, match_id: UUID, record: MoveRecord) -> MoveResponse:
        return MoveResponse(
            match_id=match_id,
            player_color=record.player_color,
            from_point=record.from_point,
            to_point=record.to_point,
            dice_value=record.dice_value,
            move_type=record.move_type.value,
            turn_number=record.turn_number,
            notation=f"{record.from_point}/{record.to_point}:{record.dice_value}",
        )


@contextmanager
def _log_rejection(action: str, match_id: UUID, player: str) -> Iterator[None]:
    """Log requests the domain refuses (then let the error propagate)."""
    try:
        yield
    except GameError as e:
        logger.warning("Rejected %s by %s in match %s: %s", action, player, match_id, e)
        raise
