"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Color, GameMode, MatchStatus, Phase, Variant
from src.tavli.moves import is_valid_die
from src.tavli.points import BAR_POINT, OFF_POINT

CheckerColor = str
PlayerName = str


# --- REQUEST MODELS ---
class CreateMatchRequest(BaseModel):
    player_name: str
    variant: Variant = Variant.PORTES
    mode: GameMode = GameMode.ONLINE

    @field_validator("player_name")
    @classmethod
    def validate_player_name(cls, value: str) -> str:
        if not value.strip():
            raise InvalidRequestError("Player name cannot be empty.")
        return value.strip()


class JoinMatchRequest(BaseModel):
    match_id: UUID
    player_name: str


class GetMatchRequest(BaseModel):
    match_id: UUID


class MatchFilters(BaseModel):
    status: Optional[MatchStatus] = None
    variant: Optional[Variant] = None
    player_name: Optional[str] = None


class RollDiceRequest(BaseModel):
    match_id: UUID
    player_name: str


class LegalMovesRequest(BaseModel):
    match_id: UUID
    player_name: str


class MoveRequest(BaseModel):
    match_id: UUID
    player_name: str
    from_point: int
    to_point: int
    dice_value: int

    @field_validator(*["from_point", "to_point"])
    @classmethod
    def validate_point(cls, value: int) -> int:
        if not BAR_POINT <= value <= OFF_POINT:
            raise InvalidRequestError(
                f"Cannot interpret point: {value!r} as a point on the board ({BAR_POINT}..{OFF_POINT})."
            )
        return value

    @field_validator("dice_value")
    @classmethod
    def validate_dice_value(cls, value: int) -> int:
        if not is_valid_die(value):
            raise InvalidRequestError(f"Invalid dice value: {value!r}. A die shows 1..6.")
        return value


class NotationMoveRequest(BaseModel):
    """A move given as one of the identifiers listed in `LegalMovesResponse`, e.g. "13/18:5"."""

    match_id: UUID
    player_name: str
    notation: str


class AiMoveRequest(BaseModel):
    match_id: UUID


class AbandonMatchRequest(BaseModel):
    match_id: UUID
    player_name: str


class DeleteMatchRequest(BaseModel):
    match_id: UUID


# --- RESPONSE MODELS ---
class BoardPointResponse(BaseModel):
    point: int
    color: Optional[Color]
    count: int


class GameStateResponse(BaseModel):
    match_id: UUID
    board_state: list[BoardPointResponse]
    dice: list[int]
    available_moves: list[int]
    turn_number: int
    phase: Phase


class MatchResponse(BaseModel):
    match_id: UUID
    variant: Variant
    mode: GameMode
    status: MatchStatus
    players: dict[CheckerColor, PlayerName]
    current_player_color: Color
    winner: Optional[PlayerName]
    game_state: GameStateResponse


class LegalMovesResponse(BaseModel):
    match_id: UUID
    player_name: str
    color: Color
    legal_moves: list[str]


class MoveResponse(BaseModel):
    match_id: UUID
    player_color: Color
    from_point: int
    to_point: int
    dice_value: int
    move_type: str
    turn_number: int
    notation: str
