"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass, field
from typing import Optional

# Type aliases to make the models easier to read
CheckerColor = str
PlayerName = str
BoardPointData = dict[str, Optional[int | str]]


@dataclass
class GameStateModel:
    """Transport-safe snapshot of the board, dice, and phase. One is recorded after every roll and every move."""

    board_state: list[BoardPointData]
    dice: list[int]
    available_moves: list[int]
    turn_number: int
    phase: str


@dataclass
class MatchModel:
    """Transport-safe representation of a match used between API, Service, DB, and Game layers."""

    variant: str
    mode: str
    status: str
    registered_players: dict[CheckerColor, PlayerName]
    current_player_color: str
    winner_color: Optional[str]
    state: GameStateModel


@dataclass
class MoveModel:
    """A single checker movement as it gets recorded in the move history."""

    player_color: str
    from_point: int
    to_point: int
    dice_value: int
    move_type: str
    turn_number: int
    notation: str = field(init=False)

    def __post_init__(self):
        self.notation = f"{self.from_point}/{self.to_point}:{self.dice_value}"
