"""
Snapshot of a match at one moment: the board, the dice, and which part of the turn we are in.

A GameState is never changed. Rolling the dice or moving a checker creates a new one,
so the full sequence of states can be stored as history.
"""

from dataclasses import dataclass, replace
from typing import Self

from src.core.exceptions import GameStateError
from src.core.models import GameStateModel
from src.core.shared_types import Phase
from src.tavli.board import Board
from src.tavli.moves import expand_dice


@dataclass(frozen=True)
class GameState:
    board: Board
    dice: tuple[int, ...] = ()
    available_moves: tuple[int, ...] = ()  # die values not yet played this turn
    turn_number: int = 1
    phase: Phase = Phase.ROLLING

    @classmethod
    def initial(cls, board: Board, phase: Phase = Phase.ROLLING) -> Self:
        return cls(board=board, phase=phase)

    @classmethod
    def from_model(cls, model: GameStateModel) -> Self:
        """Define how to construct a GameState from the information the Service layer actually has"""
        if model.phase not in Phase.__members__.values():
            raise GameStateError(
                f"Invalid phase: {model.phase!r}. \nPick one from {','.join(phase.value for phase in Phase)}"
            )
        return cls(
            board=Board.from_points(model.board_state),
            dice=tuple(model.dice),
            available_moves=tuple(model.available_moves),
            turn_number=model.turn_number,
            phase=Phase(model.phase),
        )

    def to_model(self) -> GameStateModel:
        """Encode back into a format the Service layer uses"""
        return GameStateModel(
            board_state=self.board.to_dicts(),
            dice=list(self.dice),
            available_moves=list(self.available_moves),
            turn_number=self.turn_number,
            phase=self.phase.value,
        )

    # --- TRANSITIONS (each returns a new state) ---
    def with_roll(self, dice: tuple[int, ...]) -> Self:
        return replace(self, dice=dice, available_moves=tuple(expand_dice(dice)), phase=Phase.MOVING)

    def after_move(self, board: Board, die: int) -> Self:
        """New board, one die fewer."""
        remaining = list(self.available_moves)
        remaining.remove(die)
        return replace(self, board=board, available_moves=tuple(remaining))

    def next_turn(self) -> Self:
        return replace(self, dice=(), available_moves=(), turn_number=self.turn_number + 1, phase=Phase.ROLLING)

    def with_phase(self, phase: Phase) -> Self:
        return replace(self, phase=phase)


def as_game_state(value: GameState | GameStateModel) -> GameState:
    """Rules entrypoints accept the transport model too (it gets validated here)."""
    if isinstance(value, GameState):
        return value
    return GameState.from_model(value)
