"""
Moves and dice.

A move is a single checker stepping a single die's distance. A turn is made up of up to four of them (doubles).
"""

import random
from dataclasses import dataclass
from typing import Callable, Optional, Self
from uuid import UUID

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Color, MoveType

# Injected source of randomness: returns a die value between 1 and 6.
DiceRoller = Callable[[], int]

DIE_FACES = range(1, 7)


@dataclass(frozen=True)
class Move:
    """basic definition of a move to be made"""

    color: Color
    from_point: int
    to_point: int
    die: int

    @classmethod
    def from_notation(cls, notation: str, color: Color) -> Self:
        """
        Notation:
        ---
        `<from>/<to>:<die>`

        examples:
        * "13/18:5": move a checker from point 13 to point 18 using a 5
        * "0/3:3": enter a (white) checker from the bar on point 3
        * "22/25:3": bear off the checker on point 22
        """
        try:
            points, die = notation.split(":")
            from_point, to_point = points.split("/")
            return cls(color, int(from_point), int(to_point), int(die))
        except ValueError as e:
            raise InvalidRequestError(f"Cannot interpret {notation!r} as a move.") from e

    def to_notation(self) -> str:
        return f"{self.from_point}/{self.to_point}:{self.die}"

    def key(self) -> tuple[int, int, int]:
        """Identity of the move regardless of who plays it (used for de-duplication)."""
        return self.from_point, self.to_point, self.die


@dataclass(frozen=True)
class MoveRecord:
    """A move that has been (or is about to be) played in a match, as it gets recorded in the history."""

    match_id: Optional[UUID]
    player_color: Color
    from_point: int
    to_point: int
    dice_value: int
    move_type: MoveType
    turn_number: int

    def as_move(self) -> Move:
        return Move(self.player_color, self.from_point, self.to_point, self.dice_value)


def default_roller() -> int:
    return random.randint(1, 6)


def roll_dice(roller: DiceRoller = default_roller) -> tuple[int, int]:
    """Two dice. The roller is injectable so tests (and replays) are deterministic."""
    return roller(), roller()


def expand_dice(dice: list[int] | tuple[int, ...]) -> list[int]:
    """A double can be played four times."""
    if len(dice) == 2 and dice[0] == dice[1]:
        return [dice[0]] * 4
    return list(dice)


def is_valid_die(value: int) -> bool:
    return value in DIE_FACES
