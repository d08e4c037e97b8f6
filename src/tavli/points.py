"""
A point on the board, and the routes the colors travel along.

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from src.core.shared_types import Color

# 24 points on the circuit, plus the two trays: the bar (captured checkers) and the off-board area
BAR_POINT = 0
OFF_POINT = 25
FIRST_POINT = 1
LAST_POINT = 24
NUM_POINTS = 26

CHECKERS_PER_COLOR = 15
HOME_BOARD_SIZE = 6


@dataclass(frozen=True)
class BoardPoint:
    point: int
    color: Optional[Color]
    count: int

    @classmethod
    def empty(cls, point: int) -> BoardPoint:
        return cls(point, None, 0)

    @classmethod
    def from_dict(cls, data: dict) -> BoardPoint:
        """Wire format: {"point": 13, "color": "white", "count": 5}"""
        color = data.get("color")
        return cls(
            point=int(data["point"]),
            color=Color(color) if color is not None else None,
            count=int(data["count"]),
        )

    def to_dict(self) -> dict:
        return {
            "point": self.point,
            "color": self.color.value if self.color else None,
            "count": self.count,
        }

    def is_valid(self) -> bool:
        """count == 0 <=> no color"""
        if not (BAR_POINT <= self.point <= OFF_POINT) or self.count < 0:
            return False
        return (self.count == 0) == (self.color is None)


def is_on_circuit(point: int) -> bool:
    return FIRST_POINT <= point <= LAST_POINT


def is_within_bounds(point: int) -> bool:
    return BAR_POINT <= point <= OFF_POINT


@dataclass(frozen=True)
class Route:
    """
    The path a color's checkers travel around the circuit.
    ----

    Progress along a route counts 0 (the bar), then 1..24 (the circuit, from the starting point onward), then 25 (off).
    The route maps progress onto board points, so a rule reads the same for either color:

    * a checker entering from the bar with a die lands on progress `die`
    * a move adds the die to the progress; going past 24 bears the checker off
    * the home board is always the last six steps (progress 19..24)

    `start` is the board point at progress 1, `step` is +1 (increasing point numbers) or -1.
    A route that does not start at an end of the board wraps around from 24 to 1.
    """

    start: int
    step: int

    def point_at(self, progress: int) -> int:
        """Board point at the given progress (1..24)."""
        return (self.start - FIRST_POINT + self.step * (progress - 1)) % LAST_POINT + FIRST_POINT

    def progress_of(self, point: int) -> int:
        if point == BAR_POINT:
            return 0
        if point == OFF_POINT:
            return OFF_POINT
        return (self.step * (point - self.start)) % LAST_POINT + 1

    def entry_point(self, die: int) -> int:
        """Where a checker re-enters from the bar."""
        return self.point_at(die)

    def target_point(self, from_point: int, die: int) -> int:
        """Destination `die` pips further along the route. OFF_POINT once it runs past the end of the circuit."""
        progress = self.progress_of(from_point) + die
        if progress > LAST_POINT:
            return OFF_POINT
        return self.point_at(progress)

    def distance_to_off(self, point: int) -> int:
        """Pips a checker on the given point still has to travel before it can be borne off."""
        return OFF_POINT - self.progress_of(point)

    def point_behind(self, point: int, distance: int) -> Optional[int]:
        """The circuit point `distance` pips back along the route. None when that lies before the start."""
        progress = self.progress_of(point) - distance
        if progress < 1:
            return None
        return self.point_at(progress)

    def advances(self, from_point: int, to_point: int) -> bool:
        return self.progress_of(to_point) > self.progress_of(from_point)

    def points(self) -> list[int]:
        """Circuit points in travelling order."""
        return [self.point_at(progress) for progress in range(FIRST_POINT, LAST_POINT + 1)]

    def home_board(self) -> list[int]:
        return self.points()[-HOME_BOARD_SIZE:]


# Portes and Plakoto: the colors start at opposite ends and move towards each other.
# White travels 1 -> 24 and bears off from 19..24, black travels 24 -> 1 and bears off from 1..6
STANDARD_ROUTES: dict[Color, Route] = {
    Color.WHITE: Route(start=1, step=1),
    Color.BLACK: Route(start=24, step=-1),
}

# Fevga: both colors move the same way round the board, starting on opposite corners.
# Black travels 13 -> 24, carries on 1 -> 12 and bears off from 7..12
SAME_WAY_ROUTES: dict[Color, Route] = {
    Color.WHITE: Route(start=1, step=1),
    Color.BLACK: Route(start=13, step=1),
}
