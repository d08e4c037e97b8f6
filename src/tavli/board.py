"""The Board holds the checkers. It implements the predicates every rule needs to look at a position, and the one way to change it."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable, Optional

from src.core.exceptions import InvalidBoardError
from src.core.shared_types import Color, Variant
from src.tavli.moves import Move
from src.tavli.points import (
    BAR_POINT,
    FIRST_POINT,
    LAST_POINT,
    NUM_POINTS,
    OFF_POINT,
    SAME_WAY_ROUTES,
    STANDARD_ROUTES,
    BoardPoint,
    Route,
    is_on_circuit,
)

TRAY_POINTS = (BAR_POINT, OFF_POINT)


@dataclass(frozen=True)
class Tray:
    """Checkers of both colors on the bar, or borne off."""

    white: int = 0
    black: int = 0

    def __getitem__(self, color: Color) -> int:
        return self.white if color == Color.WHITE else self.black

    def add(self, color: Color, count: int = 1) -> Tray:
        if color == Color.WHITE:
            return replace(self, white=self.white + count)
        return replace(self, black=self.black + count)

    def items(self) -> list[tuple[Color, int]]:
        return [(Color.WHITE, self.white), (Color.BLACK, self.black)]


@dataclass(frozen=True)
class Board:
    """
    Immutable board position.
    ----

    * `circuit` holds points 1..24 (index 0 of the tuple is point 1). A point holds checkers of a single color.
    * the bar (point 0) and the off-board area (point 25) are trays that can hold checkers of both colors at once,
      so they are kept per color.

    Every change produces a new Board (see `apply_hypothetical`).
    Queries that depend on which way a color travels take its `Route`, and default to the Portes / Plakoto one.
    """

    circuit: tuple[BoardPoint, ...]
    bar: Tray = field(default_factory=Tray)
    off: Tray = field(default_factory=Tray)

    @classmethod
    def empty(cls) -> Board:
        return cls(tuple(BoardPoint.empty(p) for p in range(FIRST_POINT, LAST_POINT + 1)))

    @classmethod
    def from_layout(
        cls,
        white: Optional[dict[int, int]] = None,
        black: Optional[dict[int, int]] = None,
    ) -> Board:
        """Convenience constructor: {point: count} per color. Points 0 / 25 go to the bar / off tray."""
        points = [BoardPoint.empty(p) for p in range(NUM_POINTS)]
        bar = Tray()
        off = Tray()
        for color, layout in ((Color.WHITE, white or {}), (Color.BLACK, black or {})):
            for point, count in layout.items():
                if point == BAR_POINT:
                    bar = bar.add(color, count)
                elif point == OFF_POINT:
                    off = off.add(color, count)
                elif count > 0:
                    if points[point].count > 0:
                        raise InvalidBoardError(f"Point {point} cannot hold both colors.")
                    points[point] = BoardPoint(point, color, count)
        return cls(tuple(points[FIRST_POINT : LAST_POINT + 1]), bar, off)

    @classmethod
    def from_points(cls, points: Iterable[BoardPoint | dict]) -> Board:
        """
        Construct a board from its wire shape: a list of BoardPoints, one per point 0..25.

        The trays (0 and 25) may be listed once per color, since both colors can be on the bar / borne off at the same time.
        Anything else (missing points, a point listed twice, mixed colors, negative counts) is rejected.
        """
        circuit: dict[int, BoardPoint] = {}
        trays = {BAR_POINT: Tray(), OFF_POINT: Tray()}
        seen_trays: set[tuple[int, Optional[Color]]] = set()

        for raw in points:
            try:
                board_point = raw if isinstance(raw, BoardPoint) else BoardPoint.from_dict(raw)
            except (KeyError, TypeError, ValueError) as e:
                raise InvalidBoardError(f"Cannot read board point {raw!r}") from e
            if not board_point.is_valid():
                raise InvalidBoardError(f"Invalid board point: {board_point}")

            if board_point.point in TRAY_POINTS:
                key = (board_point.point, board_point.color)
                if key in seen_trays:
                    raise InvalidBoardError(f"Tray point {board_point.point} listed twice for {board_point.color}.")
                seen_trays.add(key)
                if board_point.color is not None:
                    trays[board_point.point] = trays[board_point.point].add(board_point.color, board_point.count)
                continue

            if board_point.point in circuit:
                raise InvalidBoardError(f"Point {board_point.point} listed twice.")
            circuit[board_point.point] = board_point

        missing_circuit = [p for p in range(FIRST_POINT, LAST_POINT + 1) if p not in circuit]
        missing_trays = [p for p in TRAY_POINTS if not any(key[0] == p for key in seen_trays)]
        if missing_circuit or missing_trays:
            raise InvalidBoardError(f"Board is missing points: {sorted(missing_circuit + missing_trays)}")

        return cls(tuple(circuit[p] for p in range(FIRST_POINT, LAST_POINT + 1)), trays[BAR_POINT], trays[OFF_POINT])

    def to_points(self) -> list[BoardPoint]:
        """Wire shape: 26 points, with an extra tray entry when both colors share the bar or the off-board area."""
        return self._tray_points(BAR_POINT, self.bar) + list(self.circuit) + self._tray_points(OFF_POINT, self.off)

    def to_dicts(self) -> list[dict]:
        return [board_point.to_dict() for board_point in self.to_points()]

    def _tray_points(self, point: int, tray: Tray) -> list[BoardPoint]:
        occupied = [BoardPoint(point, color, count) for color, count in tray.items() if count > 0]
        return occupied or [BoardPoint.empty(point)]

    # --- QUERIES ---
    def point(self, point: int) -> BoardPoint:
        """A circuit point (1..24)."""
        if not is_on_circuit(point):
            raise InvalidBoardError(f"Point {point} is not on the circuit.")
        return self.circuit[point - FIRST_POINT]

    def piece_count_at(self, point: int, color: Color) -> int:
        """Count of `color`'s checkers on `point`. 0 if empty or occupied by the other color."""
        if point == BAR_POINT:
            return self.bar[color]
        if point == OFF_POINT:
            return self.off[color]
        board_point = self.point(point)
        return board_point.count if board_point.color == color else 0

    def is_occupied_by_opponent(self, point: int, color: Color) -> bool:
        return is_on_circuit(point) and self.piece_count_at(point, color.opponent) > 0

    def is_blocked(self, point: int, color: Color, variant: Variant) -> bool:
        """
        Can `color` NOT land on `point`?
        ---

        * Two or more opposing checkers block a point in every variant.
        * In Plakoto a single opposing checker is already enough (there is no hitting).
        """
        opposing = self.piece_count_at(point, color.opponent) if is_on_circuit(point) else 0
        if variant == Variant.PLAKOTO:
            return opposing >= 1
        return opposing >= 2

    def has_checkers_on_bar(self, color: Color) -> bool:
        return self.bar[color] > 0

    def occupied_points(self, color: Color) -> list[int]:
        """Circuit points holding `color`'s checkers, in ascending order."""
        return [bp.point for bp in self.circuit if bp.color == color and bp.count > 0]

    def all_in_home_board(self, color: Color, route: Optional[Route] = None) -> bool:
        """Every checker of `color` on the circuit sits inside its home board (the trays do not count)."""
        home = (route or STANDARD_ROUTES[color]).home_board()
        return all(point in home for point in self.occupied_points(color))

    def furthest_from_home(self, color: Color, route: Optional[Route] = None) -> Optional[int]:
        """The occupied point furthest back along the color's route."""
        occupied = self.occupied_points(color)
        if not occupied:
            return None
        return min(occupied, key=(route or STANDARD_ROUTES[color]).progress_of)

    def checkers_in_play(self, color: Color) -> int:
        """Checkers on points 0..24 (bar + circuit)"""
        return self.bar[color] + sum(bp.count for bp in self.circuit if bp.color == color)

    def checker_total(self, color: Color) -> int:
        """Checkers on points 0..25. 15 for each color in a valid game."""
        return self.checkers_in_play(color) + self.off[color]

    def longest_run(self, color: Color, route: Optional[Route] = None) -> int:
        """Longest stretch of consecutive circuit points occupied by `color`, following the color's route."""
        longest = 0
        current = 0
        for point in (route or STANDARD_ROUTES[color]).points():
            if self.piece_count_at(point, color) > 0:
                current += 1
                longest = max(longest, current)
            else:
                current = 0
        return longest

    # --- UPDATES ---
    def apply_hypothetical(self, move: Move) -> Board:
        """
        Return the board after `move`. Never mutates this board.
        ---

        1. take the checker from its source (the bar or a circuit point)
        2. landing on a single opposing checker hits it: it goes to its owner's bar
        3. a move to point 25 bears the checker off
        """
        color = move.color
        circuit = list(self.circuit)
        bar = self.bar
        off = self.off

        if move.from_point == BAR_POINT:
            bar = bar.add(color, -1)
        else:
            source = circuit[move.from_point - FIRST_POINT]
            remaining = source.count - 1
            circuit[move.from_point - FIRST_POINT] = replace(
                source, count=remaining, color=source.color if remaining > 0 else None
            )

        if move.to_point == OFF_POINT:
            off = off.add(color)
        else:
            target = circuit[move.to_point - FIRST_POINT]
            if target.color == color.opponent and target.count > 0:
                # hit: the opposing checker is relocated, never removed
                bar = bar.add(color.opponent, target.count)
                target = BoardPoint.empty(target.point)
            circuit[move.to_point - FIRST_POINT] = BoardPoint(target.point, color, target.count + 1)

        return Board(tuple(circuit), bar, off)


# Each color starts at the beginning of its route: see STANDARD_ROUTES and SAME_WAY_ROUTES.
STARTING_LAYOUTS: dict[Variant, tuple[dict[int, int], dict[int, int]]] = {
    Variant.PORTES: ({1: 2, 12: 5, 17: 3, 19: 5}, {6: 5, 8: 3, 13: 5, 24: 2}),
    Variant.PLAKOTO: ({STANDARD_ROUTES[Color.WHITE].start: 15}, {STANDARD_ROUTES[Color.BLACK].start: 15}),
    Variant.FEVGA: ({SAME_WAY_ROUTES[Color.WHITE].start: 15}, {SAME_WAY_ROUTES[Color.BLACK].start: 15}),
}


def starting_board(variant: Variant) -> Board:
    white, black = STARTING_LAYOUTS[variant]
    return Board.from_layout(white=white, black=black)
