"""Unit tests for src/tavli/board.py"""

import pytest

from src.core.exceptions import InvalidBoardError
from src.core.shared_types import Color, Variant
from src.tavli.board import Board, Tray, starting_board
from src.tavli.moves import Move
from src.tavli.points import BAR_POINT, OFF_POINT, SAME_WAY_ROUTES, BoardPoint


@pytest.fixture
def portes_board() -> Board:
    return starting_board(Variant.PORTES)


# --- CONSTRUCTION / WIRE SHAPE ---
@pytest.mark.parametrize("variant", list(Variant))
def test_starting_boards_hold_15_checkers_per_color(variant: Variant) -> None:
    board = starting_board(variant)
    assert board.checker_total(Color.WHITE) == 15
    assert board.checker_total(Color.BLACK) == 15
    assert not board.has_checkers_on_bar(Color.WHITE)


def test_portes_starting_layout(portes_board: Board) -> None:
    assert portes_board.piece_count_at(1, Color.WHITE) == 2
    assert portes_board.piece_count_at(12, Color.WHITE) == 5
    assert portes_board.piece_count_at(17, Color.WHITE) == 3
    assert portes_board.piece_count_at(19, Color.WHITE) == 5
    assert portes_board.piece_count_at(6, Color.BLACK) == 5
    assert portes_board.piece_count_at(8, Color.BLACK) == 3
    assert portes_board.piece_count_at(13, Color.BLACK) == 5
    assert portes_board.piece_count_at(24, Color.BLACK) == 2


def test_fevga_starts_on_opposite_corners() -> None:
    board = starting_board(Variant.FEVGA)
    assert board.piece_count_at(1, Color.WHITE) == 15
    assert board.piece_count_at(13, Color.BLACK) == 15


def test_board_is_hashable(portes_board: Board) -> None:
    assert hash(portes_board) == hash(starting_board(Variant.PORTES))
    assert len({portes_board, starting_board(Variant.PORTES), starting_board(Variant.FEVGA)}) == 2


def test_trays_cannot_be_changed_in_place(portes_board: Board) -> None:
    with pytest.raises(TypeError):
        portes_board.bar[Color.WHITE] = 3  # type: ignore[index]
    assert portes_board.bar.add(Color.WHITE, 3) == Tray(white=3)
    assert portes_board.bar == Tray()


def test_wire_shape_has_every_point(portes_board: Board) -> None:
    points = portes_board.to_points()
    assert len(points) == 26
    assert [p.point for p in points] == list(range(26))
    assert Board.from_points(points) == portes_board
    assert Board.from_points(portes_board.to_dicts()) == portes_board


def test_trays_can_hold_both_colors() -> None:
    board = Board.from_layout(white={BAR_POINT: 1, 10: 14}, black={BAR_POINT: 2, OFF_POINT: 3, 5: 10})
    points = board.to_points()
    bar_entries = [p for p in points if p.point == BAR_POINT]
    assert {(p.color, p.count) for p in bar_entries} == {(Color.WHITE, 1), (Color.BLACK, 2)}

    parsed = Board.from_points(points)
    assert parsed.bar == Tray(white=1, black=2)
    assert parsed.off == Tray(white=0, black=3)


def test_from_points_rejects_empty_list() -> None:
    with pytest.raises(InvalidBoardError):
        Board.from_points([])


def test_from_points_rejects_missing_point(portes_board: Board) -> None:
    points = [p for p in portes_board.to_points() if p.point != 7]
    with pytest.raises(InvalidBoardError, match="missing"):
        Board.from_points(points)


def test_from_points_rejects_duplicate_point(portes_board: Board) -> None:
    points = portes_board.to_points() + [BoardPoint.empty(7)]
    with pytest.raises(InvalidBoardError, match="twice"):
        Board.from_points(points)


@pytest.mark.parametrize(
    "raw",
    [
        {"point": 7, "color": None, "count": 3},
        {"point": 7, "color": "green", "count": 3},
        {"point": 7, "count": 3},
        {"point": "seven", "color": "white", "count": 3},
    ],
)
def test_from_points_rejects_malformed_points(raw: dict) -> None:
    points = [p.to_dict() for p in Board.empty().to_points() if p.point != 7] + [raw]
    with pytest.raises(InvalidBoardError):
        Board.from_points(points)


def test_from_layout_rejects_shared_point() -> None:
    with pytest.raises(InvalidBoardError):
        Board.from_layout(white={5: 1}, black={5: 1})


# --- QUERIES ---
def test_piece_count_at_other_color_is_zero(portes_board: Board) -> None:
    assert portes_board.piece_count_at(1, Color.BLACK) == 0
    assert portes_board.piece_count_at(2, Color.WHITE) == 0


def test_is_occupied_by_opponent(portes_board: Board) -> None:
    assert portes_board.is_occupied_by_opponent(6, Color.WHITE)
    assert not portes_board.is_occupied_by_opponent(1, Color.WHITE)
    assert not portes_board.is_occupied_by_opponent(OFF_POINT, Color.WHITE)


@pytest.mark.parametrize(
    "variant, black_count, blocked",
    [
        (Variant.PORTES, 1, False),
        (Variant.PORTES, 2, True),
        (Variant.FEVGA, 1, False),
        (Variant.FEVGA, 2, True),
        (Variant.PLAKOTO, 1, True),
        (Variant.PLAKOTO, 2, True),
    ],
)
def test_is_blocked(variant: Variant, black_count: int, blocked: bool) -> None:
    board = Board.from_layout(white={1: 15}, black={10: black_count})
    assert board.is_blocked(10, Color.WHITE, variant) is blocked
    assert not board.is_blocked(11, Color.WHITE, variant)


def test_all_in_home_board() -> None:
    board = Board.from_layout(white={19: 5, 24: 5, OFF_POINT: 5}, black={18: 2, 1: 13})
    assert board.all_in_home_board(Color.WHITE)
    assert not board.all_in_home_board(Color.BLACK)


def test_all_in_home_ignores_the_trays() -> None:
    board = Board.from_layout(black={BAR_POINT: 1, 3: 14})
    assert board.all_in_home_board(Color.BLACK)


def test_fevga_home_board_follows_the_route() -> None:
    route = SAME_WAY_ROUTES[Color.BLACK]
    board = Board.from_layout(white={20: 15}, black={7: 5, 12: 10})
    assert board.all_in_home_board(Color.BLACK, route)
    assert not board.all_in_home_board(Color.BLACK)
    assert not Board.from_layout(black={2: 1, 7: 14}).all_in_home_board(Color.BLACK, route)


def test_furthest_from_home() -> None:
    board = Board.from_layout(white={20: 1, 23: 2}, black={2: 1, 5: 1})
    assert board.furthest_from_home(Color.WHITE) == 20
    assert board.furthest_from_home(Color.BLACK) == 5
    assert Board.empty().furthest_from_home(Color.WHITE) is None


def test_longest_run() -> None:
    board = Board.from_layout(white={3: 2, 4: 2, 5: 1, 7: 2, 8: 2}, black={6: 2})
    assert board.longest_run(Color.WHITE) == 3
    assert board.longest_run(Color.BLACK) == 1


def test_fevga_furthest_from_home_and_runs_follow_the_route() -> None:
    route = SAME_WAY_ROUTES[Color.BLACK]
    board = Board.from_layout(black={23: 2, 24: 2, 1: 2, 2: 2, 9: 7})
    assert board.furthest_from_home(Color.BLACK, route) == 23
    assert board.longest_run(Color.BLACK, route) == 4
    assert board.longest_run(Color.BLACK) == 2


# --- UPDATES ---
def test_apply_hypothetical_never_mutates(portes_board: Board) -> None:
    before = portes_board.to_dicts()
    after = portes_board.apply_hypothetical(Move(Color.WHITE, 1, 4, 3))
    assert portes_board.to_dicts() == before
    assert after.piece_count_at(1, Color.WHITE) == 1
    assert after.piece_count_at(4, Color.WHITE) == 1


def test_apply_hypothetical_empties_source() -> None:
    board = Board.from_layout(white={10: 1})
    after = board.apply_hypothetical(Move(Color.WHITE, 10, 12, 2))
    assert after.point(10) == BoardPoint.empty(10)


def test_hit_sends_blot_to_its_own_bar() -> None:
    board = Board.from_layout(white={10: 2}, black={13: 1})
    after = board.apply_hypothetical(Move(Color.WHITE, 10, 13, 3))
    assert after.piece_count_at(13, Color.WHITE) == 1
    assert after.piece_count_at(13, Color.BLACK) == 0
    assert after.bar[Color.BLACK] == 1
    assert after.checker_total(Color.BLACK) == 1


def test_enter_from_bar_and_bear_off() -> None:
    board = Board.from_layout(white={BAR_POINT: 1, 22: 1})
    entered = board.apply_hypothetical(Move(Color.WHITE, BAR_POINT, 3, 3))
    assert entered.bar[Color.WHITE] == 0
    assert entered.piece_count_at(3, Color.WHITE) == 1

    borne_off = entered.apply_hypothetical(Move(Color.WHITE, 22, OFF_POINT, 3))
    assert borne_off.off[Color.WHITE] == 1
    assert borne_off.checkers_in_play(Color.WHITE) == 1
