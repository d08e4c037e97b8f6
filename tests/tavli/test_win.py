"""Unit tests for src/tavli/win.py"""

import pytest

from src.core.shared_types import Color, Variant
from src.tavli.board import Board, starting_board
from src.tavli.points import BAR_POINT, OFF_POINT
from src.tavli.state import GameState
from src.tavli.win import check_win, check_win_condition, holds_mother_point


@pytest.mark.parametrize("variant", list(Variant))
def test_no_winner_at_the_start(variant: Variant) -> None:
    assert check_win(starting_board(variant), variant) is None


@pytest.mark.parametrize("variant", list(Variant))
def test_all_checkers_borne_off_wins(variant: Variant) -> None:
    board = Board.from_layout(white={OFF_POINT: 15}, black={5: 3, OFF_POINT: 12})
    assert check_win(board, variant) == Color.WHITE

    board = Board.from_layout(white={20: 1, OFF_POINT: 14}, black={OFF_POINT: 15})
    assert check_win(board, variant) == Color.BLACK


def test_empty_board_white_takes_precedence() -> None:
    assert check_win(Board.empty(), Variant.PORTES) == Color.WHITE
    assert check_win_condition(GameState(Board.empty()), "fevga") == Color.WHITE


def test_checker_on_the_bar_is_still_in_play() -> None:
    board = Board.from_layout(white={BAR_POINT: 1, OFF_POINT: 14}, black={5: 15})
    assert check_win(board, Variant.PORTES) is None


def test_plakoto_mother_point_win() -> None:
    """Black is on the bar while white holds black's starting point (24) with 2 checkers."""
    board = Board.from_layout(white={24: 2, 10: 13}, black={BAR_POINT: 1, 5: 14})
    assert holds_mother_point(board, Color.WHITE)
    assert check_win(board, Variant.PLAKOTO) == Color.WHITE
    assert check_win_condition(GameState(board), Variant.PLAKOTO) == Color.WHITE


def test_plakoto_mother_point_win_for_black() -> None:
    board = Board.from_layout(white={BAR_POINT: 1, 20: 14}, black={1: 3, 12: 12})
    assert check_win(board, Variant.PLAKOTO) == Color.BLACK


@pytest.mark.parametrize("variant", [Variant.PORTES, Variant.FEVGA])
def test_mother_point_rule_is_plakoto_only(variant: Variant) -> None:
    board = Board.from_layout(white={24: 2, 10: 13}, black={BAR_POINT: 1, 5: 14})
    assert check_win(board, variant) is None


@pytest.mark.parametrize(
    "white, black",
    [
        ({24: 1, 10: 14}, {BAR_POINT: 1, 5: 14}),  # a single checker does not hold the point
        ({24: 2, 10: 13}, {5: 15}),  # nobody on the bar
    ],
)
def test_no_mother_point_win(white: dict[int, int], black: dict[int, int]) -> None:
    assert check_win(Board.from_layout(white=white, black=black), Variant.PLAKOTO) is None
