"""
End-of-game conditions.

A game of tavli normally ends when a player has borne off all fifteen checkers. Plakoto has one extra way to win.
"""

from typing import Callable, Optional

from src.core.shared_types import Color, Variant
from src.tavli.board import Board
from src.tavli.points import STANDARD_ROUTES
from src.tavli.state import GameState

# The point each color starts its Plakoto game on: the beginning of its route.
MOTHER_POINT: dict[Color, int] = {color: route.start for color, route in STANDARD_ROUTES.items()}

# white is checked first: should both colors be out of checkers (not a reachable position), white takes precedence.
WIN_CHECK_ORDER = (Color.WHITE, Color.BLACK)


def standard_winner(board: Board) -> Optional[Color]:
    """A color without checkers on points 0..24 has borne everything off."""
    for color in WIN_CHECK_ORDER:
        if board.checkers_in_play(color) == 0:
            return color
    return None


def holds_mother_point(board: Board, color: Color) -> bool:
    """Does `color` hold the opponent's mother point with at least 2 checkers, while the opponent waits on the bar?"""
    opponent = color.opponent
    return board.has_checkers_on_bar(opponent) and board.piece_count_at(MOTHER_POINT[opponent], color) >= 2


def plakoto_winner(board: Board) -> Optional[Color]:
    """
    Plakoto
    ---

    Besides bearing off, a player wins instantly when the opponent has a checker on the bar
    and cannot come back in because the opponent's own starting point is held.
    """
    winner = standard_winner(board)
    if winner is not None:
        return winner

    for color in WIN_CHECK_ORDER:
        if holds_mother_point(board, color):
            return color
    return None


WIN_CHECKS: dict[Variant, Callable[[Board], Optional[Color]]] = {
    Variant.PORTES: standard_winner,
    Variant.PLAKOTO: plakoto_winner,
    Variant.FEVGA: standard_winner,
}


def check_win(board: Board, variant: Variant | str) -> Optional[Color]:
    return WIN_CHECKS[Variant(variant)](board)


def check_win_condition(game_state: GameState, variant: Variant | str) -> Optional[Color]:
    """The winning color, or None while the game goes on."""
    return check_win(game_state.board, variant)
