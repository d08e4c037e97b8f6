"""
Is a single move legal?
----

A move is one checker moving the distance of one die. The checks, in order:

1. the die is one of the dice still available this turn
2. the points exist, and the source holds one of your checkers
3. checkers on the bar must come back in before anything else moves
4. the destination is exactly one die further along your route (or off the board, when bearing off is allowed)
5. the variant accepts the destination (hitting / blocking / primes)

Requests come from the outside world, so legality never raises: anything unexpected means "not legal".
"""

import logging
from typing import Optional

from src.core.models import GameStateModel
from src.core.shared_types import Color, MoveType
from src.tavli.board import Board
from src.tavli.moves import Move, is_valid_die
from src.tavli.points import BAR_POINT, OFF_POINT, STANDARD_ROUTES, Route, is_within_bounds
from src.tavli.state import GameState, as_game_state
from src.tavli.variants import VariantLike, VariantRules, rules_for

logger = logging.getLogger(__name__)


def validate_move(move: Move, game_state: GameState | GameStateModel, variant: VariantLike) -> bool:
    """Check a requested move against the current state of the match."""
    try:
        game_state = as_game_state(game_state)
        if move.die not in game_state.available_moves:
            return False
        return is_legal_move(game_state.board, move, rules_for(variant))
    except Exception as e:
        logger.debug("Rejecting move %r: %s", move, e)
        return False


def is_legal_move(board: Board, move: Move, rules: VariantRules) -> bool:
    """Legality of a move on a board, given the die is available. Shared by validation and move generation."""
    color = move.color
    route = rules.route(color)
    if not is_valid_die(move.die):
        return False

    if not (is_within_bounds(move.from_point) and is_within_bounds(move.to_point)):
        return False

    # nothing ever moves out of the off-board area, or back onto the bar
    if move.from_point == OFF_POINT or move.to_point == BAR_POINT:
        return False

    if board.piece_count_at(move.from_point, color) == 0:
        return False

    # bar priority
    if board.has_checkers_on_bar(color) and move.from_point != BAR_POINT:
        return False

    target = route.target_point(move.from_point, move.die)
    if target == OFF_POINT:
        if move.to_point != OFF_POINT or not can_bear_off(board, color, move.from_point, move.die, route):
            return False
    elif move.to_point != target:
        return False

    return rules.is_legal_destination(board, move)


def can_bear_off(board: Board, color: Color, from_point: int, die: int, route: Optional[Route] = None) -> bool:
    """
    Bearing off
    ---

    * only once all your checkers are in your home board
    * with the exact number (the distance from the point to the end of your route)
    * or with a higher number, but only from your furthest-back checker
    """
    route = route or STANDARD_ROUTES[color]
    if from_point == BAR_POINT or not board.all_in_home_board(color, route):
        return False

    distance = route.distance_to_off(from_point)
    if die == distance:
        return True
    return die > distance and from_point == board.furthest_from_home(color, route)


def classify_move(board: Board, move: Move, rules: VariantRules) -> MoveType:
    """Label a move for the history. A hit is labelled as such, even when it is a bar entry."""
    if move.to_point == OFF_POINT:
        return MoveType.BEAR_OFF
    if board.is_blocked(move.to_point, move.color, rules.variant):
        return MoveType.BLOCKED
    if board.is_occupied_by_opponent(move.to_point, move.color):
        return MoveType.NAIL
    if move.from_point == BAR_POINT:
        return MoveType.ENTER_FROM_BAR
    return MoveType.MOVE
