"""
List every legal single-checker move for a color and a set of dice.

Candidates are generated per die value and then filtered through the same legality check used to validate requests,
so the two can never disagree.

Order of the result (callers such as the AI rely on it being stable), per die value, highest die first:
1. bar entries (when the color has checkers on the bar, nothing else is generated)
2. bear-offs
3. regular moves, per occupied point (ascending)
"""

import logging
from typing import Iterable

from src.core.models import GameStateModel
from src.core.shared_types import Color
from src.tavli.board import Board
from src.tavli.legality import is_legal_move
from src.tavli.moves import Move
from src.tavli.points import BAR_POINT, OFF_POINT, Route, is_on_circuit
from src.tavli.state import GameState, as_game_state
from src.tavli.variants import VariantLike, VariantRules, rules_for

logger = logging.getLogger(__name__)


def calculate_available_moves(
    game_state: GameState | GameStateModel, variant: VariantLike, color: Color, dice: Iterable[int]
) -> list[Move]:
    """All legal moves for `color`. An empty list if there are none, or if the input makes no sense."""
    try:
        return legal_moves_for(as_game_state(game_state).board, rules_for(variant), color, dice)
    except Exception as e:
        logger.debug("Could not enumerate moves for %s with dice %r: %s", color, dice, e)
        return []


def legal_move_notations(
    game_state: GameState | GameStateModel, variant: VariantLike, color: Color, dice: Iterable[int]
) -> list[str]:
    return [move.to_notation() for move in calculate_available_moves(game_state, variant, color, dice)]


def legal_moves_for(board: Board, rules: VariantRules, color: Color, dice: Iterable[int]) -> list[Move]:
    die_values = sorted(set(dice), reverse=True)
    route = rules.route(color)

    if board.has_checkers_on_bar(color):
        candidates = [Move(color, BAR_POINT, route.entry_point(die), die) for die in die_values]
    else:
        candidates = []
        for die in die_values:
            candidates += _bear_off_candidates(board, route, color, die)
            candidates += _regular_candidates(board, route, color, die)

    return _deduplicate(move for move in candidates if is_legal_move(board, move, rules))


def _bear_off_candidates(board: Board, route: Route, color: Color, die: int) -> list[Move]:
    """The exact point for this die, plus the furthest-back checker when the die is bigger than needed."""
    if not board.all_in_home_board(color, route):
        return []

    candidates = []
    exact = route.point_at(OFF_POINT - die)
    if board.piece_count_at(exact, color) > 0:
        candidates.append(Move(color, exact, OFF_POINT, die))

    furthest = board.furthest_from_home(color, route)
    if furthest is not None and route.distance_to_off(furthest) < die:
        candidates.append(Move(color, furthest, OFF_POINT, die))
    return candidates


def _regular_candidates(board: Board, route: Route, color: Color, die: int) -> list[Move]:
    moves = []
    for point in board.occupied_points(color):
        target = route.target_point(point, die)
        if is_on_circuit(target):
            moves.append(Move(color, point, target, die))
    return moves


def _deduplicate(moves: Iterable[Move]) -> list[Move]:
    seen: set[tuple[int, int, int]] = set()
    unique = []
    for move in moves:
        if move.key() not in seen:
            seen.add(move.key())
            unique.append(move)
    return unique
