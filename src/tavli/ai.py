"""
Computer opponent
----

Greedy, one move at a time: every legal move gets a score, the highest score is played.

Scoring (higher is better):
* bearing off: 100, plus the distance the checker still had to travel
* entering from the bar: 50, +30 if it hits, plus how close the entry point is to home
* any other move: 10, +50 for a hit, +20 for landing on an own point, +15 for moving forward,
  -10 for leaving a single checker behind on the source point
* Plakoto only: -5 for every opposing point 1-6 pips behind the destination (along the opponent's route)
"""

import logging
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from src.core.models import GameStateModel
from src.core.shared_types import Color, MoveType, Variant
from src.tavli.board import Board
from src.tavli.enumerator import legal_moves_for
from src.tavli.legality import classify_move
from src.tavli.moves import Move, MoveRecord, expand_dice
from src.tavli.points import BAR_POINT, OFF_POINT
from src.tavli.state import GameState, as_game_state
from src.tavli.variants import VariantLike, VariantRules, rules_for

logger = logging.getLogger(__name__)

BEAR_OFF_SCORE = 100
ENTER_SCORE = 50
ENTER_HIT_BONUS = 30
MOVE_SCORE = 10
HIT_BONUS = 50
MAKE_POINT_BONUS = 20
ADVANCE_BONUS = 15
BLOT_PENALTY = 10
THREAT_PENALTY = 5

# how far back (in pips) opposing checkers are considered a threat
THREAT_RANGE = range(1, 7)

DEFAULT_AI_COLOR = Color.BLACK


@dataclass(frozen=True)
class ScoredMove:
    move: Move
    move_type: MoveType
    score: int


def make_ai_move(
    game_state: GameState | GameStateModel,
    variant: VariantLike,
    match_id: Optional[UUID],
    ai_color: Color = DEFAULT_AI_COLOR,
) -> Optional[MoveRecord]:
    """Pick one move for the computer. None when there is nothing to play (or the state cannot be read)."""
    try:
        game_state = as_game_state(game_state)
        rules = rules_for(variant)
        candidates = score_moves(game_state.board, rules, ai_color, expand_dice(game_state.available_moves))
    except Exception as e:
        logger.debug("AI could not evaluate position for match %s: %s", match_id, e)
        return None

    if not candidates:
        return None

    # max() keeps the first of equally scored moves, i.e. enumeration order breaks ties
    best = max(candidates, key=lambda candidate: candidate.score)
    logger.debug("AI picked %s (score %d) out of %d moves", best.move.to_notation(), best.score, len(candidates))
    return MoveRecord(
        match_id=match_id,
        player_color=ai_color,
        from_point=best.move.from_point,
        to_point=best.move.to_point,
        dice_value=best.move.die,
        move_type=best.move_type,
        turn_number=game_state.turn_number,
    )


def score_moves(board: Board, rules: VariantRules, color: Color, dice: list[int]) -> list[ScoredMove]:
    return [
        ScoredMove(move, classify_move(board, move, rules), score_move(board, move, rules))
        for move in legal_moves_for(board, rules, color, dice)
    ]


def score_move(board: Board, move: Move, rules: VariantRules) -> int:
    route = rules.route(move.color)
    if move.to_point == OFF_POINT:
        return BEAR_OFF_SCORE + route.distance_to_off(move.from_point)

    hits = board.is_occupied_by_opponent(move.to_point, move.color)
    if move.from_point == BAR_POINT:
        score = ENTER_SCORE + (ENTER_HIT_BONUS if hits else 0)
        return score + route.progress_of(move.to_point)

    score = MOVE_SCORE
    if hits:
        score += HIT_BONUS
    if board.piece_count_at(move.to_point, move.color) > 0:
        score += MAKE_POINT_BONUS
    if route.advances(move.from_point, move.to_point):
        score += ADVANCE_BONUS
    if board.piece_count_at(move.from_point, move.color) == 2:
        score -= BLOT_PENALTY
    if rules.variant == Variant.PLAKOTO:
        score -= THREAT_PENALTY * count_threats(board, move.color, move.to_point, rules)
    return score


def count_threats(board: Board, color: Color, point: int, rules: VariantRules) -> int:
    """Opposing points from which an opponent could reach `point` with a single die."""
    opponent = color.opponent
    route = rules.route(opponent)
    threats = 0
    for distance in THREAT_RANGE:
        origin = route.point_behind(point, distance)
        if origin is not None and board.piece_count_at(origin, opponent) > 0:
            threats += 1
    return threats
