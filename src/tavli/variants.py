"""
Rules that differ per variant

Key idea: Use strategy pattern. Each variant answers the same small set of questions,
and a match looks its rules up once (`rules_for`) and passes them along explicitly.
"""

from typing import Optional

from src.core.exceptions import GameStateError
from src.core.shared_types import Color, Variant
from src.tavli.board import Board, starting_board
from src.tavli.moves import Move
from src.tavli.points import OFF_POINT, SAME_WAY_ROUTES, STANDARD_ROUTES, Route
from src.tavli.win import WIN_CHECKS

# Fevga forbids building a wall of this many consecutive points.
MAX_PRIME_LENGTH = 5


class VariantRules:
    """Just the parts of the rules that are variant specific"""

    variant: Variant
    routes: dict[Color, Route] = STANDARD_ROUTES

    def route(self, color: Color) -> Route:
        """Which way `color` travels: where it enters, where its home board is, and where it bears off."""
        return self.routes[color]

    def is_legal_destination(self, board: Board, move: Move) -> bool:
        """Can the checker land where the move takes it? (distance / bar / bear-off rules are checked elsewhere)"""
        if move.to_point == OFF_POINT:
            return True
        return not board.is_blocked(move.to_point, move.color, self.variant)

    def check_win(self, board: Board) -> Optional[Color]:
        return WIN_CHECKS[self.variant](board)

    def starting_board(self) -> Board:
        return starting_board(self.variant)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class PortesRules(VariantRules):
    """Portes: regular backgammon. A single opposing checker (a blot) can be hit."""

    variant = Variant.PORTES


class PlakotoRules(VariantRules):
    """Plakoto: no hitting. Any point occupied by the opponent is closed."""

    variant = Variant.PLAKOTO


class FevgaRules(VariantRules):
    """
    Fevga: both colors travel the same way round the board, from opposite corners.
    A single opposing checker can be hit (two or more block the point),
    but no player may ever hold six consecutive points.
    """

    variant = Variant.FEVGA
    routes = SAME_WAY_ROUTES

    def is_legal_destination(self, board: Board, move: Move) -> bool:
        if not super().is_legal_destination(board, move):
            return False
        return not self.creates_prime(board, move)

    def creates_prime(self, board: Board, move: Move) -> bool:
        """Play the move on a copy of the board and look for a run of 6+ consecutive points along the mover's route."""
        after = board.apply_hypothetical(move)
        return after.longest_run(move.color, self.route(move.color)) > MAX_PRIME_LENGTH


# -- STRATEGY PATTERN: VARIANT RULES ---
VARIANT_RULES: dict[Variant, VariantRules] = {
    Variant.PORTES: PortesRules(),
    Variant.PLAKOTO: PlakotoRules(),
    Variant.FEVGA: FevgaRules(),
}

VariantLike = Variant | str | VariantRules


def rules_for(variant: VariantLike) -> VariantRules:
    """Select the rules of a variant. Accepts the enum, its name ("plakoto"), or an already selected rules object."""
    if isinstance(variant, VariantRules):
        return variant
    try:
        return VARIANT_RULES[Variant(variant)]
    except ValueError as e:
        raise GameStateError(
            f"Unknown variant {variant!r}. Pick one from {','.join(v.value for v in Variant)}"
        ) from e
