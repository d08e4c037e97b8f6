"""
The Match class is the entrypoint into the domain layer for the service layer.
It is responsible for orchestrating the business logic required to play a turn of tavli -->
roll, move checkers one die at a time, pass the turn, and decide when the match is over.
"""

from dataclasses import dataclass
from typing import Optional, Self

from src.core.exceptions import (
    GameStateError,
    IllegalMoveError,
    NotYourTurnError,
)
from src.core.models import MatchModel
from src.core.shared_types import Color, GameMode, MatchStatus, MoveType, Phase, Variant
from src.tavli.enumerator import legal_moves_for
from src.tavli.legality import classify_move, validate_move
from src.tavli.moves import DiceRoller, Move, MoveRecord, default_roller, is_valid_die, roll_dice
from src.tavli.points import is_within_bounds
from src.tavli.state import GameState
from src.tavli.variants import VariantRules, rules_for

FIRST_TO_MOVE = Color.WHITE


@dataclass
class Match:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    variant: Variant
    mode: GameMode
    status: MatchStatus
    players: dict[Color, str]
    current_color: Color
    winner: Optional[Color]
    state: GameState

    @classmethod
    def from_model(cls, model: MatchModel) -> Self:
        """Define how to construct a Match from the information the Service layer actually has"""

        # Validation
        for value, options in ((model.variant, Variant), (model.mode, GameMode), (model.status, MatchStatus)):
            if value not in options.__members__.values():
                raise GameStateError(
                    f"Invalid {options.__name__.lower()}: {value!r}. \nPick one from {','.join(o.value for o in options)}"
                )

        players = {
            color: model.registered_players[color.value]
            for color in Color
            if color.value in model.registered_players.keys()
        }
        return cls(
            variant=Variant(model.variant),
            mode=GameMode(model.mode),
            status=MatchStatus(model.status),
            players=players,
            current_color=Color(model.current_player_color),
            winner=Color(model.winner_color) if model.winner_color else None,
            state=GameState.from_model(model.state),
        )

    def to_model(self) -> MatchModel:
        """Encode back into a format the Service layer uses"""

        return MatchModel(
            variant=self.variant.value,
            mode=self.mode.value,
            status=self.status.value,
            registered_players={color.value: player for color, player in self.players.items()},
            current_player_color=self.current_color.value,
            winner_color=self.winner.value if self.winner else None,
            state=self.state.to_model(),
        )

    @classmethod
    def new_match(
        cls,
        player: str,
        variant: Variant | str = Variant.PORTES,
        mode: GameMode | str = GameMode.ONLINE,
        ai_player: str = "computer",
    ) -> Self:
        """
        Start a new match. The creator always plays white.
        ---

        * online: waits for a second player to join
        * ai: the computer plays black, the match starts right away
        * pass_and_play: one person plays both colors on the same device
        """
        if mode not in GameMode.__members__.values():
            raise GameStateError(
                f"Cannot create new match. Mode {mode} not in {','.join(m.value for m in GameMode)}."
            )
        rules = rules_for(variant)
        mode = GameMode(mode)

        players = {Color.WHITE: player}
        if mode == GameMode.AI:
            players[Color.BLACK] = ai_player
        elif mode == GameMode.PASS_AND_PLAY:
            players[Color.BLACK] = player

        waiting = mode == GameMode.ONLINE
        return cls(
            variant=rules.variant,
            mode=mode,
            status=MatchStatus.WAITING if waiting else MatchStatus.ACTIVE,
            players=players,
            current_color=FIRST_TO_MOVE,
            winner=None,
            state=GameState.initial(rules.starting_board(), Phase.WAITING if waiting else Phase.ROLLING),
        )

    @property
    def rules(self) -> VariantRules:
        return rules_for(self.variant)

    @property
    def current_player(self) -> Optional[str]:
        return self.players.get(self.current_color)

    @property
    def winner_name(self) -> Optional[str]:
        if self.winner is None:
            return None
        return self.players.get(self.winner)

    def register_player(self, player: str) -> None:
        """Registering the 2nd player to an open match"""
        if self.status != MatchStatus.WAITING:
            raise GameStateError(
                f"Cannot join this match. Match is not accepting new players. status: {self.status}"
            )
        if player in self.players.values():
            raise GameStateError(f"Cannot join this match. {player} is already playing in it.")

        open_color = Color.BLACK if Color.WHITE in self.players else Color.WHITE
        self.players[open_color] = player
        self.status = MatchStatus.ACTIVE
        self.state = self.state.with_phase(Phase.ROLLING)

    def roll(self, player: str, roller: DiceRoller = default_roller) -> tuple[int, int]:
        """
        Roll the dice for the player to move.
        ---

        If none of the rolled numbers can be played, the turn passes straight away.
        """
        self._assert_active()
        self._assert_your_turn(player)
        if self.state.phase != Phase.ROLLING:
            raise GameStateError(f"Cannot roll dice during this phase. phase: {self.state.phase}")

        dice = roll_dice(roller)
        self.state = self.state.with_roll(dice)
        if not self._has_legal_move():
            self._end_turn()
        return dice

    def legal_moves(self, player: str) -> list[str]:
        """
        Service will request the set of legal moves.
        ----

        Notations ("13/18:5") of every single-checker move the player can make with the dice that are left.
        """
        self._assert_active()
        self._assert_your_turn(player)
        if self.state.phase != Phase.MOVING:
            return []
        return [move.to_notation() for move in self._generate_legal_moves()]

    def play(self, player: str, from_point: int, to_point: int, dice_value: int) -> MoveRecord:
        """
        Attempt to move one checker
        -----

        1. check the match is active, it is your turn, and you have rolled
        2. check the die is still available and the move is legal
        3. update the board and use up the die
        4. decide whether the match is won, or whether the turn is over
        """
        self._assert_active()
        self._assert_your_turn(player)
        if self.state.phase != Phase.MOVING:
            raise GameStateError(f"Cannot make move during this phase. phase: {self.state.phase}")

        color = self.current_color
        if not is_valid_die(dice_value) or dice_value not in self.state.available_moves:
            raise IllegalMoveError(f"Invalid dice value: {dice_value}")
        if not is_within_bounds(from_point) or self.state.board.piece_count_at(from_point, color) == 0:
            raise IllegalMoveError(f"No pieces available at source point {from_point}")

        move = Move(color, from_point, to_point, dice_value)
        if not validate_move(move, self.state, self.rules):
            if classify_move(self.state.board, move, self.rules) == MoveType.BLOCKED:
                raise IllegalMoveError(f"Move is blocked by opponent pieces: {move.to_notation()}")
            raise IllegalMoveError(f"Move not allowed: {move.to_notation()}")

        # Store move info before update
        record = MoveRecord(
            match_id=None,
            player_color=color,
            from_point=from_point,
            to_point=to_point,
            dice_value=dice_value,
            move_type=classify_move(self.state.board, move, self.rules),
            turn_number=self.state.turn_number,
        )

        self.state = self.state.after_move(self.state.board.apply_hypothetical(move), dice_value)
        self._update_match_status()
        return record

    def play_notation(self, player: str, notation: str) -> MoveRecord:
        """Play a move given in notation ("13/18:5"), as listed by `legal_moves`."""
        move = Move.from_notation(notation, self.current_color)
        return self.play(player, move.from_point, move.to_point, move.die)

    def abandon(self, player: str) -> None:
        if player not in self.players.values():
            raise NotYourTurnError(f"{player} is not playing in this match.")
        if self.status in (MatchStatus.COMPLETED, MatchStatus.ABANDONED):
            raise GameStateError(f"Match is already over. status: {self.status}")
        self.status = MatchStatus.ABANDONED
        self.state = self.state.with_phase(Phase.WAITING)

    # --- HELPERS ---
    def _assert_active(self) -> None:
        if self.status != MatchStatus.ACTIVE:
            raise GameStateError(f"Match is not active. status: {self.status}")

    def _assert_your_turn(self, player: str) -> None:
        if self.current_player != player:
            raise NotYourTurnError(
                f"Not your turn. It is {self.current_player}'s turn ({self.current_color})."
            )

    def _generate_legal_moves(self) -> list[Move]:
        return legal_moves_for(self.state.board, self.rules, self.current_color, self.state.available_moves)

    def _has_legal_move(self) -> bool:
        return len(self._generate_legal_moves()) > 0

    def _update_match_status(self) -> None:
        winner = self.rules.check_win(self.state.board)
        if winner is not None:
            self.winner = winner
            self.status = MatchStatus.COMPLETED
            self.state = self.state.with_phase(Phase.WAITING)
        elif not self.state.available_moves or not self._has_legal_move():
            self._end_turn()

    def _end_turn(self) -> None:
        self.current_color = self.current_color.opponent
        self.state = self.state.next_turn()
