"""Unit tests for src/tavli/state.py"""

import pytest

from src.core.exceptions import GameStateError, InvalidBoardError
from src.core.models import GameStateModel
from src.core.shared_types import Phase, Variant
from src.tavli.board import Board, starting_board
from src.tavli.state import GameState, as_game_state


@pytest.fixture
def initial_state() -> GameState:
    return GameState.initial(starting_board(Variant.PLAKOTO))


def test_model_roundtrip(initial_state: GameState) -> None:
    rolled = initial_state.with_roll((6, 1))
    model = rolled.to_model()
    assert model.phase == "moving"
    assert model.dice == [6, 1]
    assert GameState.from_model(model) == rolled


def test_invalid_phase_is_rejected(initial_state: GameState) -> None:
    model = initial_state.to_model()
    model.phase = "napping"
    with pytest.raises(GameStateError):
        GameState.from_model(model)


def test_invalid_board_is_rejected() -> None:
    model = GameStateModel(board_state=[], dice=[], available_moves=[], turn_number=1, phase="rolling")
    with pytest.raises(InvalidBoardError):
        as_game_state(model)


def test_roll_expands_doubles(initial_state: GameState) -> None:
    rolled = initial_state.with_roll((4, 4))
    assert rolled.dice == (4, 4)
    assert rolled.available_moves == (4, 4, 4, 4)
    assert rolled.phase == Phase.MOVING


def test_after_move_uses_one_die(initial_state: GameState) -> None:
    rolled = initial_state.with_roll((4, 4))
    moved = rolled.after_move(Board.empty(), 4)
    assert moved.available_moves == (4, 4, 4)
    assert moved.board == Board.empty()
    # never mutated
    assert rolled.available_moves == (4, 4, 4, 4)


def test_next_turn(initial_state: GameState) -> None:
    following = initial_state.with_roll((2, 5)).next_turn()
    assert following.turn_number == 2
    assert following.dice == ()
    assert following.available_moves == ()
    assert following.phase == Phase.ROLLING


def test_state_is_hashable() -> None:
    state = GameState.initial(starting_board(Variant.PLAKOTO)).with_roll((3, 3))
    assert hash(state) == hash(GameState.initial(starting_board(Variant.PLAKOTO)).with_roll((3, 3)))
