"""
Type definitions used across layers
"""

from enum import StrEnum


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self == Color.WHITE else Color.WHITE


class Variant(StrEnum):
    PORTES = "portes"
    PLAKOTO = "plakoto"
    FEVGA = "fevga"


class GameMode(StrEnum):
    AI = "ai"
    ONLINE = "online"
    PASS_AND_PLAY = "pass_and_play"


class MatchStatus(StrEnum):
    WAITING = "waiting"
    ACTIVE = "active"
    COMPLETED = "completed"
    ABANDONED = "abandoned"


class Phase(StrEnum):
    ROLLING = "rolling"
    MOVING = "moving"
    WAITING = "waiting"


class MoveType(StrEnum):
    MOVE = "move"
    BEAR_OFF = "bear_off"
    ENTER_FROM_BAR = "enter_from_bar"
    NAIL = "nail"
    BLOCKED = "blocked"
