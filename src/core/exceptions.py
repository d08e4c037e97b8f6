"""
Custom exceptions.

Every error raised on purpose by the domain, service, or persistence layers derives from GameError,
so the (API) layer above can catch a single type and turn it into a readable response.
"""


class GameError(Exception):
    """Top-level exception for anything that went wrong while handling a match."""


class GameStateError(GameError):
    """The match is not in a state that allows the request (inactive match, wrong phase, ...)."""


class NotYourTurnError(GameError):
    """The player tried to act while it is the opponent's turn."""


class IllegalMoveError(GameError):
    """The requested move is not allowed by the rules of the variant."""


class InvalidBoardError(GameError):
    """Board data does not describe a structurally valid board (missing points, mixed colors, ...)."""


class InvalidRequestError(GameError):
    """Request data could not be interpreted."""


class RepositoryError(GameError):
    """Could not find / store a record."""
