"""Game error hierarchy.

Every error carries an ``ErrorCode`` for the frontend and the HTTP status the
API layer answers with. Precondition and validation errors leave the game
untouched; ``GameInvariantError`` subclasses signal a defect and are logged.
"""

from deadline99.models.enums import ErrorCode


class GameError(Exception):
    """Base class for all game errors."""

    code: ErrorCode = ErrorCode.INVALID_STATE
    status_code: int = 409
    message: str = "game error"

    def __init__(self, detail: str | None = None) -> None:
        """Initialize with an optional detail message."""
        self.detail = detail
        super().__init__(detail or self.message)


class GameNotFoundError(GameError):
    code = ErrorCode.GAME_NOT_FOUND
    status_code = 404
    message = "game not found"


class PlayerNotFoundError(GameError):
    code = ErrorCode.PLAYER_NOT_FOUND
    status_code = 404
    message = "player not found"


class TooManyPlayersError(GameError):
    code = ErrorCode.TOO_MANY_PLAYERS
    status_code = 503
    message = "too many players"


class TooManyGamesError(GameError):
    code = ErrorCode.TOO_MANY_GAMES
    status_code = 503
    message = "too many games"


class GameFullError(GameError):
    code = ErrorCode.GAME_IS_FULL
    message = "game is full"


class InvalidStateError(GameError):
    code = ErrorCode.INVALID_STATE
    message = "invalid game state"


class AlreadyJoinedError(GameError):
    code = ErrorCode.ALREADY_JOINED
    message = "player already joined"


class NotInGameError(GameError):
    code = ErrorCode.NOT_IN_GAME
    message = "player not in this game"


class NotMemberError(GameError):
    code = ErrorCode.NOT_MEMBER
    status_code = 403
    message = "you are not in this game"


class InsufficientPlayersError(GameError):
    code = ErrorCode.INSUFFICIENT_PLAYERS
    message = "insufficient players"


class NotYourTurnError(GameError):
    code = ErrorCode.NOT_YOUR_TURN
    message = "you are not current player"


class InvalidHandIndexError(GameError):
    code = ErrorCode.INVALID_HAND_INDEX
    status_code = 422
    message = "invalid hand card"


class InvalidCardOptionError(GameError):
    code = ErrorCode.INVALID_CARD_OPTION
    status_code = 422
    message = "invalid card option"


class GameInvariantError(GameError):
    """A broken invariant: a programming or configuration defect."""

    status_code = 500


class InvalidRankError(GameInvariantError):
    code = ErrorCode.INVALID_RANK
    message = "invalid rank"


class InsufficientCardsError(GameInvariantError):
    code = ErrorCode.INSUFFICIENT_CARDS
    message = "insufficient cards"
