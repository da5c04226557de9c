"""Enums and constants for the game."""

from enum import Enum, IntEnum, StrEnum


class Suit(IntEnum):
    """Card suits, including the two jokers."""

    HEART = 1
    DIAMOND = 2
    CLUB = 3
    SPADE = 4
    RED_JOKER = 5
    BLACK_JOKER = 6

    @property
    def label(self) -> str:
        """Human readable suit name."""
        return self.name.replace("_", " ").title()


class Rank(IntEnum):
    """Card ranks, Ace low."""

    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13

    @property
    def label(self) -> str:
        """Human readable rank name."""
        return self.name.title()


class GameState(str, Enum):
    """Game states during the lifecycle."""

    CREATED = "CREATED"
    STARTED = "STARTED"
    FINISHED = "FINISHED"


class TurnDirection(str, Enum):
    """Direction the turn pointer moves around the roster."""

    CLOCKWISE = "CLOCKWISE"
    COUNTERCLOCKWISE = "COUNTERCLOCKWISE"

    @property
    def step(self) -> int:
        """Roster offset of one natural advance."""
        return 1 if self is TurnDirection.CLOCKWISE else -1

    def reversed(self) -> "TurnDirection":
        """Return the opposite direction."""
        if self is TurnDirection.CLOCKWISE:
            return TurnDirection.COUNTERCLOCKWISE
        return TurnDirection.CLOCKWISE


class PlayResult(str, Enum):
    """Outcome of a successful play or leave."""

    OK = "OK"
    WIN = "WIN"
    LOSE = "LOSE"


class ErrorCode(StrEnum):
    """Error codes for i18n translation on the frontend."""

    # Lookup errors
    GAME_NOT_FOUND = "error.gameNotFound"
    PLAYER_NOT_FOUND = "error.playerNotFound"

    # Capacity errors
    TOO_MANY_PLAYERS = "error.tooManyPlayers"
    TOO_MANY_GAMES = "error.tooManyGames"
    GAME_IS_FULL = "error.gameIsFull"

    # Game state errors
    INVALID_STATE = "error.invalidGameState"
    ALREADY_JOINED = "error.alreadyJoined"
    NOT_IN_GAME = "error.notInGame"
    NOT_MEMBER = "error.notMember"
    INSUFFICIENT_PLAYERS = "error.insufficientPlayers"
    NOT_YOUR_TURN = "error.notYourTurn"

    # Card errors
    INVALID_HAND_INDEX = "error.invalidHandIndex"
    INVALID_CARD_OPTION = "error.invalidCardOption"

    # Invariant violations
    INVALID_RANK = "error.invalidRank"
    INSUFFICIENT_CARDS = "error.insufficientCards"
