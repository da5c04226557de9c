"""Request and response models."""

from pydantic import BaseModel, Field

from deadline99.models.card import CardOption
from deadline99.models.enums import ErrorCode, PlayResult

__all__ = [
    "CardOptionRequest",
    "CreateGameRequest",
    "CreateGameResponse",
    "CreatePlayerRequest",
    "CreatePlayerResponse",
    "ErrorCode",
    "ErrorResponse",
    "GameBrief",
    "GameInfo",
    "GameListResponse",
    "PlayCardRequest",
    "PlayCardResponse",
    "PlayerActionRequest",
    "PlayerBrief",
    "PlayerInfo",
    "PlayerListResponse",
]


class CreatePlayerRequest(BaseModel):
    """Request to register a new player."""

    name: str | None = None


class CreatePlayerResponse(BaseModel):
    """Response for player registration."""

    player_id: str


class CreateGameRequest(BaseModel):
    """Request to create a new game."""

    name: str | None = None
    seed: int | None = Field(default=None, description="Seed for reproducible shuffles")


class CreateGameResponse(BaseModel):
    """Response for game creation."""

    game_id: str
    message: str = "Game created successfully"


class PlayerActionRequest(BaseModel):
    """Join, leave or start on behalf of a player."""

    player_id: str


class CardOptionRequest(BaseModel):
    """Choices for effect cards; only the field for the played rank is used."""

    rank_10_add: bool = False
    rank_queen_add: bool = False
    next_player: str | None = None
    draw_from_player: str | None = None
    swap_with_player: str | None = None

    def to_option(self) -> CardOption:
        """Convert to the domain value."""
        return CardOption(**self.model_dump())


class PlayCardRequest(BaseModel):
    """Request to play a card."""

    player_id: str
    hand_index: int
    option: CardOptionRequest | None = None


class PlayCardResponse(BaseModel):
    """Outcome of a play or leave."""

    result: PlayResult
    winner_id: str | None = None


class GameBrief(BaseModel):
    """Game summary for listings."""

    id: str
    name: str
    state: str
    player_count: int


class GameListResponse(BaseModel):
    """List of games."""

    games: list[GameBrief]
    count: int


class PlayerBrief(BaseModel):
    """Player information inside a game."""

    id: str
    name: str
    hand_card_count: int
    position: int


class PlayerListResponse(BaseModel):
    """Players seated in a game."""

    players: list[PlayerBrief]


class GameInfo(GameBrief):
    """Game information response."""

    score: int
    next_player_id: str | None
    direction: str
    winner_id: str | None
    deck_count: int
    discard_count: int
    players: list[PlayerBrief]


class PlayerInfo(BaseModel):
    """Player information response, including their hand."""

    id: str
    name: str
    game_id: str | None
    hand_card_count: int
    hand_cards: list[str]


class ErrorResponse(BaseModel):
    """Error response."""

    error: ErrorCode
    detail: str | None = None
