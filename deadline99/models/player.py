"""Player model."""

from collections.abc import Iterable
from dataclasses import dataclass, field

from deadline99.constants import DEFAULT_PLAYER_NAME
from deadline99.models.card import Card


@dataclass
class Player:
    """Represents a player.

    Attributes:
        id: Unique player identifier
        name: Player's display name
        game_id: ID of the game they're in (None when not in a game)
        hand: Current cards in hand

    """

    id: str
    name: str = DEFAULT_PLAYER_NAME
    game_id: str | None = None
    hand: list[Card] = field(default_factory=list)

    def in_game(self) -> bool:
        """Check if player currently belongs to a game."""
        return self.game_id is not None

    def take_card(self, index: int) -> Card:
        """Remove and return the card at ``index``."""
        return self.hand.pop(index)

    def add_cards(self, cards: Iterable[Card]) -> None:
        """Add cards to player's hand."""
        self.hand.extend(cards)

    def clear_hand(self) -> list[Card]:
        """Empty the hand and return the surrendered cards."""
        cards, self.hand = self.hand, []
        return cards

    def __str__(self) -> str:
        """Return string representation."""
        return f"{self.name} ({len(self.hand)} cards)"
