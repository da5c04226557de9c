"""Card model and deck composition."""

from dataclasses import dataclass
from functools import cache

from deadline99.constants import CARDS_PER_SUIT, STANDARD_DECK_SIZE
from deadline99.models.enums import Rank, Suit

RED_JOKER_ORDINAL = 53
BLACK_JOKER_ORDINAL = 54

# Ranks that only move the score by their face value
SCORING_RANKS = frozenset({Rank.THREE, Rank.FOUR, Rank.FIVE, Rank.SIX, Rank.NINE})


@dataclass(frozen=True)
class Card:
    """A single physical card.

    Ordinals 1-52 cover Heart, Diamond, Club and Spade in blocks of 13
    (Ace..King); 53 and 54 are the red and black jokers. Everything else is
    derived from the ordinal.

    Attributes:
        ordinal: Card identifier in 1..54

    """

    ordinal: int

    def __post_init__(self) -> None:
        """Reject ordinals outside a standard deck."""
        if not 1 <= self.ordinal <= STANDARD_DECK_SIZE:
            raise ValueError(f"Invalid card ordinal: {self.ordinal}")

    @classmethod
    def from_suit_rank(cls, suit: Suit, rank: Rank | None = None) -> "Card":
        """Build a card from its suit and rank (rank is ignored for jokers)."""
        if suit == Suit.RED_JOKER:
            return cls(RED_JOKER_ORDINAL)
        if suit == Suit.BLACK_JOKER:
            return cls(BLACK_JOKER_ORDINAL)
        if rank is None:
            raise ValueError(f"{suit.label} cards need a rank")
        return cls((suit - 1) * CARDS_PER_SUIT + rank)

    @property
    def suit(self) -> Suit:
        """Suit derived from the ordinal."""
        if self.ordinal == RED_JOKER_ORDINAL:
            return Suit.RED_JOKER
        if self.ordinal == BLACK_JOKER_ORDINAL:
            return Suit.BLACK_JOKER
        return Suit((self.ordinal - 1) // CARDS_PER_SUIT + 1)

    @property
    def rank(self) -> Rank | None:
        """Rank derived from the ordinal, None for jokers."""
        if self.is_joker():
            return None
        return Rank((self.ordinal - 1) % CARDS_PER_SUIT + 1)

    @property
    def score(self) -> int:
        """Face value added to the running score, zero for effect cards."""
        if self.rank in SCORING_RANKS:
            return int(self.rank)
        return 0

    @property
    def name(self) -> str:
        """Human readable name, e.g. "Queen of Spade"."""
        if self.is_joker():
            return self.suit.label
        return f"{self.rank.label} of {self.suit.label}"

    def is_joker(self) -> bool:
        """Check if card is a joker."""
        return self.ordinal in (RED_JOKER_ORDINAL, BLACK_JOKER_ORDINAL)

    def is_blocked(self) -> bool:
        """Check if card is excluded from play (jokers and every Two)."""
        return self.is_joker() or self.rank == Rank.TWO

    def __str__(self) -> str:
        """Return string representation."""
        return self.name


@dataclass(frozen=True)
class CardOption:
    """Player choices for effect cards.

    Only the field matching the played rank is consulted.

    Attributes:
        rank_10_add: Ten adds 10 when True, subtracts 10 otherwise
        rank_queen_add: Queen adds 20 when True, subtracts 20 otherwise
        next_player: Ace hands the turn to this player
        draw_from_player: Jack takes a random card from this player
        swap_with_player: Seven swaps hands with this player

    """

    rank_10_add: bool = False
    rank_queen_add: bool = False
    next_player: str | None = None
    draw_from_player: str | None = None
    swap_with_player: str | None = None


@cache
def standard_deck() -> tuple[Card, ...]:
    """Return the 54 cards of one physical deck, in ordinal order."""
    return tuple(Card(ordinal) for ordinal in range(1, STANDARD_DECK_SIZE + 1))


@cache
def playable_deck() -> tuple[Card, ...]:
    """Return one deck without the blocked cards (48 cards)."""
    return tuple(card for card in standard_deck() if not card.is_blocked())
