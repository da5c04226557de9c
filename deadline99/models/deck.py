"""Deck model for shuffling, drawing and recycling cards."""

import logging
import math
import random
from collections.abc import Iterable

from deadline99.constants import PLAYERS_PER_DECK
from deadline99.models.card import Card, playable_deck
from deadline99.models.errors import InsufficientCardsError

logger = logging.getLogger(__name__)


class Deck:
    """
    A draw pile and a discard pile of Deadline 99 cards.

    One physical deck (minus every Two and both jokers, 48 cards) is used per
    two players, rounded up. Cards played or surrendered go to the discard
    pile; when a draw cannot be satisfied the discard pile is shuffled back
    into the draw pile.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        """Initialize an empty deck.

        Args:
            rng: Random source used for shuffling; a fresh one if omitted

        """
        self.rng = rng or random.Random()  # noqa: S311
        self.cards: list[Card] = []
        self.discard_pile: list[Card] = []

    @staticmethod
    def size_for(player_count: int) -> int:
        """Number of cards a deck built for ``player_count`` players holds."""
        return math.ceil(player_count / PLAYERS_PER_DECK) * len(playable_deck())

    def build(self, player_count: int) -> None:
        """Fill the draw pile for a roster of ``player_count`` players."""
        decks = math.ceil(player_count / PLAYERS_PER_DECK)
        self.cards = list(playable_deck()) * decks
        self.discard_pile = []

    def shuffle(self) -> None:
        """Shuffle the draw pile in place (Fisher-Yates)."""
        cards = self.cards
        n = len(cards)
        for i in range(n):
            j = self.rng.randrange(i, n)
            cards[i], cards[j] = cards[j], cards[i]

    def recycle(self) -> None:
        """Merge the discard pile into the draw pile and reshuffle."""
        logger.debug(
            "Recycling %d discarded cards into %d remaining",
            len(self.discard_pile),
            len(self.cards),
        )
        self.cards.extend(self.discard_pile)
        self.discard_pile = []
        self.shuffle()

    def draw(self, count: int = 1) -> list[Card]:
        """
        Remove and return the top ``count`` cards.

        Recycles the discard pile first when the draw pile is too small.

        Raises:
            InsufficientCardsError: if draw and discard piles together are too small

        """
        if len(self.cards) < count:
            self.recycle()

        if len(self.cards) < count:
            raise InsufficientCardsError(f"need {count} cards, only {len(self.cards)} left")

        drawn = self.cards[:count]
        del self.cards[:count]
        return drawn

    def discard(self, cards: Iterable[Card]) -> None:
        """Put cards on the discard pile."""
        self.discard_pile.extend(cards)

    def total(self) -> int:
        """Cards held by the deck across both piles."""
        return len(self.cards) + len(self.discard_pile)

    def __len__(self) -> int:
        """Return the size of the draw pile."""
        return len(self.cards)
