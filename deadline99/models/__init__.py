"""Game domain models."""

from deadline99.models.card import Card, CardOption, playable_deck, standard_deck
from deadline99.models.deck import Deck
from deadline99.models.enums import GameState, PlayResult, Rank, Suit, TurnDirection
from deadline99.models.game import Game, PlayOutcome
from deadline99.models.player import Player

__all__ = [
    "Card",
    "CardOption",
    "Deck",
    "Game",
    "GameState",
    "PlayOutcome",
    "PlayResult",
    "Player",
    "Rank",
    "Suit",
    "TurnDirection",
    "playable_deck",
    "standard_deck",
]
