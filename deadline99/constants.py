"""Game constants for Deadline 99."""

# Scoring
DEADLINE_SCORE = 99
RANK_10_DELTA = 10
RANK_QUEEN_DELTA = 20

# Game limits
MIN_PLAYERS = 2
INITIAL_HAND_SIZE = 5
CARDS_PER_TURN = 1

# One physical deck is shared by this many players (rounded up)
PLAYERS_PER_DECK = 2

# Card ordinals
CARDS_PER_SUIT = 13
STANDARD_DECK_SIZE = 54

# Naming
DEFAULT_PLAYER_NAME = "Bravo Player"
DEFAULT_GAME_NAME = "Wonderful Game"
PLAYER_ID_PREFIX = "p-"
GAME_ID_PREFIX = "g-"
