"""In-memory registry of players and games."""

import logging
import os
import random
import threading
import time
from typing import Any

from deadline99.config import settings
from deadline99.constants import (
    DEFAULT_GAME_NAME,
    DEFAULT_PLAYER_NAME,
    GAME_ID_PREFIX,
    PLAYER_ID_PREFIX,
)
from deadline99.models.card import CardOption
from deadline99.models.errors import (
    GameNotFoundError,
    NotMemberError,
    PlayerNotFoundError,
    TooManyGamesError,
    TooManyPlayersError,
)
from deadline99.models.game import Game, PlayOutcome
from deadline99.models.player import Player

logger = logging.getLogger(__name__)


def random_id(prefix: str) -> str:
    """Build an opaque identifier: 8 bytes of timestamp plus 8 random bytes, hex encoded."""
    return prefix + time.time_ns().to_bytes(8, "little").hex() + os.urandom(8).hex()


class GameRegistry:
    """Maps identifiers to players and games.

    The registry lock only guards the identifier tables. Game operations are
    called after it is released, so a busy game never blocks lookups and the
    registry never waits on game logic.
    """

    def __init__(self, max_players: int | None = None, max_games: int | None = None) -> None:
        """Initialize an empty registry.

        Args:
            max_players: Player capacity (defaults to settings)
            max_games: Game capacity (defaults to settings)

        """
        self.max_players = max_players or settings.max_players
        self.max_games = max_games or settings.max_games
        self.players: dict[str, Player] = {}
        self.games: dict[str, Game] = {}
        self._lock = threading.Lock()
        # A player may only hold one membership, so joins are serialized
        self._join_lock = threading.Lock()

    # ------------------------------------------------------------------
    # Creation and lookup
    # ------------------------------------------------------------------

    def create_player(self, name: str | None = None) -> Player:
        """Register a new player.

        Raises:
            TooManyPlayersError: if the registry is at capacity

        """
        with self._lock:
            if len(self.players) >= self.max_players:
                raise TooManyPlayersError
            player = Player(id=random_id(PLAYER_ID_PREFIX), name=name or DEFAULT_PLAYER_NAME)
            self.players[player.id] = player

        logger.info("Created player %s (%s)", player.id, player.name)
        return player

    def create_game(self, name: str | None = None, seed: int | None = None) -> Game:
        """Register a new game.

        Args:
            name: Display name
            seed: Seed for the game's random source, for reproducible games

        Raises:
            TooManyGamesError: if the registry is at capacity

        """
        with self._lock:
            if len(self.games) >= self.max_games:
                raise TooManyGamesError
            game = Game(
                id=random_id(GAME_ID_PREFIX),
                name=name or DEFAULT_GAME_NAME,
                rng=random.Random(seed),  # noqa: S311
                max_players=settings.max_players_per_game,
            )
            self.games[game.id] = game

        logger.info("Created game %s (%s)", game.id, game.name)
        return game

    def get_player(self, player_id: str) -> Player:
        """Get a player by ID."""
        with self._lock:
            player = self.players.get(player_id)
        if player is None:
            raise PlayerNotFoundError(f"player {player_id} not found")
        return player

    def get_game(self, game_id: str) -> Game:
        """Get a game by ID."""
        with self._lock:
            game = self.games.get(game_id)
        if game is None:
            raise GameNotFoundError(f"game {game_id} not found")
        return game

    def _resolve(self, game_id: str, player_id: str) -> tuple[Game, Player]:
        return self.get_game(game_id), self.get_player(player_id)

    # ------------------------------------------------------------------
    # Game operations
    # ------------------------------------------------------------------

    def join_game(self, game_id: str, player_id: str) -> None:
        """Add a player to a game."""
        game, player = self._resolve(game_id, player_id)
        with self._join_lock:
            game.join(player)

    def leave_game(self, game_id: str, player_id: str) -> PlayOutcome:
        """Remove a player from a game."""
        game, player = self._resolve(game_id, player_id)
        return game.leave(player)

    def start_game(self, game_id: str, player_id: str) -> None:
        """Start a game on behalf of one of its members.

        Raises:
            NotMemberError: if the player is not in this game

        """
        game, player = self._resolve(game_id, player_id)
        if player.game_id != game.id:
            raise NotMemberError
        game.start()

    def play_card(
        self,
        game_id: str,
        player_id: str,
        hand_index: int,
        option: CardOption | None = None,
    ) -> PlayOutcome:
        """Play a card from a player's hand."""
        game, player = self._resolve(game_id, player_id)
        return game.play(player, hand_index, option)

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    def game_briefs(self) -> list[dict[str, Any]]:
        """Summaries of every registered game."""
        with self._lock:
            games = list(self.games.values())
        return [game.brief() for game in games]

    def game_info(self, game_id: str) -> dict[str, Any]:
        """Full view of one game."""
        return self.get_game(game_id).snapshot()

    def players_in_game(self, game_id: str) -> list[dict[str, Any]]:
        """Roster of one game."""
        return self.get_game(game_id).player_briefs()

    def player_info(self, player_id: str) -> dict[str, Any]:
        """Player details including hand card names.

        The hand is read under the lock of the player's game so it never
        reflects a half-applied play.
        """
        player = self.get_player(player_id)
        game_id = player.game_id
        with self._lock:
            game = self.games.get(game_id) if game_id else None

        if game is not None:
            with game.lock:
                hand = list(player.hand)
                game_id = player.game_id
        else:
            hand = list(player.hand)

        return {
            "id": player.id,
            "name": player.name,
            "game_id": game_id,
            "hand_card_count": len(hand),
            "hand_cards": [card.name for card in hand],
        }

    # ------------------------------------------------------------------
    # Cleanup
    # ------------------------------------------------------------------

    def sweep_finished(self) -> int:
        """Remove finished games.

        Each game's state is read under its own lock, so a game is only
        removed once the play or leave that finished it has returned.

        Returns:
            Number of games removed

        """
        with self._lock:
            games = list(self.games.values())

        finished = [game.id for game in games if game.is_finished()]
        if not finished:
            return 0

        with self._lock:
            for game_id in finished:
                self.games.pop(game_id, None)

        logger.info("Cleaned %d finished games", len(finished))
        return len(finished)


# Global registry instance
game_registry = GameRegistry()
