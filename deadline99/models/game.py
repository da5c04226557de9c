"""Game model: the Deadline 99 turn state machine."""

import logging
import random
import threading
from dataclasses import dataclass, field
from typing import Any

from deadline99.constants import (
    CARDS_PER_TURN,
    DEADLINE_SCORE,
    DEFAULT_GAME_NAME,
    INITIAL_HAND_SIZE,
    MIN_PLAYERS,
    RANK_10_DELTA,
    RANK_QUEEN_DELTA,
)
from deadline99.models.card import SCORING_RANKS, Card, CardOption
from deadline99.models.deck import Deck
from deadline99.models.enums import GameState, PlayResult, Rank, TurnDirection
from deadline99.models.errors import (
    AlreadyJoinedError,
    GameFullError,
    InsufficientCardsError,
    InsufficientPlayersError,
    InvalidCardOptionError,
    InvalidHandIndexError,
    InvalidRankError,
    InvalidStateError,
    NotInGameError,
    NotYourTurnError,
)
from deadline99.models.player import Player

logger = logging.getLogger(__name__)

# Ranks whose effect needs a CardOption
OPTION_RANKS = frozenset({Rank.TEN, Rank.QUEEN, Rank.ACE, Rank.JACK, Rank.SEVEN})
PLAYABLE_RANKS = SCORING_RANKS | OPTION_RANKS | {Rank.KING, Rank.EIGHT}


@dataclass(frozen=True)
class PlayOutcome:
    """Result of a successful play or leave.

    Attributes:
        result: OK, or WIN / LOSE for the acting player
        winner_id: Sole survivor when the call finished the game

    """

    result: PlayResult = PlayResult.OK
    winner_id: str | None = None


@dataclass
class _Effect:
    """What a resolved card does to the rest of the turn."""

    score: int
    skip_draw: bool = False
    redirect_to: str | None = None


@dataclass
class Game:
    """Represents one Deadline 99 game.

    Players take turns playing a card; the card changes the running score or
    the turn order. A player whose card pushes the score past the deadline is
    eliminated and the last player standing wins.

    Every mutating operation holds ``lock`` for its whole duration, so no
    caller ever sees a half-applied play.

    Attributes:
        id: Unique game identifier
        name: Display name
        state: Current lifecycle state
        players: Roster in seating order
        score: Committed running score
        next_player_id: Player allowed to play next
        direction: Direction of the natural turn advance
        winner_id: Sole survivor once the game is finished
        rng: Random source for shuffling and Jack draws
        max_players: Roster capacity (None for unbounded)

    """

    id: str
    name: str = DEFAULT_GAME_NAME
    state: GameState = GameState.CREATED
    players: list[Player] = field(default_factory=list)
    score: int = 0
    next_player_id: str | None = None
    direction: TurnDirection = TurnDirection.CLOCKWISE
    winner_id: str | None = None
    rng: random.Random = field(default_factory=random.Random, repr=False)
    max_players: int | None = None
    deck: Deck = field(init=False, repr=False)
    lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        """Share the game's random source with its deck."""
        self.deck = Deck(self.rng)

    # ------------------------------------------------------------------
    # Roster helpers (caller holds the lock)
    # ------------------------------------------------------------------

    def get_player(self, player_id: str | None) -> Player | None:
        """Get a roster member by ID."""
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def _position(self, player_id: str) -> int:
        for i, player in enumerate(self.players):
            if player.id == player_id:
                return i
        raise NotInGameError(f"player {player_id} is not seated in game {self.id}")

    def _neighbour_id(self, position: int, roster_size: int) -> str:
        """Player one natural step away from ``position`` in the current direction."""
        step = self.direction.step
        return self.players[(position + step) % roster_size].id

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def join(self, player: Player) -> None:
        """Add a player to a game that has not started yet."""
        with self.lock:
            if self.state != GameState.CREATED:
                raise InvalidStateError("game already started")
            if player.in_game():
                raise AlreadyJoinedError(f"player {player.id} is in game {player.game_id}")
            if self.max_players is not None and len(self.players) >= self.max_players:
                raise GameFullError

            player.game_id = self.id
            player.hand = []
            self.players.append(player)
            logger.info("Game %s: player %s joined", self.id, player.name)

    def leave(self, player: Player) -> PlayOutcome:
        """Remove a player on their own request."""
        with self.lock:
            return self._leave(player)

    def _leave(self, player: Player) -> PlayOutcome:
        """Remove a player; the caller must already hold ``lock``."""
        if player.game_id != self.id:
            raise NotInGameError
        if self.state == GameState.FINISHED:
            raise InvalidStateError("game already finished")

        position = self._position(player.id)

        if self.state == GameState.CREATED:
            self.players.pop(position)
            player.game_id = None
            logger.info("Game %s: player %s left before start", self.id, player.name)
            return PlayOutcome()

        roster_size = len(self.players)
        if self.next_player_id == player.id and roster_size > 1:
            self.next_player_id = self._neighbour_id(position, roster_size)

        self.deck.discard(player.clear_hand())
        self.players.pop(position)
        player.game_id = None
        logger.info(
            "Game %s: player %s left, %d players remain", self.id, player.name, len(self.players)
        )

        winner = self._finish_if_sole_survivor()
        return PlayOutcome(PlayResult.LOSE, winner.id if winner else None)

    def _finish_if_sole_survivor(self) -> Player | None:
        """Finish the game once at most one player is left; return the winner."""
        if len(self.players) > 1:
            return None

        winner = self.players[0] if self.players else None
        if winner is not None:
            self.deck.discard(winner.clear_hand())
            winner.game_id = None
            self.winner_id = winner.id
            logger.info("Game %s: player %s won", self.id, winner.name)

        self.players = []
        self.next_player_id = None
        self.state = GameState.FINISHED
        logger.info("Game %s finished", self.id)
        return winner

    def start(self) -> None:
        """Build the deck, deal opening hands and hand the turn to the first player."""
        with self.lock:
            if self.state != GameState.CREATED:
                raise InvalidStateError("game already started")
            if len(self.players) < MIN_PLAYERS:
                raise InsufficientPlayersError(
                    f"need {MIN_PLAYERS} players, have {len(self.players)}"
                )

            self.deck.build(len(self.players))
            self.deck.shuffle()
            logger.debug("Game %s: built deck of %d cards", self.id, len(self.deck))

            for player in self.players:
                player.hand = self.deck.draw(INITIAL_HAND_SIZE)

            self.next_player_id = self.players[0].id
            self.state = GameState.STARTED
            logger.info("Game %s started with %d players", self.id, len(self.players))

    # ------------------------------------------------------------------
    # Playing a card
    # ------------------------------------------------------------------

    def play(
        self, player: Player, hand_index: int, option: CardOption | None = None
    ) -> PlayOutcome:
        """Play the card at ``hand_index`` from the current player's hand.

        Effect resolution, score commit, elimination check, draw and turn
        advance always happen in that order.

        Args:
            player: Player making the play
            hand_index: Index into the player's hand
            option: Choices for effect cards (Ten, Queen, Ace, Jack, Seven)

        Returns:
            OK for a normal turn, LOSE when the player is eliminated and WIN
            when the player is the last one left

        """
        with self.lock:
            if self.state != GameState.STARTED:
                raise InvalidStateError("game is not in progress")
            if player.id != self.next_player_id:
                raise NotYourTurnError

            if not player.hand:
                outcome = self._leave(player)
                logger.info("Game %s: player %s lost with an empty hand", self.id, player.name)
                return outcome

            if not 0 <= hand_index < len(player.hand):
                raise InvalidHandIndexError(f"hand index {hand_index} out of range")

            card = player.hand[hand_index]
            self._check_card(card, option)

            position = self._position(player.id)
            player.take_card(hand_index)
            self.deck.discard([card])
            logger.info("Game %s: player %s played %s", self.id, player.name, card)

            effect = self._resolve(player, card, option)
            candidate = max(effect.score, 0)

            if candidate > DEADLINE_SCORE:
                outcome = self._leave(player)
                logger.info(
                    "Game %s: player %s lost, score %d is beyond the deadline",
                    self.id,
                    player.name,
                    candidate,
                )
                return outcome

            self.score = candidate
            logger.info("Game %s: score is %d", self.id, self.score)

            if len(self.players) == 1:
                winner = self._finish_if_sole_survivor()
                return PlayOutcome(PlayResult.WIN, winner.id if winner else None)

            if effect.skip_draw:
                logger.debug("Game %s: player %s skipped draw", self.id, player.name)
            else:
                self._draw_after_play(player)

            if effect.redirect_to is not None:
                self.next_player_id = effect.redirect_to
            else:
                self.next_player_id = self._neighbour_id(position, len(self.players))
            logger.info("Game %s: next player is %s", self.id, self.next_player_id)

            return PlayOutcome()

    @staticmethod
    def _check_card(card: Card, option: CardOption | None) -> None:
        """Reject an unplayable card or a missing option before anything changes."""
        rank = card.rank
        if rank not in PLAYABLE_RANKS:
            raise InvalidRankError(f"{card} cannot be played")
        if rank not in OPTION_RANKS:
            return
        if option is None:
            raise InvalidCardOptionError(f"{card} needs a card option")

        target = {
            Rank.ACE: option.next_player,
            Rank.JACK: option.draw_from_player,
            Rank.SEVEN: option.swap_with_player,
        }
        if rank in target and not target[rank]:
            raise InvalidCardOptionError(f"{card} needs a target player")

    def _resolve(self, player: Player, card: Card, option: CardOption | None) -> _Effect:
        """Apply the card's effect and return the candidate score and turn flags."""
        rank = card.rank
        effect = _Effect(score=self.score)

        if rank in SCORING_RANKS:
            effect.score += card.score
        elif rank == Rank.TEN:
            effect.score += RANK_10_DELTA if option.rank_10_add else -RANK_10_DELTA
        elif rank == Rank.QUEEN:
            effect.score += RANK_QUEEN_DELTA if option.rank_queen_add else -RANK_QUEEN_DELTA
        elif rank == Rank.KING:
            effect.score = DEADLINE_SCORE
        elif rank == Rank.ACE:
            target = self.get_player(option.next_player)
            if target is not None:
                effect.redirect_to = target.id
        elif rank == Rank.EIGHT:
            self.direction = self.direction.reversed()
            logger.debug("Game %s: direction is now %s", self.id, self.direction.value)
        elif rank == Rank.JACK:
            target = self.get_player(option.draw_from_player)
            if target is not None and target.hand:
                taken = target.take_card(self.rng.randrange(len(target.hand)))
                player.add_cards([taken])
                logger.debug(
                    "Game %s: player %s took a card from %s", self.id, player.name, target.name
                )
            effect.skip_draw = True
        elif rank == Rank.SEVEN:
            target = self.get_player(option.swap_with_player)
            if target is not None:
                player.hand, target.hand = target.hand, player.hand
                logger.debug(
                    "Game %s: player %s swapped hands with %s", self.id, player.name, target.name
                )
            effect.skip_draw = True
        else:
            raise InvalidRankError(f"{card} has no effect")

        return effect

    def _draw_after_play(self, player: Player) -> None:
        try:
            drawn = self.deck.draw(CARDS_PER_TURN)
        except InsufficientCardsError:
            logger.exception("Game %s: player %s could not draw", self.id, player.name)
            return
        player.add_cards(drawn)
        logger.debug(
            "Game %s: player %s drew a card, %d left in deck", self.id, player.name, len(self.deck)
        )

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    def is_finished(self) -> bool:
        """Check if the game has finished."""
        with self.lock:
            return self.state == GameState.FINISHED

    def brief(self) -> dict[str, Any]:
        """Short summary for game listings."""
        with self.lock:
            return self._brief()

    def _brief(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "state": self.state.value,
            "player_count": len(self.players),
        }

    def snapshot(self) -> dict[str, Any]:
        """Consistent view of the whole game for polling clients."""
        with self.lock:
            return {
                **self._brief(),
                "score": self.score,
                "next_player_id": self.next_player_id,
                "direction": self.direction.value,
                "winner_id": self.winner_id,
                "deck_count": len(self.deck),
                "discard_count": len(self.deck.discard_pile),
                "players": self._player_briefs(),
            }

    def player_briefs(self) -> list[dict[str, Any]]:
        """Roster in seating order with hand sizes."""
        with self.lock:
            return self._player_briefs()

    def _player_briefs(self) -> list[dict[str, Any]]:
        return [
            {
                "id": p.id,
                "name": p.name,
                "hand_card_count": len(p.hand),
                "position": i,
            }
            for i, p in enumerate(self.players)
        ]

    def __str__(self) -> str:
        """Return string representation."""
        return (
            f"Game {self.name}: {len(self.players)} players, "
            f"score {self.score}, State: {self.state.value}"
        )
