"""API routes.

Handlers are plain functions: FastAPI runs them in its thread pool, and each
game operation blocks only on that game's lock.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from fastapi import APIRouter, HTTPException

from deadline99.api.responses import (
    CreateGameRequest,
    CreateGameResponse,
    CreatePlayerRequest,
    CreatePlayerResponse,
    ErrorResponse,
    GameInfo,
    GameListResponse,
    PlayCardRequest,
    PlayCardResponse,
    PlayerActionRequest,
    PlayerInfo,
    PlayerListResponse,
)
from deadline99.models.errors import GameError, GameInvariantError
from deadline99.repositories.game_registry import game_registry

logger = logging.getLogger(__name__)

router = APIRouter()


@contextmanager
def game_errors() -> Iterator[None]:
    """Turn game errors into HTTP errors carrying an ``ErrorResponse``."""
    try:
        yield
    except GameInvariantError as e:
        logger.exception("Broken game invariant")
        raise HTTPException(
            status_code=e.status_code,
            detail=ErrorResponse(error=e.code, detail=str(e)).model_dump(mode="json"),
        ) from e
    except GameError as e:
        raise HTTPException(
            status_code=e.status_code,
            detail=ErrorResponse(error=e.code, detail=str(e)).model_dump(mode="json"),
        ) from e


# ============================================
#  Players
# ============================================


@router.post("/players")
def create_player(request: CreatePlayerRequest) -> CreatePlayerResponse:
    """Register a new player."""
    with game_errors():
        player = game_registry.create_player(request.name)
    return CreatePlayerResponse(player_id=player.id)


@router.get("/players/{player_id}")
def get_player(player_id: str) -> PlayerInfo:
    """Get a player's details and hand."""
    with game_errors():
        return PlayerInfo(**game_registry.player_info(player_id))


# ============================================
#  Games
# ============================================


@router.post("/games")
def create_game(request: CreateGameRequest) -> CreateGameResponse:
    """Create a new game."""
    with game_errors():
        game = game_registry.create_game(request.name, seed=request.seed)
    return CreateGameResponse(game_id=game.id)


@router.get("/games")
def list_games() -> GameListResponse:
    """List every game the server knows about."""
    briefs = game_registry.game_briefs()
    return GameListResponse(games=briefs, count=len(briefs))


@router.get("/games/{game_id}")
def get_game(game_id: str) -> GameInfo:
    """Get game state.

    Args:
        game_id: Game identifier

    Returns:
        Consistent snapshot of the game

    """
    with game_errors():
        return GameInfo(**game_registry.game_info(game_id))


@router.get("/games/{game_id}/players")
def list_game_players(game_id: str) -> PlayerListResponse:
    """List the players seated in a game."""
    with game_errors():
        return PlayerListResponse(players=game_registry.players_in_game(game_id))


@router.post("/games/{game_id}/join")
def join_game(game_id: str, request: PlayerActionRequest) -> dict[str, str]:
    """Join a game that has not started yet."""
    with game_errors():
        game_registry.join_game(game_id, request.player_id)
    return {"status": "joined"}


@router.post("/games/{game_id}/leave")
def leave_game(game_id: str, request: PlayerActionRequest) -> PlayCardResponse:
    """Leave a game; leaving a started game forfeits it."""
    with game_errors():
        outcome = game_registry.leave_game(game_id, request.player_id)
    return PlayCardResponse(result=outcome.result, winner_id=outcome.winner_id)


@router.post("/games/{game_id}/start")
def start_game(game_id: str, request: PlayerActionRequest) -> dict[str, str]:
    """Start a game on behalf of one of its players."""
    with game_errors():
        game_registry.start_game(game_id, request.player_id)
    return {"status": "started"}


@router.post("/games/{game_id}/play")
def play_card(game_id: str, request: PlayCardRequest) -> PlayCardResponse:
    """Play a card from the current player's hand.

    Returns:
        OK for a normal turn, WIN or LOSE when the play decided the player's fate

    """
    option = request.option.to_option() if request.option else None
    with game_errors():
        outcome = game_registry.play_card(game_id, request.player_id, request.hand_index, option)
    return PlayCardResponse(result=outcome.result, winner_id=outcome.winner_id)
