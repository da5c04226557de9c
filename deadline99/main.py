"""FastAPI main application."""

import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from deadline99.api.routes import router
from deadline99.config import settings
from deadline99.repositories.game_registry import game_registry
from deadline99.services.cleanup_service import CleanupService

# Configure logging for the app (must be after imports but before app usage)
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stdout,
)
logging.getLogger("deadline99").setLevel(settings.log_level.upper())
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Lifespan context manager for startup and shutdown events.

    Starts the periodic sweep of finished games and stops it on shutdown.
    """
    app.state.cleanup_service = CleanupService(game_registry)
    await app.state.cleanup_service.start()
    logger.info(
        "Deadline 99 ready (max players: %d, max games: %d)",
        game_registry.max_players,
        game_registry.max_games,
    )

    yield

    await app.state.cleanup_service.stop()


# Create FastAPI app
app = FastAPI(
    title="Deadline 99 API",
    description="Elimination card game server: keep the score at or below 99",
    version="1.0.0",
    lifespan=lifespan,
)

app.include_router(router)


@app.get("/health")
def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


def main() -> None:
    """Run the application."""
    uvicorn.run(
        "deadline99.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.environment == "development",
        log_level="info",
    )


if __name__ == "__main__":
    main()
