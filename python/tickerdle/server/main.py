"""FastAPI application for the daily puzzle."""

from __future__ import annotations

import os
from typing import Optional

from fastapi import FastAPI
from loguru import logger

from tickerdle import __version__
from tickerdle.puzzle.errors import DataUnavailableError
from tickerdle.server.api.routers.game import create_game_router
from tickerdle.server.services.game_service import GameService

API_PREFIX: str = "/api/v1"


def create_app(service: Optional[GameService] = None) -> FastAPI:
    """Create the FastAPI app with the game router mounted."""
    service = service or GameService()
    app = FastAPI(title="Tickerdle", version=__version__)
    app.include_router(create_game_router(service), prefix=API_PREFIX)

    @app.get("/health", tags=["health"])
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    try:
        count = service.preload()
    except DataUnavailableError as exc:
        logger.error("Company data unavailable, guessing disabled: {error}", error=exc)
    else:
        logger.info(
            "Tickerdle API ready under {prefix} with {count} companies",
            prefix=API_PREFIX,
            count=count,
        )
    return app


def main() -> None:
    import uvicorn

    host = os.getenv("TICKERDLE_HOST", "127.0.0.1")
    port = int(os.getenv("TICKERDLE_PORT", "8000"))
    uvicorn.run(create_app(), host=host, port=port)


if __name__ == "__main__":
    main()
