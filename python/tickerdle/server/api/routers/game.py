"""Daily puzzle API router."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from tickerdle.puzzle.errors import DataUnavailableError
from tickerdle.puzzle.schemas import GameState, GuessResult
from tickerdle.server.api.schemas.base import SuccessResponse
from tickerdle.server.api.schemas.game import (
    DataAsOfData,
    GuessRequest,
    ShareData,
    SuggestionItem,
    SuggestionListData,
)
from tickerdle.server.services.game_service import GameService

DEFAULT_PLAYER_ID: str = "local"
PLAYER_ID_PATTERN: str = r"^[A-Za-z0-9_-]{1,64}$"

_REJECTION_STATUS: dict[str, int] = {
    "empty_input": 400,
    "no_match": 404,
    "invalid_state": 409,
    "duplicate_guess": 409,
}


def _unavailable(exc: DataUnavailableError) -> HTTPException:
    return HTTPException(
        status_code=503,
        detail={"code": exc.code, "message": exc.message},
    )


def create_game_router(service: GameService) -> APIRouter:
    """Create the daily puzzle router bound to ``service``."""
    router = APIRouter(
        prefix="/game",
        tags=["game"],
        responses={503: {"description": "Company data unavailable"}},
    )

    @router.get(
        "/today",
        response_model=SuccessResponse[GameState],
        summary="Get today's session",
        description="Get the player's session for today's puzzle with feedback.",
    )
    async def get_today(
        player_id: str = Query(
            DEFAULT_PLAYER_ID, pattern=PLAYER_ID_PATTERN, description="Player identifier"
        ),
    ) -> SuccessResponse[GameState]:
        try:
            state = service.get_state(player_id)
        except DataUnavailableError as exc:
            raise _unavailable(exc) from exc
        return SuccessResponse.create(data=state)

    @router.post(
        "/guess",
        response_model=SuccessResponse[GuessResult],
        summary="Submit a guess",
        description="Resolve the input to a company and record it as a guess.",
    )
    async def submit_guess(
        request: GuessRequest,
        player_id: str = Query(
            DEFAULT_PLAYER_ID, pattern=PLAYER_ID_PATTERN, description="Player identifier"
        ),
    ) -> SuccessResponse[GuessResult]:
        try:
            result = service.submit_guess(player_id, request.input)
        except DataUnavailableError as exc:
            raise _unavailable(exc) from exc
        if not result.accepted:
            raise HTTPException(
                status_code=_REJECTION_STATUS.get(result.error or "", 400),
                detail={"code": result.error, "message": result.message},
            )
        return SuccessResponse.create(data=result, msg="Guess recorded")

    @router.get(
        "/suggestions",
        response_model=SuccessResponse[SuggestionListData],
        summary="Autocomplete companies",
        description="Prefix matches first, then substring matches.",
    )
    async def get_suggestions(
        q: str = Query("", description="Partial company name or ticker"),
        limit: Optional[int] = Query(None, ge=1, le=50, description="Maximum results"),
        player_id: str = Query(
            DEFAULT_PLAYER_ID, pattern=PLAYER_ID_PATTERN, description="Player identifier"
        ),
    ) -> SuccessResponse[SuggestionListData]:
        try:
            entities = service.get_suggestions(player_id, q, limit)
        except DataUnavailableError as exc:
            raise _unavailable(exc) from exc
        return SuccessResponse.create(
            data=SuggestionListData(
                query=q,
                suggestions=[
                    SuggestionItem(ticker=entity.ticker, name=entity.name)
                    for entity in entities
                ],
            )
        )

    @router.get(
        "/share",
        response_model=SuccessResponse[ShareData],
        summary="Get share text",
        description="Get the emoji summary of a finished session.",
    )
    async def get_share(
        player_id: str = Query(
            DEFAULT_PLAYER_ID, pattern=PLAYER_ID_PATTERN, description="Player identifier"
        ),
    ) -> SuccessResponse[ShareData]:
        try:
            shared = service.get_share_text(player_id)
        except DataUnavailableError as exc:
            raise _unavailable(exc) from exc
        if shared is None:
            raise HTTPException(
                status_code=409,
                detail={
                    "code": "invalid_state",
                    "message": "Finish today's puzzle before sharing.",
                },
            )
        day, text = shared
        return SuccessResponse.create(data=ShareData(date=day, text=text))

    @router.get(
        "/data-asof",
        response_model=SuccessResponse[DataAsOfData],
        summary="Get data freshness",
        description="Get the metadata written by the market-data refresh job.",
    )
    async def get_data_asof() -> SuccessResponse[DataAsOfData]:
        try:
            count = len(service.index)
        except DataUnavailableError as exc:
            raise _unavailable(exc) from exc
        return SuccessResponse.create(
            data=DataAsOfData(data_asof=service.get_data_asof(), company_count=count)
        )

    return router
