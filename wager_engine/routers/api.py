from typing import Any, Optional

from fastapi import APIRouter, Request
from pydantic import BaseModel

from wager_engine.core.engine import WagerEngine
from wager_engine.core.logger import get_logger

logger = get_logger("api")

router = APIRouter()

# ==================== Request Models ====================


class WagerRequest(BaseModel):
    # Everything optional so the engine reports missing fields itself
    game_type: Optional[Any] = None
    stake: Optional[Any] = None
    params: Optional[Any] = None


# ==================== Helpers ====================


def get_engine(request: Request) -> WagerEngine:
    return request.app.state.engine


# ==================== Game Endpoints ====================


@router.get("/games")
async def list_games(request: Request):
    """Games on offer with limits and payout tables."""
    return {"games": get_engine(request).catalog()}


@router.post("/wager")
def place_wager(request: Request, data: WagerRequest):
    # Sync handler: resolution never awaits, so it runs in the threadpool
    result = get_engine(request).resolve(data.model_dump())
    return result.to_dict()
