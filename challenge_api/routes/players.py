from fastapi import APIRouter, Depends, HTTPException
from ..models.response import PlayersResponse
from ..database import ChallengeStore, get_store
from ..core.errors import InternalError
from ..logger import get_logger

logger = get_logger()
router = APIRouter()

@router.get("/players", response_model=PlayersResponse)
async def list_players(store: ChallengeStore = Depends(get_store)):
    """List every player in the challenge."""
    try:
        players = await store.fetch_players()
        logger.info(f"Retrieved {len(players)} players")
        return PlayersResponse(players=[player.to_dict() for player in players])
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching players: {e}")
        raise InternalError("Failed to fetch players")
