from fastapi import APIRouter, Depends, HTTPException
from ..models.response import FriendsResponse
from ..database import ChallengeStore, get_store
from ..core.errors import InternalError
from ..core.ranking import summarize_friends
from ..logger import get_logger

logger = get_logger()
router = APIRouter()

@router.get("/friends", response_model=FriendsResponse)
async def list_friends(store: ChallengeStore = Depends(get_store)):
    """Per-player challenge summary: pages read, books, points and standout books."""
    try:
        players = await store.fetch_players()
        books = await store.fetch_books()
        return FriendsResponse(friends=summarize_friends(players, books))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error building friends summary: {e}")
        raise InternalError("Failed to fetch friends")
