from fastapi import APIRouter, Depends, HTTPException
from ..models.response import RankingsResponse, RankingEntryModel
from ..database import ChallengeStore, get_store
from ..core.errors import InternalError, NotFound
from ..core.ranking import aggregate_rankings
from ..logger import get_logger

logger = get_logger()
router = APIRouter()

@router.get("/rankings", response_model=RankingsResponse)
async def get_rankings(store: ChallengeStore = Depends(get_store)):
    """
    Rank players by the points summed over all of their logged books,
    highest total first.
    """
    try:
        rows = await store.fetch_point_rows()
        if not rows:
            logger.warning("No logged books to rank")
            raise NotFound("No rankings available")

        names = {player_id: player_name for player_id, player_name, _ in rows}
        rankings = aggregate_rankings(
            [(player_id, points) for player_id, _, points in rows], names
        )
        logger.info(f"Ranked {len(rankings)} players from {len(rows)} books")
        return RankingsResponse(
            rankings=[RankingEntryModel(**entry.to_dict()) for entry in rankings]
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error getting rankings: {e}")
        raise InternalError("Failed to get rankings")
