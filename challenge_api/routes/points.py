from fastapi import APIRouter, Depends, HTTPException
from ..models.requests import CalculatePointsRequest
from ..models.response import PointsResponse
from ..models.data import to_plain
from ..database import ChallengeStore, get_store
from ..core.errors import InternalError
from ..logger import get_logger

logger = get_logger()
router = APIRouter()

@router.post("/calculate-points", response_model=PointsResponse)
async def calculate_points(data: CalculatePointsRequest, store: ChallengeStore = Depends(get_store)):
    """
    Score a book with the challenge's scoring function.

    - **pages**, **year_published**: Required numbers
    - **completed**, **is_fiction**, **female_author**, **alphabet_bonus**,
      **genre_bonus**, **country_bonus**, **series_bonus**, **deduction**:
      Optional scoring inputs
    """
    try:
        points = await store.calculate_points(data.dict())
        logger.info(f"Calculated {points} points for {data.pages} pages ({data.year_published})")
        return PointsResponse(points=to_plain(points))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error calculating points: {e}")
        raise InternalError("Failed to calculate points")
