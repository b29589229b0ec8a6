from pydantic import BaseModel
from typing import Any, Dict, List, Literal, Optional, Union

class PlayersResponse(BaseModel):
    players: List[Dict[str, Any]]

class BooksResponse(BaseModel):
    books: List[Dict[str, Any]]

class SubmitBookResponse(BaseModel):
    message: str
    book: Dict[str, Any]

class MessageResponse(BaseModel):
    message: str

class RankingEntryModel(BaseModel):
    player_id: Any = None
    player_name: str
    total_points: Union[int, float]

class RankingsResponse(BaseModel):
    rankings: List[RankingEntryModel]

class PointsResponse(BaseModel):
    points: Optional[Union[int, float]]

class FriendsResponse(BaseModel):
    friends: List[Dict[str, Any]]

class HealthResponse(BaseModel):
    status: Literal["healthy"] = "healthy"
    uptime: float
    database: bool = False
