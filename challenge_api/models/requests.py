from pydantic import BaseModel, StrictFloat, StrictInt, StrictStr, validator
from typing import Any, Union

Number = Union[StrictInt, StrictFloat]

class SubmitBookRequest(BaseModel):
    player_id: Union[StrictInt, StrictStr]
    title: Any = None
    pages: Any = None
    year_published: Any = None
    completed: Any = None
    genre: Any = None
    rating: Any = None
    points: Any = None

    @validator('player_id')
    def validate_player_id(cls, v):
        if isinstance(v, str):
            if not v.strip():
                raise ValueError('player_id cannot be empty or whitespace')
            return v.strip()
        return v

class UpdateBookRequest(BaseModel):
    # Shapes are checked by the handler so the caller and ownership checks run first
    currentUserId: Any = None
    updatedBookData: Any = None

class CalculatePointsRequest(BaseModel):
    pages: Number
    year_published: Number
    # Passed to the scoring function unchanged
    completed: Any = None
    is_fiction: Any = None
    female_author: Any = None
    alphabet_bonus: Any = None
    genre_bonus: Any = None
    country_bonus: Any = None
    series_bonus: Any = None
    deduction: Any = None
