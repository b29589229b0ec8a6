from decimal import Decimal
from typing import Any, Mapping

def to_plain(value: Any) -> Any:
    # asyncpg returns NUMERIC columns as Decimal
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    return value

class Player:
    __slots__ = ('id', 'name', 'email', 'total_points')
    def __init__(self, data: Mapping[str, Any]):
        self.id = data['id']
        self.name = data['name']
        self.email = data.get('email')
        self.total_points = to_plain(data.get('total_points'))

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'total_points': self.total_points
        }

class LoggedBook:
    __slots__ = ('id', 'player_id', 'title', 'pages', 'year_published',
                 'completed', 'genre', 'rating', 'points')
    FIELDS = __slots__
    def __init__(self, data: Mapping[str, Any]):
        self.id = data['id']
        self.player_id = data['player_id']
        self.title = data.get('title')
        self.pages = to_plain(data.get('pages'))
        self.year_published = to_plain(data.get('year_published'))
        self.completed = data.get('completed')
        self.genre = data.get('genre')
        self.rating = to_plain(data.get('rating'))
        self.points = to_plain(data.get('points'))

    def is_owned_by(self, player_id: Any) -> bool:
        return str(self.player_id) == str(player_id)

    def to_dict(self):
        return {field: getattr(self, field) for field in self.FIELDS}


class RankingEntry:
    __slots__ = ('player_name', 'total_points', 'player_id')

    def __init__(self, player_name: str, total_points: float, player_id: Any = None):
        self.player_name = player_name
        self.total_points = total_points
        self.player_id = player_id

    def __eq__(self, other):
        if not isinstance(other, RankingEntry):
            return NotImplemented
        return ((self.player_name, self.total_points, self.player_id)
                == (other.player_name, other.total_points, other.player_id))

    def __repr__(self):
        return f"RankingEntry({self.player_name!r}, {self.total_points!r}, player_id={self.player_id!r})"

    def to_dict(self):
        return {
            'player_id': self.player_id,
            'player_name': self.player_name,
            'total_points': self.total_points
        }
