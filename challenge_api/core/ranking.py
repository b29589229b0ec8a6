"""
Ranking aggregation and per-player reading statistics.

Points arrive from the store as numbers or as text, depending on how the
column was filled in. Everything is coerced with ``coerce_points`` before
summing; values that do not read as a finite number count as zero.
"""
import math
from decimal import Decimal
from collections import defaultdict
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from ..models.data import LoggedBook, Player, RankingEntry

Number = Union[int, float]

def coerce_points(value: Any) -> Number:
    """Convert a points value to a number, treating anything non-numeric as 0"""
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else 0
    if isinstance(value, Decimal):
        if not value.is_finite():
            return 0
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return 0
        return number if math.isfinite(number) else 0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    return number if math.isfinite(number) else 0

def aggregate_rankings(rows: Iterable[Tuple[Any, Any]],
                       names: Optional[Mapping[Any, str]] = None) -> List[RankingEntry]:
    """
    Sum points per player and rank the totals.

    ``rows`` are (player key, points) pairs. When ``names`` maps keys to
    display names, entries carry that name and the key as ``player_id``, so
    players sharing a name stay separate. Output is ordered by total
    descending; equal totals are ordered by name, then by key.
    """
    totals: Dict[Any, Number] = defaultdict(int)
    for player, points in rows:
        totals[player] += coerce_points(points)

    def display(key):
        return names.get(key, key) if names is not None else key

    ranked = sorted(totals.items(), key=lambda item: (str(display(item[0])), str(item[0])))
    ranked.sort(key=lambda item: item[1], reverse=True)
    return [
        RankingEntry(display(key), total, key if names is not None else None)
        for key, total in ranked
    ]

def summarize_friends(players: Iterable[Player], books: Iterable[LoggedBook]) -> List[Dict[str, Any]]:
    """Build the per-player challenge summary shown on the friends page"""
    books_by_owner: Dict[str, List[LoggedBook]] = defaultdict(list)
    for book in books:
        books_by_owner[str(book.player_id)].append(book)

    summaries = []
    for player in sorted(players, key=lambda p: str(p.name)):
        owned = books_by_owner.get(str(player.id), [])
        summaries.append(_summarize(player, owned))
    return summaries

def _summarize(player: Player, books: List[LoggedBook]) -> Dict[str, Any]:
    pages = sum(coerce_points(book.pages) for book in books)
    points = sum(coerce_points(book.points) for book in books)
    count = len(books)

    best_points = max(books, key=lambda b: coerce_points(b.points), default=None)
    rated = [book for book in books if book.rating is not None]
    best_rated = max(rated, key=lambda b: coerce_points(b.rating), default=None)

    return {
        'name': player.name,
        'pages': pages,
        'booksCounted': count,
        'booksCompleted': sum(1 for book in books if book.completed),
        'totalPoints': points,
        'avgBookLength': pages / count if count else 0,
        'avgPointsPerBook': points / count if count else 0,
        'highestPointBook': best_points.title if best_points else None,
        'highestPointBookValue': coerce_points(best_points.points) if best_points else None,
        'highestRatedBook': best_rated.title if best_rated else None,
        'highestRatedBookRating': coerce_points(best_rated.rating) if best_rated else None,
    }
