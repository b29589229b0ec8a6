import asyncio
import json
import asyncpg
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional, Tuple
from ..core.errors import StoreError
from ..models.data import LoggedBook, Player
from ..logger import get_logger

logger = get_logger()

BOOK_COLUMNS = LoggedBook.FIELDS
WRITABLE_BOOK_COLUMNS = tuple(column for column in BOOK_COLUMNS if column != 'id')
SCORING_ARGUMENTS = (
    'pages', 'year_published', 'completed', 'is_fiction', 'female_author',
    'alphabet_bonus', 'genre_bonus', 'country_bonus', 'series_bonus', 'deduction'
)

_BOOK_SELECT = ', '.join(BOOK_COLUMNS)
_STORE_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, asyncio.TimeoutError)

class ChallengeStore:
    """Queries against the players and logged_books tables"""

    def __init__(self, db_connection):
        self.db = db_connection

    @asynccontextmanager
    async def _connection(self):
        if self.db.pool is None:
            raise StoreError("Database pool is not initialized")
        try:
            async with self.db.pool.acquire() as conn:
                yield conn
        except _STORE_ERRORS as e:
            logger.error(f"Database error: {e}")
            raise StoreError(str(e)) from e

    async def fetch_players(self) -> List[Player]:
        """All players, ordered by name"""
        async with self._connection() as conn:
            rows = await conn.fetch('''
                SELECT id, name, email, total_points
                FROM players
                ORDER BY name
            ''')
        return [Player(row) for row in rows]

    async def fetch_books(self) -> List[LoggedBook]:
        """Every logged book, unfiltered"""
        async with self._connection() as conn:
            rows = await conn.fetch(f'''
                SELECT {_BOOK_SELECT}
                FROM logged_books
                ORDER BY id
            ''')
        return [LoggedBook(row) for row in rows]

    async def fetch_books_for_player(self, player_id: str) -> List[LoggedBook]:
        async with self._connection() as conn:
            rows = await conn.fetch(f'''
                SELECT {_BOOK_SELECT}
                FROM logged_books
                WHERE player_id::text = $1
                ORDER BY id
            ''', str(player_id))
        return [LoggedBook(row) for row in rows]

    async def fetch_books_for_player_name(self, player_name: str) -> List[LoggedBook]:
        select = ', '.join(f'b.{column}' for column in BOOK_COLUMNS)
        async with self._connection() as conn:
            rows = await conn.fetch(f'''
                SELECT {select}
                FROM logged_books b
                JOIN players p ON p.id = b.player_id
                WHERE p.name = $1
                ORDER BY b.id
            ''', player_name)
        return [LoggedBook(row) for row in rows]

    async def get_book(self, book_id: str) -> Optional[LoggedBook]:
        async with self._connection() as conn:
            row = await conn.fetchrow(f'''
                SELECT {_BOOK_SELECT}
                FROM logged_books
                WHERE id::text = $1
            ''', str(book_id))
        return LoggedBook(row) if row else None

    async def insert_book(self, fields: Dict[str, Any]) -> LoggedBook:
        """
        Insert a logged book with only the supplied columns and return the stored row.

        Values travel as one JSON document and Postgres casts them to the
        column types, so ``"324"`` lands in an integer column as 324.
        """
        columns = ', '.join(column for column in WRITABLE_BOOK_COLUMNS if column in fields)
        async with self._connection() as conn:
            row = await conn.fetchrow(f'''
                INSERT INTO logged_books ({columns})
                SELECT {columns}
                FROM jsonb_populate_record(NULL::logged_books, $1::jsonb)
                RETURNING {_BOOK_SELECT}
            ''', json.dumps(fields))
        return LoggedBook(row)

    async def update_book(self, book_id: str, changes: Dict[str, Any]) -> None:
        """Apply a partial update; column names must come from WRITABLE_BOOK_COLUMNS"""
        unknown = set(changes) - set(WRITABLE_BOOK_COLUMNS)
        if unknown:
            raise ValueError(f"Unknown book fields: {', '.join(sorted(unknown))}")
        columns = [column for column in WRITABLE_BOOK_COLUMNS if column in changes]
        assignments = ', '.join(f'{column} = r.{column}' for column in columns)
        async with self._connection() as conn:
            await conn.execute(f'''
                UPDATE logged_books
                SET {assignments}
                FROM jsonb_populate_record(NULL::logged_books, $2::jsonb) AS r
                WHERE logged_books.id::text = $1
            ''', str(book_id), json.dumps(changes))

    async def fetch_point_rows(self) -> List[Tuple[Any, str, Any]]:
        """Raw (player id, player name, points) rows, one per logged book"""
        async with self._connection() as conn:
            rows = await conn.fetch('''
                SELECT p.id AS player_id, p.name AS player_name, b.points
                FROM logged_books b
                JOIN players p ON p.id = b.player_id
            ''')
        return [(row['player_id'], row['player_name'], row['points']) for row in rows]

    async def calculate_points(self, arguments: Dict[str, Any]) -> Any:
        """Invoke the store's calculate_points function with named arguments"""
        names = [name for name in SCORING_ARGUMENTS if arguments.get(name) is not None]
        call = ', '.join(f'{name} => ${i}' for i, name in enumerate(names, start=1))
        async with self._connection() as conn:
            return await conn.fetchval(
                f'SELECT calculate_points({call})',
                *[arguments[name] for name in names]
            )
