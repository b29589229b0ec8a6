import asyncio
import json
from types import SimpleNamespace

import pytest

from challenge_api.core.errors import StoreError
from challenge_api.database.challenge_store import ChallengeStore


class FakeConnection:
    """Records every query and replays canned results"""

    def __init__(self, rows=None, row=None, value=None, error=None):
        self.rows = rows or []
        self.row = row
        self.value = value
        self.error = error
        self.calls = []

    def _record(self, method, query, args):
        self.calls.append((method, " ".join(query.split()), args))
        if self.error:
            raise self.error

    async def fetch(self, query, *args):
        self._record('fetch', query, args)
        return self.rows

    async def fetchrow(self, query, *args):
        self._record('fetchrow', query, args)
        return self.row

    async def fetchval(self, query, *args):
        self._record('fetchval', query, args)
        return self.value

    async def execute(self, query, *args):
        self._record('execute', query, args)
        return "UPDATE 1"


class FakePool:
    def __init__(self, conn):
        self.conn = conn

    def acquire(self):
        return self

    async def __aenter__(self):
        return self.conn

    async def __aexit__(self, *exc_info):
        return False


def make_store(conn):
    return ChallengeStore(SimpleNamespace(pool=FakePool(conn)))


BOOK_ROW = {'id': 7, 'player_id': 1, 'title': 'Dune', 'pages': 412, 'year_published': 1965,
            'completed': True, 'genre': 'sci-fi', 'rating': 5, 'points': 10}


def test_fetch_books_for_player_compares_as_text():
    conn = FakeConnection(rows=[BOOK_ROW])
    books = asyncio.run(make_store(conn).fetch_books_for_player(1))

    assert [book.title for book in books] == ['Dune']
    method, query, args = conn.calls[0]
    assert "WHERE player_id::text = $1" in query
    assert args == ("1",)


def test_get_book_missing_returns_none():
    conn = FakeConnection(row=None)
    assert asyncio.run(make_store(conn).get_book("42")) is None


def test_insert_book_lets_the_database_cast_values():
    conn = FakeConnection(row=BOOK_ROW)
    book = asyncio.run(make_store(conn).insert_book({'player_id': 1, 'title': 'Dune', 'pages': '412'}))

    assert book.id == 7
    assert book.pages == 412
    _, query, args = conn.calls[0]
    assert "INSERT INTO logged_books (player_id, title, pages) SELECT player_id, title, pages" in query
    assert "FROM jsonb_populate_record(NULL::logged_books, $1::jsonb)" in query
    assert json.loads(args[0]) == {'player_id': 1, 'title': 'Dune', 'pages': '412'}


def test_update_book_builds_assignments():
    conn = FakeConnection()
    asyncio.run(make_store(conn).update_book("7", {'rating': '4', 'title': 'Dune Messiah'}))

    _, query, args = conn.calls[0]
    assert "SET title = r.title, rating = r.rating" in query
    assert "FROM jsonb_populate_record(NULL::logged_books, $2::jsonb) AS r" in query
    assert "WHERE logged_books.id::text = $1" in query
    assert args[0] == "7"
    assert json.loads(args[1]) == {'rating': '4', 'title': 'Dune Messiah'}


def test_update_book_rejects_unknown_columns():
    conn = FakeConnection()
    with pytest.raises(ValueError):
        asyncio.run(make_store(conn).update_book("7", {'id': 8}))
    assert conn.calls == []


def test_fetch_point_rows():
    conn = FakeConnection(rows=[{'player_id': 1, 'player_name': 'Ana', 'points': '7'}])
    assert asyncio.run(make_store(conn).fetch_point_rows()) == [(1, 'Ana', '7')]


def test_calculate_points_passes_named_arguments():
    conn = FakeConnection(value=12)
    result = asyncio.run(make_store(conn).calculate_points({
        'pages': 200, 'year_published': 2020, 'is_fiction': True, 'deduction': None,
    }))

    assert result == 12
    _, query, args = conn.calls[0]
    assert query == "SELECT calculate_points(pages => $1, year_published => $2, is_fiction => $3)"
    assert args == (200, 2020, True)


def test_connection_errors_become_store_errors():
    conn = FakeConnection(error=ConnectionRefusedError("connection refused"))
    with pytest.raises(StoreError):
        asyncio.run(make_store(conn).fetch_players())


def test_uninitialized_pool_is_store_error():
    store = ChallengeStore(SimpleNamespace(pool=None))
    with pytest.raises(StoreError):
        asyncio.run(store.fetch_books())
