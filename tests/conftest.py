import copy
import logging

import pytest
from fastapi.testclient import TestClient

from challenge_api.core.errors import StoreError
from challenge_api.database import get_store
from challenge_api.main import create_app
from challenge_api.models.data import LoggedBook, Player

# Enable visible logs when running tests
logging.basicConfig(level=logging.INFO)

PLAYERS = [
    {'id': 1, 'name': 'Ana', 'email': 'ana@example.com', 'total_points': None},
    {'id': 2, 'name': 'Ben', 'email': None, 'total_points': None},
    {'id': 3, 'name': 'Cleo', 'email': None, 'total_points': None},
]

BOOKS = [
    {'id': 10, 'player_id': 1, 'title': 'Dune', 'pages': 412, 'year_published': 1965,
     'completed': True, 'genre': 'sci-fi', 'rating': 5, 'points': 10},
    {'id': 11, 'player_id': 2, 'title': 'Emma', 'pages': 474, 'year_published': 1815,
     'completed': True, 'genre': 'classic', 'rating': 3, 'points': 5},
    {'id': 12, 'player_id': 1, 'title': 'Piranesi', 'pages': 272, 'year_published': 2020,
     'completed': False, 'genre': 'fantasy', 'rating': 4, 'points': '7'},
]


class FakeStore:
    """In-memory stand-in for ChallengeStore"""

    def __init__(self):
        self.players = copy.deepcopy(PLAYERS)
        self.books = copy.deepcopy(BOOKS)
        self.inserted = []
        self.updates = []
        self.scoring_calls = []
        self.points_result = 42
        self.fail = False

    def _check(self):
        if self.fail:
            raise StoreError("store unreachable")

    def _player_name(self, player_id):
        for player in self.players:
            if str(player['id']) == str(player_id):
                return player['name']
        return None

    async def fetch_players(self):
        self._check()
        return [Player(p) for p in sorted(self.players, key=lambda p: p['name'])]

    async def fetch_books(self):
        self._check()
        return [LoggedBook(b) for b in self.books]

    async def fetch_books_for_player(self, player_id):
        self._check()
        return [LoggedBook(b) for b in self.books if str(b['player_id']) == str(player_id)]

    async def fetch_books_for_player_name(self, player_name):
        self._check()
        return [LoggedBook(b) for b in self.books if self._player_name(b['player_id']) == player_name]

    async def get_book(self, book_id):
        self._check()
        for book in self.books:
            if str(book['id']) == str(book_id):
                return LoggedBook(book)
        return None

    async def insert_book(self, fields):
        self._check()
        row = {column: None for column in LoggedBook.FIELDS}
        row.update(fields)
        row['id'] = max(b['id'] for b in self.books) + 1
        self.books.append(row)
        self.inserted.append(fields)
        return LoggedBook(row)

    async def update_book(self, book_id, changes):
        self._check()
        self.updates.append((book_id, changes))
        for book in self.books:
            if str(book['id']) == str(book_id):
                book.update(changes)

    async def fetch_point_rows(self):
        self._check()
        return [(b['player_id'], self._player_name(b['player_id']), b['points']) for b in self.books]

    async def calculate_points(self, arguments):
        self._check()
        self.scoring_calls.append(arguments)
        return self.points_result


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def client(store):
    """Client against an app wired to the fake store; the lifespan never runs, so no database is touched."""
    app = create_app()
    app.dependency_overrides[get_store] = lambda: store
    return TestClient(app)
