from .base import DatabaseManager, get_store
from .challenge_store import ChallengeStore
from .connection import DatabaseConnection

__all__ = ['DatabaseManager', 'DatabaseConnection', 'ChallengeStore', 'get_store']
