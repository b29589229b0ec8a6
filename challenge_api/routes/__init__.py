from fastapi import APIRouter
from . import books, friends, health, players, points, rankings

api_router = APIRouter(prefix="/api")
api_router.include_router(players.router, tags=["players"])
api_router.include_router(books.router, tags=["books"])
api_router.include_router(rankings.router, tags=["rankings"])
api_router.include_router(points.router, tags=["points"])
api_router.include_router(friends.router, tags=["friends"])

__all__ = ['api_router', 'health']
