from typing import Optional
from fastapi import APIRouter, Body, Depends, HTTPException, Path, Query
from ..models.requests import SubmitBookRequest, UpdateBookRequest
from ..models.response import BooksResponse, MessageResponse, SubmitBookResponse
from ..database import ChallengeStore, get_store
from ..database.challenge_store import WRITABLE_BOOK_COLUMNS
from ..core.errors import BadRequest, Forbidden, InternalError, NotFound, Unauthorized
from ..logger import get_logger

logger = get_logger()
router = APIRouter()

def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())

@router.get("/books", response_model=BooksResponse)
async def list_books(store: ChallengeStore = Depends(get_store)):
    """List every logged book across all players."""
    try:
        books = await store.fetch_books()
        logger.info(f"Retrieved {len(books)} books")
        return BooksResponse(books=[book.to_dict() for book in books])
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching books: {e}")
        raise InternalError("Failed to fetch books")

@router.get("/my-books", response_model=BooksResponse)
async def my_books(
    player_id: Optional[str] = Query(None),
    store: ChallengeStore = Depends(get_store)
):
    """
    List the books logged by one player.

    - **player_id**: Identifier of the player whose books are returned
    """
    if _is_blank(player_id):
        raise BadRequest("player_id is required")
    try:
        books = await store.fetch_books_for_player(player_id.strip())
        logger.info(f"Retrieved {len(books)} books for player {player_id}")
        return BooksResponse(books=[book.to_dict() for book in books])
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching books for player {player_id}: {e}")
        raise InternalError("Failed to fetch books")

@router.get("/player-books", response_model=BooksResponse)
async def player_books(
    player_name: Optional[str] = Query(None),
    store: ChallengeStore = Depends(get_store)
):
    """
    List the books logged by the player with the given display name.

    - **player_name**: Display name of the player
    """
    if _is_blank(player_name):
        raise BadRequest("player_name is required")
    try:
        books = await store.fetch_books_for_player_name(player_name.strip())
        if not books:
            logger.warning(f"No books found for player {player_name}")
            raise NotFound("No books found for this player")
        return BooksResponse(books=[book.to_dict() for book in books])
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching books for player {player_name}: {e}")
        raise InternalError("Failed to fetch books")

@router.post("/submit-book", response_model=SubmitBookResponse, status_code=201)
async def submit_book(data: SubmitBookRequest, store: ChallengeStore = Depends(get_store)):
    """
    Log a book for a player.

    - **player_id**: Owner of the new book (required)
    - **title**, **pages**, **year_published**, **completed**, **genre**,
      **rating**, **points**: stored as given
    """
    try:
        book = await store.insert_book(data.dict(exclude_unset=True))
        logger.info(f"Player {data.player_id} logged book {book.id}")
        return SubmitBookResponse(message="Book submitted successfully", book=book.to_dict())
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error submitting book for player {data.player_id}: {e}")
        raise InternalError("Failed to submit book")

@router.put("/update-book/{book_id}", response_model=MessageResponse)
async def update_book(
    data: Optional[UpdateBookRequest] = Body(None),
    book_id: str = Path(..., min_length=1),
    store: ChallengeStore = Depends(get_store)
):
    """
    Update a logged book. Only the player who logged it may change it.

    - **currentUserId**: Identifier of the caller
    - **updatedBookData**: Fields to change
    """
    if data is None or _is_blank(data.currentUserId):
        raise Unauthorized("currentUserId is required")
    try:
        book = await store.get_book(book_id)
        if book is None:
            logger.warning(f"Book {book_id} not found")
            raise NotFound("Book not found")

        if not book.is_owned_by(data.currentUserId):
            logger.warning(f"Player {data.currentUserId} tried to update book {book_id} owned by {book.player_id}")
            raise Forbidden("You can only update your own books")

        if not isinstance(data.updatedBookData, dict):
            raise BadRequest("updatedBookData must be an object")
        changes = dict(data.updatedBookData)
        if 'player_id' in changes:
            if not book.is_owned_by(changes['player_id']):
                raise Forbidden("Book ownership cannot be changed")
            del changes['player_id']

        unknown = sorted(set(changes) - set(WRITABLE_BOOK_COLUMNS))
        if unknown:
            raise BadRequest(f"Unknown book fields: {', '.join(unknown)}")
        if not changes:
            raise BadRequest("No book fields to update")

        await store.update_book(book_id, changes)
        logger.info(f"Player {data.currentUserId} updated book {book_id}")
        return MessageResponse(message="Book updated successfully")
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error updating book {book_id}: {e}")
        raise InternalError("Failed to update book")
