from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import HTTP_201_CREATED
from booktrack.api.deps import BookSubmission, book_create_submission, book_update_submission
from booktrack.core.errors import BookInternalError, BookValidationError
from booktrack.core.logging import get_logger
from booktrack.db.session import get_db
from booktrack.services.book_service import BookService
from booktrack.schemas.book import BookCreate, BookMutationResponse, BookRead, BookUpdate
from booktrack.utils.validators import is_valid_object_id
from typing import Annotated

SEARCH_MAX_LENGTH = 100

router = APIRouter(tags=["books"])


@router.get("/books", response_model=list[BookRead])
def list_books(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
):
    try:
        return BookService.list_books(db)
    except StarletteHTTPException:
        raise
    except Exception as e:
        get_logger(__name__, request).exception("Error fetching books: %s", e)
        raise BookInternalError("Server error while fetching books") from e


@router.get("/books/{book_id}", response_model=BookRead)
def fetch_book(
    request: Request,
    book_id: str,
    db: Annotated[Session, Depends(get_db)],
):
    sanitized_id = book_id.strip()
    if not is_valid_object_id(sanitized_id):
        raise BookValidationError("Invalid book ID format")

    try:
        return BookService.get_book(db, sanitized_id)
    except StarletteHTTPException:
        raise
    except Exception as e:
        get_logger(__name__, request).exception("Error fetching book by ID: %s", e)
        raise BookInternalError("Server error") from e


@router.get("/search", response_model=list[BookRead])
def search_books(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
    query: Annotated[str | None, Query()] = None,
):
    if not query or not query.strip():
        raise BookValidationError('Invalid parameter: "query" is required and must be a string.')
    if len(query) > SEARCH_MAX_LENGTH:
        raise BookValidationError(
            f"Query is too long. Max length is {SEARCH_MAX_LENGTH} characters."
        )

    try:
        return BookService.search_books(db, query.lower())
    except StarletteHTTPException:
        raise
    except Exception as e:
        get_logger(__name__, request).exception("Error searching books: %s", e)
        raise BookInternalError("An error occurred while searching for books.") from e


@router.post("/addBook", response_model=BookMutationResponse, status_code=HTTP_201_CREATED)
def add_book(
    request: Request,
    submission: Annotated[BookSubmission[BookCreate], Depends(book_create_submission)],
    db: Annotated[Session, Depends(get_db)],
):
    try:
        book = BookService.create_book(db, submission.data, submission.image)
    except (StarletteHTTPException, IntegrityError):
        raise
    except Exception as e:
        get_logger(__name__, request).exception("Error adding book: %s", e)
        raise BookInternalError("An error occurred while adding the book.") from e

    return BookMutationResponse(
        message="Book added successfully!",
        book=BookRead.model_validate(book),
    )


@router.put("/updateBook/{book_id}", response_model=BookMutationResponse)
def update_book(
    request: Request,
    book_id: str,
    submission: Annotated[BookSubmission[BookUpdate], Depends(book_update_submission)],
    db: Annotated[Session, Depends(get_db)],
):
    # Domain errors and unique violations keep their own responses;
    # anything else is reported generically.
    try:
        book = BookService.update_book(db, book_id, submission.data, submission.image)
    except (StarletteHTTPException, IntegrityError):
        raise
    except Exception as e:
        get_logger(__name__, request).exception("Error updating book: %s", e)
        raise BookInternalError("An error occurred while updating the book.") from e

    return BookMutationResponse(
        message="Book updated successfully!",
        book=BookRead.model_validate(book),
    )
