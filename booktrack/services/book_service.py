from __future__ import annotations
from sqlalchemy.orm import Session
from booktrack.core.config import settings
from booktrack.core.errors import BookNotFoundError, BookValidationError, TitleConflictError
from booktrack.schemas.book import BookBase, BookCreate, BookUpdate
from booktrack.repos.book_repo import BookRepository
from booktrack.models.book import Book
from booktrack.utils.images import ingest_image
from booktrack.utils.validators import FieldValidationError, validate_book_fields, validate_isbn


class BookService:
    @staticmethod
    # Field checks shared by add and update
    def validate_fields(data: BookBase) -> None:
        try:
            validate_book_fields(data.title, data.author, data.available_copies)
            if settings.ENFORCE_SERVER_ISBN:
                validate_isbn(data.isbn)
        except FieldValidationError as e:
            raise BookValidationError(str(e)) from e

    @staticmethod
    # List books
    def list_books(db: Session) -> list[Book]:
        books = BookRepository.list(db)
        if not books:
            raise BookNotFoundError("No books found")
        return books

    @staticmethod
    # Search books by title
    def search_books(db: Session, query: str) -> list[Book]:
        books = BookRepository.search_by_title(db, query)
        if not books:
            raise BookNotFoundError("No books found matching your search criteria")
        return books

    @staticmethod
    # Get a book by ID
    def get_book(db: Session, book_id: str) -> Book:
        book = BookRepository.get(db, book_id)
        if not book:
            raise BookNotFoundError("Book not found")
        return book

    @staticmethod
    # Create book
    def create_book(db: Session, data: BookCreate, image: bytes | None = None) -> Book:
        BookService.validate_fields(data)

        if BookRepository.get_by_title(db, data.title) is not None:
            raise TitleConflictError("Title already exists.")

        try:
            encoded = ingest_image(image)
        except FieldValidationError as e:
            raise BookValidationError(str(e)) from e

        return BookRepository.create(db, data, image=encoded if isinstance(encoded, str) else None)

    @staticmethod
    # Update book
    def update_book(
        db: Session,
        book_id: str,
        data: BookUpdate,
        image: bytes | None = None,
    ) -> Book:
        """
        Validate, load, check title uniqueness, ingest the image, then persist.

        The title lookup only runs when the title changes, so a book never
        conflicts with itself. A concurrent rename that slips past the lookup
        fails on the unique constraint at commit instead.
        """
        BookService.validate_fields(data)

        book = BookRepository.get(db, book_id)
        if not book:
            raise BookNotFoundError("Book not found")

        if book.title != data.title:
            if BookRepository.get_by_title(db, data.title) is not None:
                raise TitleConflictError("Title already exists.")

        try:
            encoded = ingest_image(image)
        except FieldValidationError as e:
            raise BookValidationError(str(e)) from e

        return BookRepository.update(db, book, data, encoded)
