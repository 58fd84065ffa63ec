"""
HTTP client for the BookTrack API that mirrors the edit form.

Before submitting an update it applies the same field rules as the server, plus
the ISBN checksum and a best-effort title uniqueness pre-check against the
listing. The server remains authoritative; these checks only save a round trip.
"""
from __future__ import annotations

from collections.abc import Callable
from typing import Any, Final

import httpx
from pydantic import BaseModel
from starlette.status import HTTP_404_NOT_FOUND

from booktrack.core.logging import get_logger
from booktrack.utils.images import MAX_IMAGE_BYTES
from booktrack.utils.validators import (
    FieldValidationError,
    validate_book_fields,
    validate_isbn,
)

DEFAULT_BASE_URL: Final[str] = "http://localhost:5500"

logger = get_logger(__name__)

BookJSON = dict[str, Any]


class BookClientError(Exception):
    """Carries a message meant to be shown to the user as-is."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message: str = message


class ClientValidationError(BookClientError):
    pass


class UpdateFailedError(BookClientError):
    pass


class UpdateOutcome(BaseModel):
    message: str
    book: BookJSON
    # Listing fetched after the update, for redisplay
    books: list[BookJSON]


class BookClient:
    def __init__(self, http: httpx.Client) -> None:
        self.http: httpx.Client = http

    @classmethod
    def from_base_url(cls, base_url: str = DEFAULT_BASE_URL, timeout: float = 10.0) -> BookClient:
        return cls(httpx.Client(base_url=base_url, timeout=timeout))

    def list_books(self) -> list[BookJSON]:
        """All books; the API answers 404 when there are none."""
        response = self.http.get("/books")
        if response.status_code == HTTP_404_NOT_FOUND:
            return []
        response.raise_for_status()
        return response.json()

    def get_book(self, book_id: str) -> BookJSON:
        if not book_id or not book_id.strip():
            raise ClientValidationError("Invalid book ID.")

        try:
            response = self.http.get(f"/books/{book_id}")
        except httpx.HTTPError as e:
            logger.error("Error fetching book: %s", e)
            raise BookClientError("An error occurred while fetching the book details.") from e

        if response.status_code == HTTP_404_NOT_FOUND:
            raise BookClientError("Book not found. It may have been removed.")
        if not response.is_success:
            logger.error("Failed to fetch book: %s", response.status_code)
            raise BookClientError("Failed to retrieve book details. Please try again later.")
        return response.json()

    def is_title_unique(self, title: str, book_id: str) -> bool:
        return all(
            book.get("title") != title or book.get("_id") == book_id
            for book in self.list_books()
        )

    def update_book(
        self,
        book_id: str,
        *,
        title: str,
        author: str,
        isbn: str,
        genre: str,
        available_copies: int,
        image: bytes | None = None,
        image_name: str = "cover.jpg",
        confirm: Callable[[], bool] | None = None,
    ) -> UpdateOutcome | None:
        """
        Validate locally, then PUT the form to /updateBook/{id}.

        Returns None when `confirm` declines the submission.
        """
        if not book_id:
            raise ClientValidationError("Invalid book ID.")

        title = title.strip()
        author = author.strip()

        try:
            validate_book_fields(title, author, available_copies)
            validate_isbn(isbn)
        except FieldValidationError as e:
            raise ClientValidationError(str(e)) from e

        if image is not None and len(image) > MAX_IMAGE_BYTES:
            raise ClientValidationError(
                "Image size should not exceed 16MB. Please select a smaller file."
            )

        try:
            unique = self.is_title_unique(title, book_id)
        except httpx.HTTPError as e:
            logger.error("Error checking title uniqueness: %s", e)
            raise UpdateFailedError("An error occurred while updating the book.") from e
        if not unique:
            raise ClientValidationError("Title already exists. Please choose a different title.")

        if confirm is not None and not confirm():
            return None

        data = {
            "title": title,
            "author": author,
            "isbn": isbn,
            "genre": genre,
            "availableCopies": str(available_copies),
        }
        files = {"image": (image_name, image, "application/octet-stream")} if image is not None else None

        try:
            response = self.http.put(f"/updateBook/{book_id}", data=data, files=files)
        except httpx.HTTPError as e:
            logger.error("Error updating book: %s", e)
            raise UpdateFailedError("An error occurred while updating the book.") from e

        if not response.is_success:
            raise UpdateFailedError("Failed to update book. Please try again later.")

        # The update already succeeded; a failed refresh only leaves the listing empty.
        try:
            books = self.list_books()
        except httpx.HTTPError as e:
            logger.error("Error refreshing books: %s", e)
            books = []

        return UpdateOutcome(
            message="Book updated successfully!",
            book=response.json()["book"],
            books=books,
        )
