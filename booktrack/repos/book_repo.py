from __future__ import annotations
from sqlalchemy.orm import Session
from booktrack.models.book import Book
from booktrack.schemas.book import BookCreate, BookUpdate
from booktrack.utils.images import ImageUpdate
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from typing import Literal


class BookRepository:
    @staticmethod
    # Create a new book
    def create(db: Session, data: BookCreate, image: str | None = None) -> Book:
        book = Book(**data.model_dump(), image=image)
        db.add(book)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise
        db.refresh(book)
        return book

    @staticmethod
    # List books
    def list(db: Session) -> list[Book]:
        stmt = select(Book).order_by(Book.title)
        return list(db.scalars(stmt).all())

    @staticmethod
    # Case-insensitive title search
    def search_by_title(db: Session, q: str) -> list[Book]:
        stmt = select(Book).where(Book.title.ilike(f"%{q}%")).order_by(Book.title)
        return list(db.scalars(stmt).all())

    @staticmethod
    # Get a book by ID
    def get(db: Session, book_id: str) -> Book | None:
        stmt = select(Book).where(Book.id == book_id)
        return db.scalars(stmt).first()

    @staticmethod
    # Get a book by exact title
    def get_by_title(db: Session, title: str) -> Book | None:
        stmt = select(Book).where(Book.title == title)
        return db.scalars(stmt).first()

    @staticmethod
    # Overwrite the editable fields; the image only when a new one was given
    def update(
        db: Session,
        book: Book,
        data: BookUpdate,
        image: str | Literal[ImageUpdate.UNCHANGED] = ImageUpdate.UNCHANGED,
    ) -> Book:
        for field, value in data.model_dump().items():
            setattr(book, field, value)
        if image is not ImageUpdate.UNCHANGED:
            book.image = image
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise
        db.refresh(book)
        return book
