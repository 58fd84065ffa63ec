from .book_repo import BookRepository

__all__ = ["BookRepository"]
