from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Integer, CheckConstraint, Text, Constraint, UniqueConstraint
import secrets
from booktrack.models.base import Base


def new_object_id() -> str:
    """24 hex characters, the shape of a document id."""
    return secrets.token_hex(12)


#Book
class Book(Base):
    __tablename__: str = "books"

    id: Mapped[str] = mapped_column(
        String(24),
        primary_key=True,
        default=new_object_id,
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    author: Mapped[str] = mapped_column(Text, nullable=False)
    isbn: Mapped[str] = mapped_column(Text, nullable=False)
    genre: Mapped[str] = mapped_column(Text, nullable=False, server_default="")
    available_copies: Mapped[int] = mapped_column(Integer, nullable=False, server_default="0")
    image: Mapped[str | None] = mapped_column(Text, nullable=True, comment="base64 cover image")
    __table_args__: tuple[Constraint, ...] = (
            UniqueConstraint("title", name="books_title_key"),
            CheckConstraint("available_copies >= 0", name="books_available_copies_nonneg"),
    )
