"""
Field rules shared by the HTTP service and the client.

Every error raised here carries the user-facing message as its text, so callers
can surface ``str(exc)`` without rewording it.
"""
import re
from typing import Final

TITLE_MAX_LENGTH: Final[int] = 100
AUTHOR_MAX_LENGTH: Final[int] = 150

_OBJECT_ID_RE: Final[re.Pattern[str]] = re.compile(r"[0-9a-fA-F]{24}")


class FieldValidationError(ValueError):
    """A user-correctable problem with a submitted book field."""


class TitleTooLongError(FieldValidationError):
    def __init__(self) -> None:
        super().__init__(f"Title must be {TITLE_MAX_LENGTH} characters or fewer.")


class AuthorTooLongError(FieldValidationError):
    def __init__(self) -> None:
        super().__init__(f"Author name must be {AUTHOR_MAX_LENGTH} characters or fewer.")


class NegativeCopiesError(FieldValidationError):
    def __init__(self) -> None:
        super().__init__("Available copies should be more that 0")


class InvalidISBNError(FieldValidationError):
    def __init__(self) -> None:
        super().__init__("Invalid ISBN. Please enter a valid ISBN-10 or ISBN-13.")


def is_valid_isbn(raw: str) -> bool:
    """
    Check an ISBN-10 or ISBN-13 checksum. Hyphens are ignored.

    ISBN-10: digits 1-9 weighted by position (1..9), check character weighted
    by 10 where ``X`` stands for 10; the sum must be divisible by 11.
    ISBN-13: digits weighted alternately 1 and 3; the sum must be divisible by 10.
    """
    isbn = raw.replace("-", "")

    if len(isbn) == 10:
        total = 0
        for i, ch in enumerate(isbn[:9]):
            if ch not in "0123456789":
                return False
            total += (i + 1) * int(ch)

        check = isbn[9]
        if check == "X":
            total += 10 * 10
        elif check in "0123456789":
            total += 10 * int(check)
        else:
            return False
        return total % 11 == 0

    if len(isbn) == 13:
        total = 0
        for i, ch in enumerate(isbn):
            if ch not in "0123456789":
                return False
            total += int(ch) if i % 2 == 0 else int(ch) * 3
        return total % 10 == 0

    return False


def is_valid_object_id(value: str) -> bool:
    return _OBJECT_ID_RE.fullmatch(value) is not None


def validate_title(title: str) -> None:
    if len(title) > TITLE_MAX_LENGTH:
        raise TitleTooLongError()


def validate_author(author: str) -> None:
    if len(author) > AUTHOR_MAX_LENGTH:
        raise AuthorTooLongError()


def validate_available_copies(copies: int) -> None:
    if copies < 0:
        raise NegativeCopiesError()


def validate_isbn(isbn: str) -> None:
    if not is_valid_isbn(isbn):
        raise InvalidISBNError()


def validate_book_fields(title: str, author: str, available_copies: int) -> None:
    """Run the field checks in their fixed order; the first failure wins."""
    validate_title(title)
    validate_author(author)
    validate_available_copies(available_copies)
