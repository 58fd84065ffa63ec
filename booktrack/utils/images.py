import base64
from enum import Enum
from typing import Final, Literal

from booktrack.utils.validators import FieldValidationError

MAX_IMAGE_BYTES: Final[int] = 16 * 1024 * 1024


class ImageUpdate(Enum):
    # No file was uploaded; the stored image must be left alone.
    UNCHANGED = "unchanged"


class ImageTooLargeError(FieldValidationError):
    def __init__(self) -> None:
        super().__init__("Image size should not exceed 16MB.")


class EmptyImageError(FieldValidationError):
    def __init__(self) -> None:
        super().__init__("Uploaded file is invalid.")


def ingest_image(blob: bytes | None) -> str | Literal[ImageUpdate.UNCHANGED]:
    """
    Turn an optional upload into the base64 text stored on the book.

    Size is checked before emptiness.
    """
    if blob is None:
        return ImageUpdate.UNCHANGED
    if len(blob) > MAX_IMAGE_BYTES:
        raise ImageTooLargeError()
    if not blob:
        raise EmptyImageError()
    return base64.b64encode(blob).decode("ascii")
