from typing import Final, Generic, TypeVar
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError
from starlette.datastructures import UploadFile

from booktrack.schemas.book import BookCreate, BookUpdate

# Browser forms send the cover as "image"; older callers use "file".
IMAGE_FIELDS: Final[tuple[str, ...]] = ("image", "file")

SchemaT = TypeVar("SchemaT", bound=BaseModel)


class BookSubmission(BaseModel, Generic[SchemaT]):
    data: SchemaT
    image: bytes | None = None


async def _read_body(request: Request) -> tuple[dict[str, object], bytes | None]:
    """
    Accept JSON, url-encoded or multipart bodies.

    A file part without a filename is how browsers submit an empty file input,
    so it counts as no upload.
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            payload = await request.json()
        except ValueError as e:
            raise RequestValidationError(
                [{"type": "json_invalid", "loc": ("body",), "msg": "JSON decode error", "input": {}}]
            ) from e
        if not isinstance(payload, dict):
            raise RequestValidationError(
                [{"type": "dict_type", "loc": ("body",), "msg": "Input should be an object", "input": payload}]
            )
        return payload, None

    form = await request.form()
    fields: dict[str, object] = {}
    image: bytes | None = None
    for key, value in form.multi_items():
        if isinstance(value, UploadFile):
            if key in IMAGE_FIELDS and image is None and value.filename:
                image = await value.read()
        else:
            fields[key] = value
    return fields, image


def _validate(schema: type[SchemaT], payload: dict[str, object]) -> SchemaT:
    try:
        return schema.model_validate(payload)
    except ValidationError as e:
        raise RequestValidationError(e.errors()) from e


async def book_create_submission(request: Request) -> BookSubmission[BookCreate]:
    payload, image = await _read_body(request)
    return BookSubmission[BookCreate](data=_validate(BookCreate, payload), image=image)


async def book_update_submission(request: Request) -> BookSubmission[BookUpdate]:
    payload, image = await _read_body(request)
    return BookSubmission[BookUpdate](data=_validate(BookUpdate, payload), image=image)
