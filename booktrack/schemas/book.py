from pydantic import BaseModel, ConfigDict, Field
from typing import ClassVar

# Book base schema
class BookBase(BaseModel):
    title: str
    author: str
    isbn: str
    genre: str
    available_copies: int = Field(alias="availableCopies")

    model_config: ClassVar[ConfigDict] = ConfigDict(populate_by_name=True)

# Book create schema
class BookCreate(BookBase):
    pass

# Book update schema
class BookUpdate(BookBase):
    pass

# Book read schema
class BookRead(BookBase):
    id: str = Field(alias="_id")
    image: str | None = None

    model_config: ClassVar[ConfigDict] = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
    )

# Response for add/update
class BookMutationResponse(BaseModel):
    message: str
    book: BookRead
