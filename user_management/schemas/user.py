"""User Schemas — wire shapes for user create/update requests and responses.

Invariants:
    - UserCreate fields default to "" so missing fields reach the validator and are
      reported together with every other violation
    - UserUpdate fields are optional: None or "" means "keep the stored value"
    - dob is always a YYYY-MM-DD string on the wire
"""

from pydantic import BaseModel, Field


class UserCreate(BaseModel):
    """User creation body — generic deserialization only."""
    name: str = ""
    dob: str = ""


class UserUpdate(BaseModel):
    """User update body — each field independently optional."""
    name: str | None = None
    dob: str | None = None


class UserResponse(BaseModel):
    """User response — age computed at response time."""
    id: int
    name: str
    dob: str = Field(examples=["1990-05-10"])
    age: int


class PaginatedUsersResponse(BaseModel):
    """One page of users plus navigation totals."""
    data: list[UserResponse]
    page: int
    limit: int
    total: int
    total_pages: int
