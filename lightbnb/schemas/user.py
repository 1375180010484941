"""Pydantic v2 records for users."""

from pydantic import BaseModel, ConfigDict, Field


class UserCreate(BaseModel):
    """Fields for inserting a user. Email and password are stored exactly as given."""

    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=255)


class UserRecord(BaseModel):
    """A stored user row."""

    id: int
    name: str
    email: str
    password: str

    model_config = ConfigDict(from_attributes=True)
