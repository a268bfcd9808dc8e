"""Child roster schema definitions."""

from typing import Optional

from pydantic import BaseModel, Field


class AddChildRequest(BaseModel):
    parentEmail: str
    name: str = Field(min_length=1)
    username: str = Field(min_length=1)
    password: Optional[str] = None
    year: str = "year5"


class RemoveChildRequest(BaseModel):
    parentEmail: str


class RecordProgressRequest(BaseModel):
    """A finished topic attempt."""

    topic: str = Field(min_length=1)
    score: float = Field(ge=0)
