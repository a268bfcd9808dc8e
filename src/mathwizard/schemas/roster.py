"""School roster schema definitions."""

from pydantic import BaseModel, Field


class AddRosterMemberRequest(BaseModel):
    name: str = Field(min_length=1)
