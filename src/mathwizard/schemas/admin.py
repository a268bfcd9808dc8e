"""Admin schema definitions."""

from pydantic import BaseModel, Field


class UpdateParentRequest(BaseModel):
    name: str = Field(min_length=1)
    email: str = Field(min_length=3)
    maxChildren: int = Field(ge=0)


class UpdateSchoolRequest(BaseModel):
    name: str = Field(min_length=1)
    email: str = Field(min_length=3)
    numberOfTeachers: int = Field(ge=0)
