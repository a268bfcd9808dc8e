"""Parent self-service schema definitions."""

from typing import Optional

from pydantic import BaseModel, Field


class UpdateSettingsRequest(BaseModel):
    name: str = Field(min_length=1)


class AddPartnerRequest(BaseModel):
    name: Optional[str] = None
    email: str = Field(min_length=3)
    password: Optional[str] = None


class PartnerInfo(BaseModel):
    """Partner entry as returned to clients (never includes the password)."""

    name: Optional[str] = None
    email: str
    addedAt: str
