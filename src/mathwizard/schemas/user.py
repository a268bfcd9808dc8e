"""Account and authentication schema definitions.

Request bodies keep the camelCase field names used by the web client.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class AdminCredentials(BaseModel):
    """Static admin credential pair injected from configuration."""

    email: Optional[str] = None
    password: Optional[str] = None

    @property
    def enabled(self) -> bool:
        return bool(self.email and self.password)


class Principal(BaseModel):
    """Identity resolved from a successful login."""

    role: Literal["admin", "parent", "school", "child"]
    email: Optional[str] = None
    username: Optional[str] = None
    name: Optional[str] = None
    children: Optional[List[str]] = None
    maxChildren: Optional[int] = None
    availableChildSlots: Optional[int] = None
    partners: Optional[List[dict]] = None
    yearGroup: Optional[int] = None
    year: Optional[str] = None
    legacy: bool = False

    @property
    def subject(self) -> str:
        return self.username if self.role == "child" else self.email


class LoginRequest(BaseModel):
    email: str
    password: str


class ChildLoginRequest(BaseModel):
    username: str
    password: str = ""


class CheckEmailRequest(BaseModel):
    email: str


class RegisterParentRequest(BaseModel):
    name: str = Field(min_length=1)
    email: str = Field(min_length=3)
    password: str = Field(min_length=1)
    maxChildren: int = Field(default=0, ge=0)


class RegisterSchoolRequest(BaseModel):
    schoolName: str = Field(min_length=1)
    adminEmail: str = Field(min_length=3)
    password: str = Field(min_length=1)
    numberOfTeachers: int = Field(default=1, ge=0)


class VerifyCodeRequest(BaseModel):
    email: str
    code: str
