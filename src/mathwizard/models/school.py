"""School account database model."""

from sqlalchemy import Boolean, Column, Integer, String

from .base import Base


class SchoolModel(Base):
    """School account database model."""

    __tablename__ = "schools"

    school_id = Column(String, primary_key=True, index=True)
    school_name = Column(String, nullable=False)
    admin_email = Column(String, unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)
    role = Column(String, nullable=False, default="school")
    number_of_teachers = Column(Integer, nullable=False, default=1)
    verified = Column(Boolean, nullable=False, default=True)
    verification_token = Column(String, nullable=True, index=True)
    verification_code = Column(String, nullable=True)
    created_at = Column(String, nullable=False)
