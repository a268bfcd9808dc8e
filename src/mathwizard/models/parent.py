"""Parent account database models.

This module defines the parent account and its embedded managing partners.
"""

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from .base import Base


class ParentModel(Base):
    """Parent account database model."""

    __tablename__ = "parents"

    parent_id = Column(String, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)  # bcrypt hash or legacy plaintext
    role = Column(String, nullable=False, default="parent")
    children = Column(JSON, nullable=False, default=list)  # ordered child usernames
    max_children = Column(Integer, nullable=False, default=0)
    verified = Column(Boolean, nullable=False, default=False)
    verification_token = Column(String, nullable=True, index=True)
    verification_code = Column(String, nullable=True)
    created_at = Column(String, nullable=False)  # ISO format string

    partners = relationship(
        "PartnerModel",
        back_populates="parent",
        cascade="all, delete-orphan",
        order_by="PartnerModel.id",
    )


class PartnerModel(Base):
    """Managing partner owned by a parent account."""

    __tablename__ = "parent_partners"
    __table_args__ = (
        UniqueConstraint("parent_id", "email", name="uq_parent_partners_parent_email"),
    )

    id = Column(Integer, primary_key=True, index=True)
    parent_id = Column(
        String,
        ForeignKey("parents.parent_id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    name = Column(String, nullable=True)
    email = Column(String, nullable=False)
    password = Column(String, nullable=False)
    added_at = Column(String, nullable=False)

    parent = relationship("ParentModel", back_populates="partners")
