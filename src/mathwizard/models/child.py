"""Child learner account database model."""

from sqlalchemy import JSON, Column, Integer, String

from .base import Base


class ChildModel(Base):
    """Child account database model.

    ``parent_email`` is a back reference only; ownership is recorded in the
    parent's ``children`` list.
    """

    __tablename__ = "children"

    child_id = Column(String, primary_key=True, index=True)
    name = Column(String, nullable=False)
    username = Column(String, unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)
    parent_email = Column(String, index=True, nullable=False)
    year = Column(String, nullable=True)  # curriculum label, e.g. "year5"
    year_group = Column(Integer, nullable=False)
    progress = Column(JSON, nullable=False, default=list)
    created_at = Column(String, nullable=False)
