"""Curriculum topic database model."""

from sqlalchemy import JSON, Column, Integer, String, Text

from .base import Base


class TopicModel(Base):
    """Curriculum topic keyed by year, section and level."""

    __tablename__ = "topics"

    id = Column(Integer, primary_key=True, index=True)
    year = Column(String, index=True, nullable=False)
    section = Column(String, nullable=False)
    level = Column(String, nullable=False)  # 'growing', 'exceeding' or 'excelling'
    title = Column(String, nullable=False)
    article = Column(Text, nullable=True)
    questions = Column(JSON, nullable=False, default=list)
    created_at = Column(String, nullable=False)
