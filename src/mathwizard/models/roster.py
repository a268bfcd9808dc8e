"""School staff and pupil roster database models."""

from sqlalchemy import Column, Integer, String

from .base import Base


class TeacherModel(Base):
    """Teacher entry on the school roster."""

    __tablename__ = "teachers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    created_at = Column(String, nullable=False)


class StudentModel(Base):
    """Student entry on the school roster."""

    __tablename__ = "students"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    created_at = Column(String, nullable=False)
