"""School teacher and student rosters."""

import logging
from datetime import datetime
from typing import List, Type, Union

import pytz
from sqlalchemy.orm import Session

from mathwizard.core.exceptions import ValidationError
from mathwizard.models.roster import StudentModel, TeacherModel

logger = logging.getLogger(__name__)

RosterModel = Union[TeacherModel, StudentModel]


class RosterManager:
    """Adds and lists the teachers and students of the school roster."""

    def __init__(self, db: Session):
        self.db = db

    def _add(self, model_cls: Type[RosterModel], name: str) -> RosterModel:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Name is required")
        model = model_cls(name=name, created_at=datetime.now(pytz.utc).isoformat())
        self.db.add(model)
        self.db.commit()
        self.db.refresh(model)
        logger.info("Added %s entry %s", model_cls.__tablename__, name)
        return model

    def _list(self, model_cls: Type[RosterModel]) -> List[RosterModel]:
        return self.db.query(model_cls).order_by(model_cls.id).all()

    def add_teacher(self, name: str) -> TeacherModel:
        """Add a teacher.

        Raises:
            ValidationError: If the name is blank.
        """
        return self._add(TeacherModel, name)

    def list_teachers(self) -> List[TeacherModel]:
        return self._list(TeacherModel)

    def add_student(self, name: str) -> StudentModel:
        """Add a student.

        Raises:
            ValidationError: If the name is blank.
        """
        return self._add(StudentModel, name)

    def list_students(self) -> List[StudentModel]:
        return self._list(StudentModel)
