"""Database models.

Importing this package registers every model with ``Base.metadata``.
"""

from .base import Base
from .parent import ParentModel, PartnerModel
from .school import SchoolModel
from .child import ChildModel
from .system_log import SystemLogModel
from .topic import TopicModel
from .roster import StudentModel, TeacherModel

__all__ = [
    "Base",
    "ParentModel",
    "PartnerModel",
    "SchoolModel",
    "ChildModel",
    "SystemLogModel",
    "TopicModel",
    "TeacherModel",
    "StudentModel",
]
