"""Admin operations on parent and school accounts.

Every mutation appends an audit entry through ``AuditLogger``.
"""

import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from mathwizard.core.exceptions import ConflictError, NotFoundError, ValidationError
from mathwizard.models.parent import ParentModel
from mathwizard.models.school import SchoolModel
from mathwizard.utils.audit_logger import AuditLogger
from mathwizard.utils.converters import parent_to_summary, school_to_summary

logger = logging.getLogger(__name__)


class AdminManager:
    """Manages admin-initiated account listing, edits and deletions."""

    def __init__(self, db: Session, audit: Optional[AuditLogger] = None):
        """Initialize AdminManager.

        Args:
            db: SQLAlchemy Session.
            audit: AuditLogger sharing the same session; created if omitted.
        """
        self.db = db
        self.audit = audit or AuditLogger(db)

    def list_users(self) -> List[dict]:
        """List all parent accounts followed by all school accounts."""
        parents = self.db.query(ParentModel).order_by(ParentModel.created_at).all()
        schools = self.db.query(SchoolModel).order_by(SchoolModel.created_at).all()
        return [parent_to_summary(p) for p in parents] + [school_to_summary(s) for s in schools]

    def delete_user(self, user_id: str, admin_email: str) -> str:
        """Delete a parent or school account by ID.

        The deleted parent's child records are left in place.

        Args:
            user_id: parent_id or school_id.
            admin_email: Acting admin, recorded in the audit entry.

        Returns:
            The kind of account deleted ('parent' or 'school').

        Raises:
            NotFoundError: If no parent or school has this ID.
        """
        parent = self.db.query(ParentModel).filter(ParentModel.parent_id == user_id).first()
        if parent is not None:
            snapshot = {"email": parent.email, "name": parent.name}
            self.db.delete(parent)
            self.db.commit()
            self.audit.record(
                "deletion",
                f"Parent account deleted: {snapshot['email']}",
                admin_email,
                user_id,
                "parent",
                snapshot,
            )
            logger.info("Admin %s deleted parent %s", admin_email, snapshot["email"])
            return "parent"

        school = self.db.query(SchoolModel).filter(SchoolModel.school_id == user_id).first()
        if school is not None:
            snapshot = {"email": school.admin_email, "name": school.school_name}
            self.db.delete(school)
            self.db.commit()
            self.audit.record(
                "deletion",
                f"School account deleted: {snapshot['email']}",
                admin_email,
                user_id,
                "school",
                snapshot,
            )
            logger.info("Admin %s deleted school %s", admin_email, snapshot["email"])
            return "school"

        raise NotFoundError("User not found")

    def _ensure_email_free(self, email: str, parent_id: str = None, school_id: str = None) -> None:
        parent = self.db.query(ParentModel).filter(ParentModel.email == email).first()
        school = self.db.query(SchoolModel).filter(SchoolModel.admin_email == email).first()
        if (parent is not None and parent.parent_id != parent_id) or (
            school is not None and school.school_id != school_id
        ):
            raise ConflictError("An account with this email already exists")

    def _commit_edit(self) -> None:
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError("An account with this email already exists")

    def update_parent(
        self, user_id: str, name: str, email: str, max_children: int, admin_email: str
    ) -> ParentModel:
        """Overwrite a parent's name, email and child quota.

        Raises:
            NotFoundError: If the parent does not exist.
            ValidationError: If ``max_children`` is below the current number
                of children; the record is left unchanged.
            ConflictError: If the new email belongs to another account.
        """
        parent = self.db.query(ParentModel).filter(ParentModel.parent_id == user_id).first()
        if parent is None:
            raise NotFoundError("Parent not found")

        if max_children < len(parent.children or []):
            raise ValidationError(
                "Cannot reduce maximum children below current number of children"
            )
        self._ensure_email_free(email, parent_id=user_id)

        before = {"name": parent.name, "email": parent.email, "maxChildren": parent.max_children}
        parent.name = name
        parent.email = email
        parent.max_children = max_children
        self._commit_edit()

        self.audit.record(
            "edit",
            f"Parent account updated: {email}",
            admin_email,
            user_id,
            "parent",
            {"before": before, "after": {"name": name, "email": email, "maxChildren": max_children}},
        )
        return parent

    def update_school(
        self, user_id: str, name: str, email: str, number_of_teachers: int, admin_email: str
    ) -> SchoolModel:
        """Overwrite a school's name, email and number of teachers.

        Raises:
            NotFoundError: If the school does not exist.
            ConflictError: If the new email belongs to another account.
        """
        school = self.db.query(SchoolModel).filter(SchoolModel.school_id == user_id).first()
        if school is None:
            raise NotFoundError("School not found")
        self._ensure_email_free(email, school_id=user_id)

        before = {
            "name": school.school_name,
            "email": school.admin_email,
            "numberOfTeachers": school.number_of_teachers,
        }
        school.school_name = name
        school.admin_email = email
        school.number_of_teachers = number_of_teachers
        self._commit_edit()

        self.audit.record(
            "edit",
            f"School account updated: {email}",
            admin_email,
            user_id,
            "school",
            {
                "before": before,
                "after": {"name": name, "email": email, "numberOfTeachers": number_of_teachers},
            },
        )
        return school
