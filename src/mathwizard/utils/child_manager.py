"""Child roster management utilities."""

import json
import logging
import secrets
from datetime import datetime
from typing import List, Optional

import pytz
from sqlalchemy import String, cast, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from mathwizard.config import CHILD_PASSWORD_WORDS, DEFAULT_YEAR_GROUP, YEAR_GROUPS
from mathwizard.core.exceptions import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    QuotaExceededError,
    ValidationError,
)
from mathwizard.models.child import ChildModel
from mathwizard.models.parent import ParentModel
from mathwizard.utils.converters import available_child_slots
from mathwizard.utils.credentials import hash_password

logger = logging.getLogger(__name__)


def year_to_group(year: Optional[str]) -> int:
    """Map a curriculum year label ("reception", "year1".."year11") to its number.

    Unknown labels map to the default year group.
    """
    if not year:
        return DEFAULT_YEAR_GROUP
    return YEAR_GROUPS.get(year.strip().lower(), DEFAULT_YEAR_GROUP)


def generate_child_password() -> str:
    """Return a themed word followed by 4 random digits, e.g. "Duck4821"."""
    return f"{secrets.choice(CHILD_PASSWORD_WORDS)}{1000 + secrets.randbelow(9000)}"


def _like_escape(text: str) -> str:
    return text.replace("!", "!!").replace("%", "!%").replace("_", "!_")


def find_parent_listing(db: Session, username: str) -> Optional[ParentModel]:
    """Find the parent whose ``children`` list contains ``username``.

    The stored JSON text is pre-filtered in SQL against both the ASCII-escaped
    and the raw encoding of the name; membership is confirmed on the decoded
    list.
    """
    patterns = {
        f"%{_like_escape(json.dumps(username, ensure_ascii=ascii_only))}%"
        for ascii_only in (True, False)
    }
    text = cast(ParentModel.children, String)
    candidates = (
        db.query(ParentModel)
        .filter(or_(*(text.like(p, escape="!") for p in patterns)))
        .all()
    )
    for parent in candidates:
        if username in (parent.children or []):
            return parent
    return None


class ChildManager:
    """Manages child accounts and the parent rosters that own them."""

    def __init__(self, db: Session):
        self.db = db

    def _get_parent(self, parent_email: str, for_update: bool = False) -> ParentModel:
        query = self.db.query(ParentModel).filter(ParentModel.email == parent_email)
        if for_update:
            query = query.with_for_update()
        parent = query.first()
        if parent is None:
            raise NotFoundError("Parent not found")
        return parent

    def add_child(
        self,
        parent_email: str,
        name: str,
        username: str,
        password: Optional[str] = None,
        year: Optional[str] = None,
    ) -> dict:
        """Register a child under a parent.

        The child record and the parent's roster entry are written in one
        transaction.

        Args:
            parent_email: Email of the owning parent.
            name: Child's display name.
            username: Login name, unique across all children.
            password: Optional password; generated when omitted or blank.
            year: Curriculum year label.

        Returns:
            Dictionary with ``username`` and the plaintext ``password``. The
            password cannot be retrieved again afterwards.

        Raises:
            NotFoundError: If the parent does not exist.
            ConflictError: If the username is taken by a child record or
                listed on any parent's roster.
            QuotaExceededError: If the parent has no child slots left.
        """
        username = (username or "").strip()
        if not username:
            raise ValidationError("Username is required")

        parent = self._get_parent(parent_email, for_update=True)

        exists = self.db.query(ChildModel.child_id).filter(ChildModel.username == username).first()
        if exists or find_parent_listing(self.db, username) is not None:
            raise ConflictError("Username already taken")

        if available_child_slots(parent) <= 0:
            raise QuotaExceededError(
                "You have reached your maximum allowed number of children. "
                "To add more, please remove existing children first."
            )

        if not password or not password.strip():
            password = generate_child_password()

        child = ChildModel(
            child_id=secrets.token_hex(12),
            name=name,
            username=username,
            password=hash_password(password),
            parent_email=parent.email,
            year=year,
            year_group=year_to_group(year),
            progress=[],
            created_at=datetime.now(pytz.utc).isoformat(),
        )
        self.db.add(child)
        # JSON columns only track reassignment
        parent.children = [*(parent.children or []), username]
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError("Username already taken")

        logger.info("Added child %s to parent %s", username, parent.email)
        return {"username": username, "password": password}

    def remove_child(self, parent_email: str, username: str) -> None:
        """Remove a child from a parent's roster and delete its record.

        Raises:
            NotFoundError: If the parent does not exist.
            ForbiddenError: If the parent does not own ``username``.
        """
        parent = self._get_parent(parent_email, for_update=True)
        if username not in (parent.children or []):
            raise ForbiddenError("This child does not belong to this parent")

        parent.children = [c for c in parent.children if c != username]
        # Legacy roster entries have no child record
        self.db.query(ChildModel).filter(
            ChildModel.username == username, ChildModel.parent_email == parent.email
        ).delete()
        self.db.commit()
        logger.info("Removed child %s from parent %s", username, parent.email)

    def get_child(self, username: str) -> ChildModel:
        child = self.db.query(ChildModel).filter(ChildModel.username == username).first()
        if child is None:
            raise NotFoundError("Child not found")
        return child

    def list_children(self, parent_email: str) -> List[str]:
        return list(self._get_parent(parent_email).children or [])

    def record_progress(self, username: str, topic: str, score: float) -> ChildModel:
        """Append a completed topic attempt to a child's progress."""
        child = self.get_child(username)
        entry = {
            "topic": topic,
            "score": score,
            "completedAt": datetime.now(pytz.utc).isoformat(),
        }
        child.progress = [*(child.progress or []), entry]
        self.db.commit()
        self.db.refresh(child)
        return child
