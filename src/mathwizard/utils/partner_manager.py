"""Managing partner roster utilities.

A parent can share account management with up to ``MAX_PARTNERS`` partners.
Partner passwords are hashed like primary account passwords and are never
returned by any read.
"""

import logging
from datetime import datetime
from typing import List, Optional

import pytz
from sqlalchemy.orm import Session

from mathwizard.config import MAX_PARTNERS
from mathwizard.core.exceptions import (
    ConflictError,
    LimitExceededError,
    NotFoundError,
    ValidationError,
)
from mathwizard.models.parent import ParentModel, PartnerModel
from mathwizard.utils.converters import partners_to_list
from mathwizard.utils.credentials import hash_password

logger = logging.getLogger(__name__)


class PartnerManager:
    """Manages the partners and settings of a parent account."""

    def __init__(self, db: Session):
        self.db = db

    def get_parent(self, parent_email: str) -> ParentModel:
        parent = self.db.query(ParentModel).filter(ParentModel.email == parent_email).first()
        if parent is None:
            raise NotFoundError("Parent not found")
        return parent

    def list_partners(self, parent_email: str) -> List[dict]:
        return partners_to_list(self.get_parent(parent_email))

    def add_partner(
        self, parent_email: str, name: Optional[str], email: str, password: Optional[str]
    ) -> List[dict]:
        """Add a managing partner.

        Args:
            parent_email: Email of the owning parent.
            name: Partner display name.
            email: Partner email, unique within this parent's partners.
            password: Partner password; must not be blank.

        Returns:
            The partner list, without passwords.

        Raises:
            NotFoundError: If the parent does not exist.
            LimitExceededError: If the parent already has MAX_PARTNERS partners.
            ConflictError: If a partner with this email exists.
            ValidationError: If the password is empty.
        """
        parent = self.get_parent(parent_email)

        if len(parent.partners) >= MAX_PARTNERS:
            raise LimitExceededError(
                f"Maximum of {MAX_PARTNERS} managing partners allowed"
            )
        if any(p.email == email for p in parent.partners):
            raise ConflictError("Partner with this email already exists")
        if not password or not password.strip():
            raise ValidationError("Password is required for partner")

        parent.partners.append(
            PartnerModel(
                name=name,
                email=email,
                password=hash_password(password),
                added_at=datetime.now(pytz.utc).isoformat(),
            )
        )
        self.db.commit()
        self.db.refresh(parent)
        logger.info("Added partner to parent %s (%d total)", parent.email, len(parent.partners))
        return partners_to_list(parent)

    def remove_partner(self, parent_email: str, partner_email: str) -> List[dict]:
        """Remove a partner by email. Removing an unknown partner is a no-op.

        Raises:
            NotFoundError: If the parent does not exist.
        """
        parent = self.get_parent(parent_email)
        remaining = [p for p in parent.partners if p.email != partner_email]
        if len(remaining) != len(parent.partners):
            parent.partners = remaining
            self.db.commit()
            self.db.refresh(parent)
            logger.info("Removed partner from parent %s", parent.email)
        return partners_to_list(parent)

    def update_settings(self, parent_email: str, name: str) -> ParentModel:
        """Update the parent's display name."""
        parent = self.get_parent(parent_email)
        parent.name = name
        self.db.commit()
        self.db.refresh(parent)
        return parent
