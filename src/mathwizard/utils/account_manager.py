"""Account management utilities.

This module provides registration, email verification and login for parent,
school and child accounts. The admin account is not stored; it is a static
credential pair injected from configuration and checked before any lookup.
"""

import hmac
import logging
import secrets
from datetime import datetime
from typing import Optional, Union

import pytz
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from mathwizard.config import DEFAULT_YEAR_GROUP
from mathwizard.core.exceptions import (
    ConflictError,
    InvalidCredentialsError,
    NotFoundError,
    UnverifiedError,
    ValidationError,
)
from mathwizard.models.child import ChildModel
from mathwizard.models.parent import ParentModel
from mathwizard.models.school import SchoolModel
from mathwizard.schemas.user import AdminCredentials, Principal
from mathwizard.utils import verification
from mathwizard.utils.child_manager import find_parent_listing
from mathwizard.utils.converters import (
    child_to_principal,
    parent_to_principal,
    school_to_principal,
)
from mathwizard.utils.credentials import check_password, hash_password

logger = logging.getLogger(__name__)

AccountModel = Union[ParentModel, SchoolModel, ChildModel]


def _same_secret(a: Optional[str], b: Optional[str]) -> bool:
    if a is None or b is None:
        return False
    return hmac.compare_digest(a.encode("utf-8"), b.encode("utf-8"))


class AccountManager:
    """Manages account persistence, verification and authentication."""

    def __init__(self, db: Session, admin: Optional[AdminCredentials] = None):
        """Initialize AccountManager.

        Args:
            db: SQLAlchemy Session.
            admin: Static admin credentials; admin login is disabled if None
                or incomplete.
        """
        self.db = db
        self.admin = admin or AdminCredentials()

    # --- Lookups ---

    def get_parent_by_email(self, email: str) -> Optional[ParentModel]:
        return self.db.query(ParentModel).filter(ParentModel.email == email).first()

    def get_school_by_email(self, email: str) -> Optional[SchoolModel]:
        return self.db.query(SchoolModel).filter(SchoolModel.admin_email == email).first()

    def email_in_use(self, email: str) -> bool:
        """Return True if a parent or school account already uses ``email``."""
        return (
            self.get_parent_by_email(email) is not None
            or self.get_school_by_email(email) is not None
        )

    def find_parent_listing(self, username: str) -> Optional[ParentModel]:
        """Find a parent whose ``children`` list contains ``username``."""
        return find_parent_listing(self.db, username)

    # --- Registration ---

    def register_parent(
        self, name: str, email: str, password: str, max_children: int = 0
    ) -> ParentModel:
        """Create an unverified parent account.

        Args:
            name: Display name.
            email: Login email, unique across parents and schools.
            password: Plain text password, stored hashed.
            max_children: Child quota.

        Returns:
            The created ParentModel, carrying fresh verification token and code.

        Raises:
            ConflictError: If the email is already registered.
        """
        if self.email_in_use(email):
            raise ConflictError("An account with this email already exists")

        model = ParentModel(
            parent_id=secrets.token_hex(12),
            name=name,
            email=email,
            password=hash_password(password),
            role="parent",
            children=[],
            max_children=max_children,
            verified=False,
            verification_token=verification.new_token(),
            verification_code=verification.new_code(),
            created_at=datetime.now(pytz.utc).isoformat(),
        )
        self._insert(model)
        logger.info("Registered parent account: %s", email)
        return model

    def register_school(
        self, school_name: str, admin_email: str, password: str, number_of_teachers: int = 1
    ) -> SchoolModel:
        """Create a school account. Schools are verified at registration.

        Raises:
            ConflictError: If the email is already registered.
        """
        if self.email_in_use(admin_email):
            raise ConflictError("An account with this email already exists")

        model = SchoolModel(
            school_id=secrets.token_hex(12),
            school_name=school_name,
            admin_email=admin_email,
            password=hash_password(password),
            role="school",
            number_of_teachers=number_of_teachers,
            verified=True,
            created_at=datetime.now(pytz.utc).isoformat(),
        )
        self._insert(model)
        logger.info("Registered school account: %s", admin_email)
        return model

    def _insert(self, model: AccountModel) -> None:
        self.db.add(model)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError("An account with this email already exists")
        self.db.refresh(model)

    # --- Verification ---

    def verify_by_token(self, token: Optional[str]) -> AccountModel:
        """Verify the account holding ``token``.

        Both the token and the code are cleared, so neither can be reused.

        Raises:
            ValidationError: If no account holds the token.
        """
        if not token:
            raise ValidationError("Invalid or expired token")
        account = (
            self.db.query(ParentModel).filter(ParentModel.verification_token == token).first()
            or self.db.query(SchoolModel).filter(SchoolModel.verification_token == token).first()
        )
        if account is None:
            raise ValidationError("Invalid or expired token")
        self._mark_verified(account)
        return account

    def verify_by_code(self, email: str, code: Optional[str]) -> AccountModel:
        """Verify the account registered under ``email`` with its 6-digit code.

        Raises:
            ValidationError: If the email and code do not match an account.
        """
        if not email or not code:
            raise ValidationError("Invalid email or code")
        account = (
            self.db.query(ParentModel)
            .filter(ParentModel.email == email, ParentModel.verification_code == code)
            .first()
            or self.db.query(SchoolModel)
            .filter(SchoolModel.admin_email == email, SchoolModel.verification_code == code)
            .first()
        )
        if account is None:
            raise ValidationError("Invalid email or code")
        self._mark_verified(account)
        return account

    def _mark_verified(self, account: Union[ParentModel, SchoolModel]) -> None:
        account.verified = True
        account.verification_token = None
        account.verification_code = None
        self.db.commit()
        logger.info("Verified account %s", getattr(account, "email", None) or account.admin_email)

    # --- Login ---

    def check_email(self, email: str) -> str:
        """Resolve which kind of account an email belongs to.

        Returns:
            'admin', 'parent' or 'school'.

        Raises:
            NotFoundError: If no account uses the email.
        """
        if self.admin.enabled and email == self.admin.email:
            return "admin"
        if self.get_parent_by_email(email) is not None:
            return "parent"
        if self.get_school_by_email(email) is not None:
            return "school"
        raise NotFoundError("No account found for this email")

    def login(self, email: str, password: str) -> Principal:
        """Authenticate an adult account.

        Unknown emails and wrong passwords produce the same error. An
        unverified account is only reported once its password matched.

        Args:
            email: Admin, parent or school email.
            password: Plain text password.

        Returns:
            The authenticated Principal.

        Raises:
            InvalidCredentialsError: If the credentials do not match.
            UnverifiedError: If the account has not verified its email.
        """
        if (
            self.admin.enabled
            and _same_secret(email, self.admin.email)
            and _same_secret(password, self.admin.password)
        ):
            logger.info("Admin login: %s", email)
            return Principal(role="admin", email=self.admin.email, name="Administrator")

        parent = self.get_parent_by_email(email)
        if parent is not None:
            self._check_account_password(parent, password)
            if not parent.verified:
                raise UnverifiedError()
            return parent_to_principal(parent)

        school = self.get_school_by_email(email)
        if school is not None:
            self._check_account_password(school, password)
            if not school.verified:
                raise UnverifiedError()
            return school_to_principal(school)

        raise InvalidCredentialsError()

    def login_child(self, username: str, password: str) -> Principal:
        """Authenticate a child by username.

        Children that only exist as an entry in a parent's ``children`` list
        (created before child records were stored) are accepted with any
        password and get the default year group.

        Raises:
            InvalidCredentialsError: If the username is unknown or the
                password does not match.
        """
        child = self.db.query(ChildModel).filter(ChildModel.username == username).first()
        if child is not None:
            self._check_account_password(
                child, password, error_message="Invalid username or password"
            )
            return child_to_principal(child)

        parent = self.find_parent_listing(username)
        if parent is not None:
            logger.warning("Legacy child login for %s (parent %s)", username, parent.email)
            return Principal(
                role="child",
                username=username,
                name=username,
                yearGroup=DEFAULT_YEAR_GROUP,
                legacy=True,
            )

        raise InvalidCredentialsError("Invalid username or password")

    def _check_account_password(
        self,
        account: AccountModel,
        password: str,
        error_message: str = "Invalid email or password",
    ) -> None:
        ok, upgraded = check_password(password, account.password)
        if not ok:
            raise InvalidCredentialsError(error_message)
        if upgraded is not None:
            account.password = upgraded
            self.db.commit()
            logger.info("Upgraded legacy password in %s", account.__tablename__)
