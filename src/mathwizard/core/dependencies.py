"""Dependency injection module for FastAPI.

This module provides dependency injection functions for FastAPI routes. Every
manager gets the request-scoped DB session; the admin credential pair is
resolved from configuration so tests can override it.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from mathwizard import config
from mathwizard.core.database import get_db
from mathwizard.schemas.user import AdminCredentials
from mathwizard.utils.account_manager import AccountManager
from mathwizard.utils.admin_manager import AdminManager
from mathwizard.utils.audit_logger import AuditLogger
from mathwizard.utils.child_manager import ChildManager
from mathwizard.utils.mailer import Mailer
from mathwizard.utils.partner_manager import PartnerManager
from mathwizard.utils.roster_manager import RosterManager
from mathwizard.utils.topic_manager import TopicManager


def get_admin_credentials() -> AdminCredentials:
    """Get the static admin credential pair from configuration."""
    return AdminCredentials(email=config.ADMIN_EMAIL, password=config.ADMIN_PASSWORD)


def get_mailer() -> Mailer:
    return Mailer()


def get_account_manager(
    db: Session = Depends(get_db),
    admin: AdminCredentials = Depends(get_admin_credentials),
) -> AccountManager:
    """Get AccountManager instance with request-scoped DB session.

    Args:
        db: Database session.
        admin: Static admin credentials.

    Returns:
        AccountManager instance.
    """
    return AccountManager(db, admin)


def get_child_manager(db: Session = Depends(get_db)) -> ChildManager:
    return ChildManager(db)


def get_partner_manager(db: Session = Depends(get_db)) -> PartnerManager:
    return PartnerManager(db)


def get_audit_logger(db: Session = Depends(get_db)) -> AuditLogger:
    return AuditLogger(db)


def get_admin_manager(
    db: Session = Depends(get_db),
    audit: AuditLogger = Depends(get_audit_logger),
) -> AdminManager:
    """Get AdminManager sharing the request's AuditLogger."""
    return AdminManager(db, audit)


def get_topic_manager(db: Session = Depends(get_db)) -> TopicManager:
    return TopicManager(db)


def get_roster_manager(db: Session = Depends(get_db)) -> RosterManager:
    return RosterManager(db)


# Type aliases for dependency injection
AdminCredentialsDep = Annotated[AdminCredentials, Depends(get_admin_credentials)]
MailerDep = Annotated[Mailer, Depends(get_mailer)]
AccountManagerDep = Annotated[AccountManager, Depends(get_account_manager)]
ChildManagerDep = Annotated[ChildManager, Depends(get_child_manager)]
PartnerManagerDep = Annotated[PartnerManager, Depends(get_partner_manager)]
AuditLoggerDep = Annotated[AuditLogger, Depends(get_audit_logger)]
AdminManagerDep = Annotated[AdminManager, Depends(get_admin_manager)]
TopicManagerDep = Annotated[TopicManager, Depends(get_topic_manager)]
RosterManagerDep = Annotated[RosterManager, Depends(get_roster_manager)]
