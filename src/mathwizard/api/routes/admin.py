"""Admin routes.

All routes require an admin bearer token. Store failures during a mutation
are recorded as ``error`` audit entries before the 500 response.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError

from mathwizard.api.routes.auth import get_current_admin
from mathwizard.config import SYSTEM_LOG_LIMIT
from mathwizard.core.dependencies import AdminManagerDep, AuditLoggerDep
from mathwizard.core.exceptions import InternalError
from mathwizard.schemas.admin import UpdateParentRequest, UpdateSchoolRequest
from mathwizard.utils.converters import log_to_dict

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["Admin"])


@router.get("/users", summary="List parent and school accounts")
def list_users(
    admin_manager: AdminManagerDep,
    admin_email: str = Depends(get_current_admin),
) -> dict:
    return {"success": True, "users": admin_manager.list_users()}


@router.delete("/users/{user_id}", summary="Delete a parent or school account")
def delete_user(
    user_id: str,
    admin_manager: AdminManagerDep,
    audit: AuditLoggerDep,
    admin_email: str = Depends(get_current_admin),
) -> dict:
    """Delete an account and record a ``deletion`` audit entry.

    Args:
        user_id: Parent or school ID.
        admin_manager: Injected AdminManager instance.
        audit: Injected AuditLogger instance.
        admin_email: Email of the authenticated admin.

    Returns:
        Dictionary with success message.
    """
    try:
        kind = admin_manager.delete_user(user_id, admin_email)
    except SQLAlchemyError as e:
        logger.exception("Error deleting user %s", user_id)
        audit.record_error(f"Error deleting user ID: {user_id}", admin_email, e, user_id, "unknown")
        raise InternalError("Failed to delete user") from e
    return {"success": True, "message": f"{kind.capitalize()} removed successfully"}


@router.put("/update-parent/{user_id}", summary="Edit a parent account")
def update_parent(
    user_id: str,
    req: UpdateParentRequest,
    admin_manager: AdminManagerDep,
    audit: AuditLoggerDep,
    admin_email: str = Depends(get_current_admin),
) -> dict:
    try:
        admin_manager.update_parent(
            user_id, req.name.strip(), req.email.strip(), req.maxChildren, admin_email
        )
    except SQLAlchemyError as e:
        logger.exception("Error updating parent %s", user_id)
        audit.record_error(f"Error updating parent ID: {user_id}", admin_email, e, user_id, "parent")
        raise InternalError("Failed to update parent") from e
    return {"success": True, "message": "Parent updated successfully"}


@router.put("/update-school/{user_id}", summary="Edit a school account")
def update_school(
    user_id: str,
    req: UpdateSchoolRequest,
    admin_manager: AdminManagerDep,
    audit: AuditLoggerDep,
    admin_email: str = Depends(get_current_admin),
) -> dict:
    try:
        admin_manager.update_school(
            user_id, req.name.strip(), req.email.strip(), req.numberOfTeachers, admin_email
        )
    except SQLAlchemyError as e:
        logger.exception("Error updating school %s", user_id)
        audit.record_error(f"Error updating school ID: {user_id}", admin_email, e, user_id, "school")
        raise InternalError("Failed to update school") from e
    return {"success": True, "message": "School updated successfully"}


@router.get("/system-logs", summary="Recent audit entries")
def system_logs(
    audit: AuditLoggerDep,
    admin_email: str = Depends(get_current_admin),
) -> dict:
    return {
        "success": True,
        "logs": [log_to_dict(m) for m in audit.list_recent(SYSTEM_LOG_LIMIT)],
    }
