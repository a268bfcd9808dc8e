"""Registration and email verification routes."""

import logging
from typing import Optional

from fastapi import APIRouter

from mathwizard.core.dependencies import AccountManagerDep, MailerDep
from mathwizard.schemas.user import (
    RegisterParentRequest,
    RegisterSchoolRequest,
    VerifyCodeRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Registration"])


@router.post("/register/parent", summary="Register a parent")
def register_parent(
    req: RegisterParentRequest,
    account_manager: AccountManagerDep,
    mailer: MailerDep,
) -> dict:
    """Create an unverified parent and email the verification link and code.

    The account is kept when the email cannot be delivered; ``emailSent``
    tells the client whether to expect it.
    """
    parent = account_manager.register_parent(
        name=req.name.strip(),
        email=req.email.strip(),
        password=req.password,
        max_children=req.maxChildren,
    )
    email_sent = mailer.send_verification_email(
        parent.email, parent.name, parent.verification_token, parent.verification_code
    )
    if not email_sent:
        logger.warning("Verification email for %s was not sent", parent.email)
    return {
        "success": True,
        "message": "Parent registered. Check your email for verification.",
        "emailSent": email_sent,
    }


@router.post("/register/school", summary="Register a school")
def register_school(req: RegisterSchoolRequest, account_manager: AccountManagerDep) -> dict:
    account_manager.register_school(
        school_name=req.schoolName.strip(),
        admin_email=req.adminEmail.strip(),
        password=req.password,
        number_of_teachers=req.numberOfTeachers,
    )
    return {"success": True, "message": "School registered successfully."}


@router.get("/verify-email", summary="Verify an email with the link token")
def verify_email(account_manager: AccountManagerDep, token: Optional[str] = None) -> dict:
    account_manager.verify_by_token(token)
    return {"success": True, "message": "Email verified successfully"}


@router.post("/verify-code", summary="Verify an email with the 6-digit code")
def verify_code(req: VerifyCodeRequest, account_manager: AccountManagerDep) -> dict:
    account_manager.verify_by_code(req.email.strip(), req.code.strip())
    return {"success": True, "message": "Email verified successfully"}
