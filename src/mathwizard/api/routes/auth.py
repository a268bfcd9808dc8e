"""Authentication routes.

This module handles login for adults and children, the two-step login email
check, and the JWT helpers used to guard admin routes.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

import pytz
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from mathwizard.config import (
    ACCESS_TOKEN_EXPIRE_MINUTES,
    JWT_ALGORITHM,
    JWT_SECRET_KEY,
)
from mathwizard.core.dependencies import AccountManagerDep
from mathwizard.schemas.user import (
    CheckEmailRequest,
    ChildLoginRequest,
    LoginRequest,
    Principal,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Auth"])

# HTTP Bearer token security
security = HTTPBearer(auto_error=False)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT access token.

    Args:
        data: Data to encode in the token.
        expires_delta: Optional expiration time delta.

    Returns:
        Encoded JWT token string.
    """
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(pytz.utc) + expires_delta
    else:
        expire = datetime.now(pytz.utc) + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, JWT_SECRET_KEY, algorithm=JWT_ALGORITHM)


def token_for(principal: Principal) -> str:
    return create_access_token({"sub": principal.subject, "role": principal.role})


def verify_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> dict:
    """Verify JWT token from Authorization header.

    Args:
        credentials: HTTP Bearer token credentials.

    Returns:
        Decoded token payload.

    Raises:
        HTTPException: If token is missing, invalid or expired.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    try:
        payload = jwt.decode(
            credentials.credentials, JWT_SECRET_KEY, algorithms=[JWT_ALGORITHM]
        )
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
        )
    if payload.get("sub") is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
        )
    return payload


def get_current_admin(token_payload: dict = Depends(verify_token)) -> str:
    """Require an admin token.

    Returns:
        The admin email carried by the token.

    Raises:
        HTTPException: 403 if the token does not belong to the admin.
    """
    if token_payload.get("role") != "admin":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return token_payload["sub"]


@router.post("/login", summary="Adult login")
def login(req: LoginRequest, account_manager: AccountManagerDep) -> dict:
    """Login as admin, parent or school.

    Args:
        req: Login request with email and password.
        account_manager: Injected AccountManager instance.

    Returns:
        Dictionary with the user payload and a JWT token.
    """
    principal = account_manager.login(req.email.strip(), req.password)
    return {
        "success": True,
        "user": principal.model_dump(exclude_none=True),
        "token": token_for(principal),
    }


@router.post("/login/child", summary="Child login")
def login_child(req: ChildLoginRequest, account_manager: AccountManagerDep) -> dict:
    """Login as a child with username and password."""
    principal = account_manager.login_child(req.username.strip(), req.password)
    return {
        "success": True,
        "user": principal.model_dump(exclude_none=True),
        "token": token_for(principal),
    }


@router.post("/auth/check-email", summary="Resolve account type for an email")
def check_email(req: CheckEmailRequest, account_manager: AccountManagerDep) -> dict:
    """First step of the two-step login form."""
    account_type = account_manager.check_email(req.email.strip())
    return {"success": True, "accountType": account_type}
