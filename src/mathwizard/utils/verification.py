"""One-time email verification credentials."""

import secrets
import uuid


def new_token() -> str:
    """Return an opaque token for the emailed verification link."""
    return str(uuid.uuid4())


def new_code() -> str:
    """Return a 6-digit code for manual entry (100000-999999)."""
    return str(100000 + secrets.randbelow(900000))
