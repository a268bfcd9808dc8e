"""Password hashing and migration-aware verification.

Stored passwords are either bcrypt hashes or, for accounts created before
hashing was introduced, legacy plaintext. ``parse_credential`` tags a stored
value as one or the other; a successful legacy verification always produces a
fresh bcrypt hash that the caller persists.
"""

import hmac
import logging
from dataclasses import dataclass
from typing import Optional, Tuple, Union

import bcrypt

from mathwizard import config

logger = logging.getLogger(__name__)

# Prefix markers of bcrypt hash strings
HASH_PREFIXES = ("$2a$", "$2b$", "$2y$")

# bcrypt ignores everything past 72 bytes
_BCRYPT_MAX_BYTES = 72


def _to_bytes(password: Union[str, bytes]) -> bytes:
    if isinstance(password, bytes):
        password_bytes = password
    else:
        password_bytes = str(password).encode("utf-8")
    return password_bytes[:_BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    """Hash a password using bcrypt.

    Args:
        password: Plain text password.

    Returns:
        Hashed password (bcrypt hash string).
    """
    salt = bcrypt.gensalt(rounds=config.BCRYPT_ROUNDS)
    return bcrypt.hashpw(_to_bytes(password), salt).decode("utf-8")


def is_hashed(stored: Optional[str]) -> bool:
    """Return True if ``stored`` looks like a bcrypt hash."""
    return bool(stored) and stored.startswith(HASH_PREFIXES)


@dataclass(frozen=True)
class HashedCredential:
    """A bcrypt hash."""

    value: str

    def verify(self, plain_password: str) -> bool:
        try:
            return bcrypt.checkpw(_to_bytes(plain_password), self.value.encode("utf-8"))
        except (TypeError, ValueError) as e:
            logger.error("Password verification error: %s", e)
            return False


@dataclass(frozen=True)
class LegacyCredential:
    """A password stored in plaintext."""

    value: str

    def verify(self, plain_password: str) -> bool:
        if plain_password is None:
            return False
        return hmac.compare_digest(
            str(plain_password).encode("utf-8"), self.value.encode("utf-8")
        )


Credential = Union[HashedCredential, LegacyCredential]


def parse_credential(stored: Optional[str]) -> Credential:
    """Tag a stored password value.

    Args:
        stored: Value read from an account record.

    Returns:
        HashedCredential if the value carries a bcrypt prefix, otherwise
        LegacyCredential.
    """
    if is_hashed(stored):
        return HashedCredential(stored)
    return LegacyCredential(stored or "")


def check_password(plain_password: str, stored: Optional[str]) -> Tuple[bool, Optional[str]]:
    """Verify a password and migrate legacy plaintext.

    Args:
        plain_password: Password supplied by the user.
        stored: Stored password value.

    Returns:
        Tuple ``(ok, upgraded)``. ``upgraded`` is a new bcrypt hash when a
        legacy credential matched and must be written back, else None.
    """
    if not stored:
        return False, None
    credential = parse_credential(stored)
    if not credential.verify(plain_password):
        return False, None
    if isinstance(credential, LegacyCredential):
        return True, hash_password(plain_password)
    return True, None
