"""Configuration module for the MathWizard backend.

This module provides centralized configuration management, including directory
paths, API server settings, database and mail settings, and account defaults.
All configuration values can be overridden via environment variables.
"""

import logging
import os
from pathlib import Path
from typing import Dict, List, Optional

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

# --- Directory Configuration ---

# Root directory of the project
ROOT_DIR = Path(__file__).parent.parent.parent.resolve()

# Data directory name
DATA_DIR_NAME = "data"
DATA_DIR = ROOT_DIR / DATA_DIR_NAME

# --- API Server Configuration ---

API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
API_PORT: int = int(os.getenv("API_PORT", os.getenv("PORT", "4001")))

# CORS allowed origins (comma-separated list)
# Default includes local development addresses. For production, set via
# CORS_ALLOWED_ORIGINS environment variable.
_CORS_ALLOWED_ORIGINS_STR: str = os.getenv(
    "CORS_ALLOWED_ORIGINS",
    "http://localhost:5173,http://127.0.0.1:5173,http://localhost:3000,"
    "http://127.0.0.1:3000",
)
CORS_ALLOWED_ORIGINS: List[str] = [
    origin.strip()
    for origin in _CORS_ALLOWED_ORIGINS_STR.split(",")
    if origin.strip()
]

# Base URL of the frontend, used to build email verification links
FRONTEND_URL: str = os.getenv("FRONTEND_URL", "http://localhost:3000").rstrip("/")

# --- Logging Configuration ---

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# --- Database Configuration ---

DATABASE_URL: str = os.getenv(
    "DATABASE_URL", f"sqlite:///{DATA_DIR}/mathwizard.db"
)

# --- Mail Configuration ---

SMTP_HOST: Optional[str] = os.getenv("SMTP_HOST")
SMTP_PORT: int = int(os.getenv("SMTP_PORT", "587"))
SMTP_USER: Optional[str] = os.getenv("SMTP_USER")
SMTP_PASS: Optional[str] = os.getenv("SMTP_PASS")
SMTP_FROM: Optional[str] = os.getenv("SMTP_FROM", SMTP_USER)

# --- Authentication Configuration ---

# Static admin credential pair. Admin login is disabled if either is unset.
ADMIN_EMAIL: Optional[str] = os.getenv("ADMIN_EMAIL")
ADMIN_PASSWORD: Optional[str] = os.getenv("ADMIN_PASSWORD")

JWT_SECRET_KEY: str = os.getenv("JWT_SECRET_KEY", "your-secret-key-change-in-production")
JWT_ALGORITHM: str = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES: int = int(
    os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24))
)

# Bcrypt rounds for password hashing (higher = more secure but slower)
BCRYPT_ROUNDS: int = int(os.getenv("BCRYPT_ROUNDS", "12"))

# --- Account Configuration ---

# Maximum number of managing partners per parent account
MAX_PARTNERS: int = 4

# Year group used when a year label is unknown, and for legacy child logins
DEFAULT_YEAR_GROUP: int = 5

# Curriculum year label -> numeric year group
YEAR_GROUPS: Dict[str, int] = {"reception": 0}
YEAR_GROUPS.update({f"year{n}": n for n in range(1, 12)})

# Words used to build generated child passwords ("Duck4821")
CHILD_PASSWORD_WORDS: List[str] = [
    "Duck",
    "Tiger",
    "Panda",
    "Rocket",
    "Comet",
    "Otter",
    "Dragon",
    "Planet",
]

# Number of audit entries returned by the admin log view
SYSTEM_LOG_LIMIT: int = 100


def admin_login_enabled() -> bool:
    """Return True if the static admin credential pair is configured."""
    return bool(ADMIN_EMAIL and ADMIN_PASSWORD)


def smtp_configured() -> bool:
    """Return True if outgoing mail can be sent."""
    return bool(SMTP_HOST)
