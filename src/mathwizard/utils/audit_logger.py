"""Admin audit trail.

Entries are append-only. Writing an entry never raises: a failed write is
logged and reported through the boolean result so it cannot fail the admin
action it accompanies.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

import pytz
from sqlalchemy.orm import Session

from mathwizard.config import SYSTEM_LOG_LIMIT
from mathwizard.models.system_log import SystemLogModel

logger = logging.getLogger(__name__)

LOG_TYPES = ("error", "deletion", "edit")


class AuditLogger:
    """Records and lists admin audit entries."""

    def __init__(self, db: Session):
        self.db = db

    def record(
        self,
        type: str,
        message: str,
        admin_email: str,
        target_id: Optional[str] = None,
        target_type: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> bool:
        """Append one audit entry.

        Args:
            type: 'error', 'deletion' or 'edit'.
            message: Short description of the action.
            admin_email: Admin who performed the action.
            target_id: ID of the affected account.
            target_type: Kind of the affected account ('parent', 'school', ...).
            details: Free-form data such as before/after snapshots.

        Returns:
            True if the entry was stored, False otherwise.
        """
        if type not in LOG_TYPES:
            logger.error("Refusing audit entry with unknown type %r", type)
            return False
        entry = SystemLogModel(
            type=type,
            message=message,
            admin_email=admin_email or "Unknown admin",
            target_id=target_id,
            target_type=target_type,
            details=details or {},
            timestamp=datetime.now(pytz.utc).isoformat(),
        )
        try:
            self.db.add(entry)
            self.db.commit()
        except Exception:
            logger.exception("Error creating system log")
            try:
                self.db.rollback()
            except Exception:
                logger.exception("Error rolling back system log")
            return False
        return True

    def list_recent(self, limit: int = SYSTEM_LOG_LIMIT) -> List[SystemLogModel]:
        """Return the newest entries first."""
        return (
            self.db.query(SystemLogModel)
            .order_by(SystemLogModel.timestamp.desc(), SystemLogModel.id.desc())
            .limit(limit)
            .all()
        )

    def record_error(
        self,
        message: str,
        admin_email: str,
        error: Exception,
        target_id: Optional[str] = None,
        target_type: Optional[str] = None,
    ) -> bool:
        """Discard the failed unit of work, then record an ``error`` entry."""
        try:
            self.db.rollback()
        except Exception:
            logger.exception("Error discarding failed unit of work")
            return False
        return self.record(
            "error", message, admin_email, target_id, target_type, {"error": str(error)}
        )
