"""System log (admin audit trail) database model."""

from sqlalchemy import JSON, Column, Integer, String

from .base import Base


class SystemLogModel(Base):
    """Append-only audit entry for admin actions."""

    __tablename__ = "system_logs"

    id = Column(Integer, primary_key=True, index=True)
    type = Column(String, nullable=False)  # 'error', 'deletion' or 'edit'
    message = Column(String, nullable=False)
    admin_email = Column(String, nullable=False)
    target_id = Column(String, nullable=True)
    target_type = Column(String, nullable=True)
    details = Column(JSON, nullable=False, default=dict)
    timestamp = Column(String, index=True, nullable=False)
