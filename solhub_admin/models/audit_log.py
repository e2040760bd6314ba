# solhub_admin/models/audit_log.py
from typing import Optional, Dict, Any
import uuid

from solhub_admin.extensions import db
from solhub_admin.core.utils import utcnow, format_datetime


class AuditLog(db.Model):
    """Model for tracking administrative actions"""

    __tablename__ = "audit_logs"

    id = db.Column(db.String(36), primary_key=True)
    admin_id = db.Column(db.String(36), nullable=True, index=True)

    # What happened
    action = db.Column(db.String(50), nullable=False)  # e.g., 'create', 'toggle_feature', 'delete'
    entity_type = db.Column(db.String(50), nullable=False)  # e.g., 'laboratory', 'feature'
    entity_id = db.Column(db.String(36), nullable=True)

    changes = db.Column(db.JSON, nullable=True)

    # Request context
    ip_address = db.Column(db.String(45), nullable=True)
    user_agent = db.Column(db.String(255), nullable=True)
    endpoint = db.Column(db.String(255), nullable=True)

    timestamp = db.Column(db.DateTime, default=utcnow, nullable=False)

    def __repr__(self):
        return f"<AuditLog {self.action} {self.entity_type}:{self.entity_id}>"

    @staticmethod
    def log_action(
        session,
        action: str,
        entity_type: str,
        entity_id: Optional[str] = None,
        changes: Optional[Dict[str, Any]] = None,
        admin_id: Optional[str] = None,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
        endpoint: Optional[str] = None,
    ) -> "AuditLog":
        """Create a new audit log entry and commit it"""
        log_entry = AuditLog(
            id=str(uuid.uuid4()),
            action=action,
            entity_type=entity_type,
            entity_id=entity_id,
            changes=changes,
            admin_id=admin_id,
            ip_address=ip_address,
            user_agent=(user_agent or "")[:255] or None,
            endpoint=endpoint,
        )

        session.add(log_entry)
        session.commit()

        return log_entry

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "admin_id": self.admin_id,
            "action": self.action,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "changes": self.changes,
            "ip_address": self.ip_address,
            "user_agent": self.user_agent,
            "endpoint": self.endpoint,
            "timestamp": format_datetime(self.timestamp),
        }
