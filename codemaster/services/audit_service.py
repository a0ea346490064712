"""Audit service for catalog and content changes made by admins."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session, joinedload

from codemaster.models.audit import AuditEvent


class AuditService:
    """Persist and read the immutable audit trail."""

    @staticmethod
    def log_event(
        db: Session,
        *,
        actor_id: Optional[int],
        action: str,
        target_type: Optional[str] = None,
        target_id: Optional[str] = None,
        ip_address: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> AuditEvent:
        event = AuditEvent(
            actor_id=actor_id,
            action=action,
            target_type=target_type,
            target_id=str(target_id) if target_id is not None else None,
            ip_address=ip_address,
            metadata_json=json.dumps(metadata or {}, ensure_ascii=False, default=str),
        )
        db.add(event)
        db.commit()
        db.refresh(event)
        return event

    @staticmethod
    def recent_events(db: Session, limit: int = 100) -> List[Dict[str, Any]]:
        events = (
            db.query(AuditEvent)
            .options(joinedload(AuditEvent.actor))
            .order_by(AuditEvent.id.desc())
            .limit(limit)
            .all()
        )
        return [
            {
                "id": event.id,
                "actor_id": event.actor_id,
                "actor_username": event.actor.username if event.actor else None,
                "action": event.action,
                "target_type": event.target_type,
                "target_id": event.target_id,
                "ip_address": event.ip_address,
                "metadata": json.loads(event.metadata_json or "{}"),
                "created_at": event.created_at,
            }
            for event in events
        ]


audit_service = AuditService()
