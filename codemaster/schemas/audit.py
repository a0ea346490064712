"""Audit and admin dashboard schemas."""

from datetime import datetime
from typing import Optional, Dict, Any

from codemaster.schemas.response import CamelModel


class AuditEventResponse(CamelModel):
    id: int
    actor_id: Optional[int] = None
    actor_username: Optional[str] = None
    action: str
    target_type: Optional[str] = None
    target_id: Optional[str] = None
    ip_address: Optional[str] = None
    metadata: Dict[str, Any] = {}
    created_at: Optional[datetime] = None


class DashboardStats(CamelModel):
    total_users: int
    total_problems: int
    active_users: int
    total_submissions: int
