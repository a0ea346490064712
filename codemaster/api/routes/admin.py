"""Admin routes - dashboard statistics and audit trail"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List

from codemaster.core.database import get_db
from codemaster.schemas.audit import AuditEventResponse, DashboardStats
from codemaster.services.admin_service import admin_service
from codemaster.services.audit_service import audit_service
from codemaster.api.deps import RequestContext, get_admin_context

router = APIRouter()


@router.get("/stats", response_model=DashboardStats)
def get_dashboard_stats(
    ctx: RequestContext = Depends(get_admin_context),
    db: Session = Depends(get_db)
):
    """Users, active users, problems and submissions"""
    return admin_service.dashboard_stats(db)


@router.get("/audit-events", response_model=List[AuditEventResponse])
def list_audit_events(
    limit: int = Query(100, ge=1, le=500),
    ctx: RequestContext = Depends(get_admin_context),
    db: Session = Depends(get_db)
):
    """Most recent admin-sensitive actions"""
    return audit_service.recent_events(db, limit=limit)
