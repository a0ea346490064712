"""Contest routes"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from codemaster.core.database import get_db
from codemaster.schemas.contest import ContestCreate, ContestResponse, ContestDetailResponse
from codemaster.schemas.response import MessageResponse
from codemaster.services.contest_service import contest_service
from codemaster.services.audit_service import audit_service
from codemaster.api.deps import RequestContext, get_request_context, get_admin_context

router = APIRouter()


@router.get("", response_model=List[ContestResponse])
def get_contests(db: Session = Depends(get_db)):
    """All contests, latest first"""
    return contest_service.list_contests(db)


@router.post("", response_model=ContestDetailResponse, status_code=status.HTTP_201_CREATED)
def create_contest(
    data: ContestCreate,
    ctx: RequestContext = Depends(get_admin_context),
    db: Session = Depends(get_db)
):
    """Create a contest (admin only)"""
    contest = contest_service.create_contest(db, data)
    audit_service.log_event(
        db,
        actor_id=ctx.user_id,
        action="create_contest",
        target_type="contest",
        target_id=contest.id,
        ip_address=ctx.client_ip,
        metadata={"title": contest.title, "problems": data.problems},
    )
    return contest_service.get_contest(db, contest.id)


@router.get("/{contest_id}", response_model=ContestDetailResponse)
def get_contest(contest_id: int, db: Session = Depends(get_db)):
    """Contest with problems and participants"""
    return contest_service.get_contest(db, contest_id)


@router.post("/{contest_id}/register", response_model=MessageResponse)
def register_for_contest(
    contest_id: int,
    ctx: RequestContext = Depends(get_request_context),
    db: Session = Depends(get_db)
):
    """Register the caller for a contest"""
    contest_service.register(db, contest_id, ctx.user_id)
    return MessageResponse(message="Registered successfully")
