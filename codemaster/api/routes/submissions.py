"""Submission routes"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from codemaster.core.database import get_db
from codemaster.config import settings
from codemaster.schemas.submission import SubmissionCreate, SubmissionResponse, SubmissionHistoryItem
from codemaster.services.submission_service import submission_service
from codemaster.services.rate_limiter import rate_limiter
from codemaster.api.deps import RequestContext, get_request_context

router = APIRouter()


@router.post("", response_model=SubmissionResponse, status_code=status.HTTP_201_CREATED)
def submit_solution(
    submission: SubmissionCreate,
    ctx: RequestContext = Depends(get_request_context),
    db: Session = Depends(get_db)
):
    """
    Submit a solution

    Args:
        submission: Problem, language and code
        ctx: Request context
        db: Database session

    Returns:
        Created submission with its verdict
    """
    rate_limiter.enforce(
        f"submit:{ctx.user_id}",
        [
            (settings.SUBMISSION_RATE_LIMIT_PER_MINUTE, 60, "Too many submissions. Please wait a minute."),
            (settings.SUBMISSION_RATE_LIMIT_PER_HOUR, 3600, "Hourly submission limit reached. Please try later."),
        ],
    )
    return submission_service.submit(db, ctx.user_id, submission)


@router.get("/user", response_model=List[SubmissionHistoryItem])
def get_user_submissions(
    ctx: RequestContext = Depends(get_request_context),
    db: Session = Depends(get_db)
):
    """Caller's submissions, newest first"""
    return submission_service.get_user_submissions(db, ctx.user_id)
