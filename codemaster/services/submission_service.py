"""Submission service - verdicts and solve crediting"""

from sqlalchemy.orm import Session, joinedload
from typing import List, Tuple
from datetime import datetime
import random
import logging

from codemaster.config import settings
from codemaster.models.submission import Submission
from codemaster.models.problem import Problem
from codemaster.schemas.submission import SubmissionCreate
from codemaster.services.ledger_service import ledger_service
from codemaster.core.exceptions import ResourceNotFoundError
from codemaster.core.metrics import SUBMISSIONS

logger = logging.getLogger(__name__)

ACCEPTED = "Accepted"
WRONG_ANSWER = "Wrong Answer"


def judge(code: str) -> str:
    """
    Placeholder verdict until a sandboxed judge exists: any code of at
    least SUBMISSION_MIN_CODE_LENGTH characters is accepted.
    """
    if not code or len(code) < settings.SUBMISSION_MIN_CODE_LENGTH:
        return WRONG_ANSWER
    return ACCEPTED


def simulated_metrics() -> Tuple[float, int]:
    """Dummy execution time (ms) and memory (KB)"""
    return float(random.randint(0, 99)), random.randint(1000, 5999)


class SubmissionService:
    """Service for handling submissions"""

    @staticmethod
    def submit(db: Session, user_id: int, submission_data: SubmissionCreate) -> Submission:
        """
        Record a submission and credit the first accepted solve

        Args:
            db: Database session
            user_id: Submitting user
            submission_data: Submission payload

        Returns:
            Created submission
        """
        problem = db.query(Problem).filter(Problem.id == submission_data.problem_id).first()
        if not problem:
            raise ResourceNotFoundError("Problem")

        status = judge(submission_data.code)
        execution_time, memory_used = simulated_metrics()

        submission = Submission(
            user_id=user_id,
            problem_id=problem.id,
            language=submission_data.language.value,
            code=submission_data.code,
            status=status,
            execution_time=execution_time,
            memory_used=memory_used,
            created_at=datetime.utcnow(),
        )

        try:
            db.add(submission)
            db.flush()
            if status == ACCEPTED:
                ledger_service.credit_solve(db, user_id, problem.id, commit=False)
            db.commit()
        except Exception:
            db.rollback()
            raise

        db.refresh(submission)
        SUBMISSIONS.labels(status).inc()
        logger.info(f"Submission {submission.id} by user {user_id} for problem {problem.id}: {status}")
        return submission

    @staticmethod
    def get_user_submissions(db: Session, user_id: int) -> List[Submission]:
        """User's submissions, newest first"""
        return (
            db.query(Submission)
            .options(joinedload(Submission.problem))
            .filter(Submission.user_id == user_id)
            .order_by(Submission.created_at.desc(), Submission.id.desc())
            .all()
        )


# Singleton instance
submission_service = SubmissionService()
