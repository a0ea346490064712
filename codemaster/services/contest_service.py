"""Contest service - contest metadata and registration"""

from sqlalchemy.orm import Session, selectinload
from sqlalchemy.exc import IntegrityError
from datetime import datetime, timezone
from typing import Any, Dict, List
import logging

from codemaster.models.contest import Contest, ContestParticipant, ContestProblem
from codemaster.models.problem import Problem
from codemaster.models.user import User
from codemaster.schemas.contest import ContestCreate
from codemaster.core.exceptions import (
    InvalidInputError,
    ResourceAlreadyExistsError,
    ResourceNotFoundError,
)

logger = logging.getLogger(__name__)


def _naive_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(timezone.utc).replace(tzinfo=None)


class ContestService:
    """Service for contests"""

    @staticmethod
    def create_contest(db: Session, data: ContestCreate) -> Contest:
        """
        Create a contest

        Args:
            db: Database session
            data: Contest payload

        Returns:
            Created contest
        """
        if _naive_utc(data.end_time) <= _naive_utc(data.start_time):
            raise InvalidInputError("endTime must be after startTime")

        if data.problems:
            found = {
                problem_id
                for (problem_id,) in db.query(Problem.id).filter(Problem.id.in_(data.problems)).all()
            }
            missing = [problem_id for problem_id in data.problems if problem_id not in found]
            if missing:
                raise ResourceNotFoundError(f"Problem {missing[0]}")

        contest = Contest(
            title=data.title,
            description=data.description,
            start_time=data.start_time,
            end_time=data.end_time,
            problems=[
                ContestProblem(problem_id=problem_id, position=index)
                for index, problem_id in enumerate(data.problems)
            ],
        )
        db.add(contest)
        db.commit()
        db.refresh(contest)

        logger.info(f"Created contest {contest.id}: {contest.title}")
        return contest

    @staticmethod
    def list_contests(db: Session) -> List[Dict[str, Any]]:
        """All contests, latest start first"""
        contests = (
            db.query(Contest)
            .options(selectinload(Contest.participants), selectinload(Contest.problems))
            .order_by(Contest.start_time.desc(), Contest.id.desc())
            .all()
        )
        return [
            {
                "id": contest.id,
                "title": contest.title,
                "description": contest.description,
                "start_time": contest.start_time,
                "end_time": contest.end_time,
                "participant_count": len(contest.participants),
                "problem_ids": [slot.problem_id for slot in contest.problems],
            }
            for contest in contests
        ]

    @staticmethod
    def get_contest(db: Session, contest_id: int) -> Dict[str, Any]:
        """Contest with its problems and participants populated"""
        contest = db.query(Contest).filter(Contest.id == contest_id).first()
        if not contest:
            raise ResourceNotFoundError("Contest")

        return {
            "id": contest.id,
            "title": contest.title,
            "description": contest.description,
            "start_time": contest.start_time,
            "end_time": contest.end_time,
            "problems": [slot.problem for slot in contest.problems],
            "participants": [entry.user for entry in contest.participants],
        }

    @staticmethod
    def register(db: Session, contest_id: int, user_id: int) -> None:
        """Register a user once per contest"""
        if not db.query(Contest.id).filter(Contest.id == contest_id).first():
            raise ResourceNotFoundError("Contest")
        if not db.query(User.id).filter(User.id == user_id).first():
            raise ResourceNotFoundError("User")

        already = db.query(ContestParticipant.id).filter(
            ContestParticipant.contest_id == contest_id,
            ContestParticipant.user_id == user_id,
        ).first()
        if already:
            raise ResourceAlreadyExistsError("Registration", "Already registered")

        try:
            db.add(ContestParticipant(contest_id=contest_id, user_id=user_id))
            db.commit()
        except IntegrityError:
            # Concurrent registration won the unique constraint.
            db.rollback()
            raise ResourceAlreadyExistsError("Registration", "Already registered")

        logger.info(f"User {user_id} registered for contest {contest_id}")


# Singleton instance
contest_service = ContestService()
