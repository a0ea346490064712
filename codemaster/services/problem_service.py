"""Problem service - problem registry CRUD"""

from sqlalchemy.orm import Session, selectinload
from typing import List
import logging

from codemaster.models.problem import Problem, ProblemTestCase
from codemaster.models.submission import Submission
from codemaster.schemas.problem import ProblemCreate, ProblemUpdate
from codemaster.core.exceptions import ResourceAlreadyExistsError, ResourceNotFoundError

logger = logging.getLogger(__name__)


def _build_test_cases(cases) -> List[ProblemTestCase]:
    return [
        ProblemTestCase(position=index, input=case.input, output=case.output, is_public=case.is_public)
        for index, case in enumerate(cases)
    ]


class ProblemService:
    """Service for problems"""

    @staticmethod
    def list_problems(db: Session) -> List[Problem]:
        return (
            db.query(Problem)
            .options(selectinload(Problem.test_cases))
            .order_by(Problem.id)
            .all()
        )

    @staticmethod
    def get_problem(db: Session, problem_id: int) -> Problem:
        """Get problem by ID"""
        problem = db.query(Problem).filter(Problem.id == problem_id).first()
        if not problem:
            raise ResourceNotFoundError("Problem")
        return problem

    @staticmethod
    def _ensure_unique_title(db: Session, title: str, exclude_id: int = None) -> None:
        query = db.query(Problem.id).filter(Problem.title == title)
        if exclude_id is not None:
            query = query.filter(Problem.id != exclude_id)
        if query.first():
            raise ResourceAlreadyExistsError("Problem", f"Problem '{title}' already exists")

    @staticmethod
    def create_problem(db: Session, data: ProblemCreate) -> Problem:
        """
        Create a problem with its ordered test cases

        Args:
            db: Database session
            data: Problem payload

        Returns:
            Created problem
        """
        ProblemService._ensure_unique_title(db, data.title)

        problem = Problem(
            title=data.title,
            description=data.description,
            difficulty=data.difficulty.value,
            constraints=data.constraints,
            input_format=data.input_format,
            output_format=data.output_format,
            template=data.template,
            test_cases=_build_test_cases(data.test_cases),
        )
        db.add(problem)
        db.commit()
        db.refresh(problem)

        logger.info(f"Created problem {problem.id}: {problem.title} ({problem.difficulty})")
        return problem

    @staticmethod
    def update_problem(db: Session, problem_id: int, data: ProblemUpdate) -> Problem:
        """Partial update; only fields present in the payload change"""
        problem = ProblemService.get_problem(db, problem_id)
        changes = data.model_dump(exclude_unset=True)

        if changes.get("title") is not None and changes["title"] != problem.title:
            ProblemService._ensure_unique_title(db, changes["title"], exclude_id=problem.id)

        for field, value in changes.items():
            if value is None:
                continue
            if field == "test_cases":
                problem.test_cases = _build_test_cases(data.test_cases)
            elif field == "difficulty":
                problem.difficulty = data.difficulty.value
            else:
                setattr(problem, field, value)

        db.commit()
        db.refresh(problem)
        logger.info(f"Updated problem {problem.id}: {sorted(changes)}")
        return problem

    @staticmethod
    def delete_problem(db: Session, problem_id: int) -> None:
        """Delete a problem that nobody has submitted to"""
        problem = ProblemService.get_problem(db, problem_id)

        if db.query(Submission.id).filter(Submission.problem_id == problem_id).first():
            raise ResourceAlreadyExistsError(
                "Submission",
                "Problem has submissions and cannot be removed",
            )

        db.delete(problem)
        db.commit()
        logger.info(f"Deleted problem {problem_id}")


# Singleton instance
problem_service = ProblemService()
