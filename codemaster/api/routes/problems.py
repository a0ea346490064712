"""Problem routes"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Optional

from codemaster.core.database import get_db
from codemaster.models.problem import Problem
from codemaster.schemas.problem import ProblemCreate, ProblemUpdate, ProblemResponse
from codemaster.services.problem_service import problem_service
from codemaster.services.audit_service import audit_service
from codemaster.api.deps import RequestContext, get_admin_context, get_optional_context

router = APIRouter()


def _present(problem: Problem, include_hidden: bool) -> ProblemResponse:
    """Hidden test cases are only shown to admins"""
    response = ProblemResponse.model_validate(problem)
    if not include_hidden:
        response.test_cases = [case for case in response.test_cases if case.is_public]
    return response


@router.get("", response_model=List[ProblemResponse])
def get_problems(
    ctx: Optional[RequestContext] = Depends(get_optional_context),
    db: Session = Depends(get_db)
):
    """List all problems"""
    include_hidden = bool(ctx and ctx.is_admin)
    return [_present(problem, include_hidden) for problem in problem_service.list_problems(db)]


@router.get("/{problem_id}", response_model=ProblemResponse)
def get_problem(
    problem_id: int,
    ctx: Optional[RequestContext] = Depends(get_optional_context),
    db: Session = Depends(get_db)
):
    """Get problem by ID"""
    return _present(problem_service.get_problem(db, problem_id), bool(ctx and ctx.is_admin))


@router.post("", response_model=ProblemResponse, status_code=status.HTTP_201_CREATED)
def create_problem(
    data: ProblemCreate,
    ctx: RequestContext = Depends(get_admin_context),
    db: Session = Depends(get_db)
):
    """Create a problem (admin only)"""
    problem = problem_service.create_problem(db, data)
    audit_service.log_event(
        db,
        actor_id=ctx.user_id,
        action="create_problem",
        target_type="problem",
        target_id=problem.id,
        ip_address=ctx.client_ip,
        metadata={"title": problem.title, "difficulty": problem.difficulty},
    )
    return _present(problem, include_hidden=True)


@router.put("/{problem_id}", response_model=ProblemResponse)
def update_problem(
    problem_id: int,
    data: ProblemUpdate,
    ctx: RequestContext = Depends(get_admin_context),
    db: Session = Depends(get_db)
):
    """Update a problem (admin only)"""
    problem = problem_service.update_problem(db, problem_id, data)
    audit_service.log_event(
        db,
        actor_id=ctx.user_id,
        action="update_problem",
        target_type="problem",
        target_id=problem.id,
        ip_address=ctx.client_ip,
        metadata={"fields": sorted(data.model_dump(exclude_unset=True))},
    )
    return _present(problem, include_hidden=True)


@router.delete("/{problem_id}")
def delete_problem(
    problem_id: int,
    ctx: RequestContext = Depends(get_admin_context),
    db: Session = Depends(get_db)
):
    """Delete a problem (admin only)"""
    problem_service.delete_problem(db, problem_id)
    audit_service.log_event(
        db,
        actor_id=ctx.user_id,
        action="delete_problem",
        target_type="problem",
        target_id=problem_id,
        ip_address=ctx.client_ip,
    )
    return {"message": "Problem removed"}
