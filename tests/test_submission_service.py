import pytest

from codemaster.core.exceptions import ResourceNotFoundError
from codemaster.models.ledger import SolvedProblem
from codemaster.models.submission import Submission
from codemaster.models.user import User
from codemaster.schemas.submission import SubmissionCreate
from codemaster.services.submission_service import judge, submission_service

from conftest import make_problem, make_user

GOOD_CODE = "def solve(nums):\n    return sorted(nums)\n"


def _submit(db, user, problem, code=GOOD_CODE, language="python"):
    return submission_service.submit(
        db,
        user.id,
        SubmissionCreate(problem_id=problem.id, language=language, code=code),
    )


def _balance(db, user_id):
    db.expire_all()
    return db.query(User.points).filter(User.id == user_id).scalar()


def test_judge_threshold():
    assert judge("x" * 10) == "Accepted"
    assert judge("x" * 9) == "Wrong Answer"
    assert judge("") == "Wrong Answer"


def test_accepted_submission_credits_once(db):
    user = make_user(db, "solver")
    problem = make_problem(db, "Merge Intervals", "Medium")

    first = _submit(db, user, problem)
    second = _submit(db, user, problem)

    assert first.status == second.status == "Accepted"
    assert _balance(db, user.id) == 20
    assert db.query(SolvedProblem).filter(SolvedProblem.user_id == user.id).count() == 1
    assert db.query(Submission).filter(Submission.user_id == user.id).count() == 2


def test_short_code_is_wrong_answer_without_credit(db):
    user = make_user(db, "rusher")
    problem = make_problem(db, "Short Input", "Hard")

    submission = _submit(db, user, problem, code="print()")

    assert submission.status == "Wrong Answer"
    assert _balance(db, user.id) == 0
    assert db.query(SolvedProblem).count() == 0


def test_metrics_are_recorded(db):
    user = make_user(db, "metrics")
    problem = make_problem(db, "Metrics")

    submission = _submit(db, user, problem)

    assert 0 <= submission.execution_time < 100
    assert 1000 <= submission.memory_used < 6000


def test_unknown_problem(db):
    user = make_user(db, "ghost")
    with pytest.raises(ResourceNotFoundError):
        submission_service.submit(
            db,
            user.id,
            SubmissionCreate(problem_id=999, language="python", code=GOOD_CODE),
        )
    assert db.query(Submission).count() == 0


def test_history_is_newest_first_and_per_user(db):
    user = make_user(db, "historian")
    other = make_user(db, "neighbor")
    problem = make_problem(db, "History")

    first = _submit(db, user, problem, code="short")
    second = _submit(db, user, problem)
    _submit(db, other, problem)

    history = submission_service.get_user_submissions(db, user.id)

    assert [item.id for item in history] == [second.id, first.id]
    assert history[0].problem.title == "History"


def test_camel_case_payload_is_accepted():
    payload = SubmissionCreate.model_validate({"problemId": 3, "language": "cpp", "code": "int main(){}"})
    assert payload.problem_id == 3
    assert payload.language.value == "cpp"
