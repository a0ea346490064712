import pytest
from sqlalchemy import func

from codemaster.core.exceptions import InvalidInputError, ResourceNotFoundError
from codemaster.models.ledger import PointEvent, SolvedProblem
from codemaster.models.user import User
from codemaster.services.ledger_service import (
    DEFAULT_SOLVE_POINTS,
    MAX_BALANCE,
    ledger_service,
    parse_point_amount,
    points_for_difficulty,
)

from conftest import make_problem, make_user


def _balance(db, user_id):
    db.expire_all()
    return db.query(User.points).filter(User.id == user_id).scalar()


def test_difficulty_awards():
    assert points_for_difficulty("Easy") == 10
    assert points_for_difficulty("Medium") == 20
    assert points_for_difficulty("Hard") == 50
    assert points_for_difficulty("Legendary") == DEFAULT_SOLVE_POINTS == 10
    assert points_for_difficulty(None) == 10


@pytest.mark.parametrize("raw, expected", [(0, 0), (25, 25), ("40", 40), (" 7 ", 7), (12.0, 12)])
def test_parse_point_amount_accepts_whole_numbers(raw, expected):
    assert parse_point_amount(raw) == expected


@pytest.mark.parametrize(
    "raw",
    [
        None, True, -5, "abc", "", "1e3", "-3", 2.5, float("nan"), float("inf"), [10],
        2 ** 31, 10 ** 20, 1e20, "99999999999", "9" * 5000,
    ],
)
def test_parse_point_amount_rejects_garbage(raw):
    with pytest.raises(InvalidInputError):
        parse_point_amount(raw)


def test_parse_point_amount_accepts_column_maximum():
    assert parse_point_amount(MAX_BALANCE) == 2 ** 31 - 1
    assert parse_point_amount(str(MAX_BALANCE)) == MAX_BALANCE


def test_award_points_adds_to_balance(db):
    user = make_user(db, "alice", points=5)

    balance = ledger_service.award_points(db, user.id, 50, "lecture_complete")

    assert balance == 55
    assert _balance(db, user.id) == 55
    event = db.query(PointEvent).filter(PointEvent.user_id == user.id).one()
    assert event.delta == 50
    assert event.reason == "lecture_complete"
    assert event.balance_after == 55


def test_award_points_invalid_amount_leaves_balance(db):
    user = make_user(db, "bob", points=30)

    with pytest.raises(InvalidInputError):
        ledger_service.award_points(db, user.id, "lots")

    assert _balance(db, user.id) == 30
    assert db.query(PointEvent).count() == 0


def test_award_points_past_column_range_changes_nothing(db):
    user = make_user(db, "whale", points=MAX_BALANCE - 5)

    with pytest.raises(InvalidInputError):
        ledger_service.award_points(db, user.id, 10)

    assert _balance(db, user.id) == MAX_BALANCE - 5
    assert db.query(PointEvent).count() == 0

    assert ledger_service.award_points(db, user.id, 5) == MAX_BALANCE


def test_credit_solve_past_column_range_keeps_problem_unsolved(db):
    user = make_user(db, "capped", points=MAX_BALANCE)
    problem = make_problem(db, "Overflow", "Hard")

    with pytest.raises(InvalidInputError):
        ledger_service.credit_solve(db, user.id, problem.id)

    assert _balance(db, user.id) == MAX_BALANCE
    assert db.query(SolvedProblem).count() == 0


def test_award_points_unknown_user(db):
    with pytest.raises(ResourceNotFoundError):
        ledger_service.award_points(db, 999, 10)
    assert db.query(PointEvent).count() == 0


def test_credit_solve_only_once(db):
    user = make_user(db, "carol")
    problem = make_problem(db, "Graph Paths", "Hard")

    first = ledger_service.credit_solve(db, user.id, problem.id)
    second = ledger_service.credit_solve(db, user.id, problem.id)

    assert first == 50
    assert second == 0
    assert _balance(db, user.id) == 50
    assert db.query(SolvedProblem).filter(SolvedProblem.user_id == user.id).count() == 1


def test_credit_solve_unknown_difficulty_uses_default(db):
    user = make_user(db, "dave")
    problem = make_problem(db, "Odd One", "Legendary")

    assert ledger_service.credit_solve(db, user.id, problem.id) == 10
    assert _balance(db, user.id) == 10


def test_credit_solve_missing_problem(db):
    user = make_user(db, "erin")
    with pytest.raises(ResourceNotFoundError):
        ledger_service.credit_solve(db, user.id, 4242)
    assert _balance(db, user.id) == 0


def test_point_events_sum_to_balance(db):
    user = make_user(db, "frank")
    easy = make_problem(db, "Easy One", "Easy")
    medium = make_problem(db, "Medium One", "Medium")

    ledger_service.award_points(db, user.id, 100, "quiz_pass")
    ledger_service.credit_solve(db, user.id, easy.id)
    ledger_service.credit_solve(db, user.id, medium.id)
    ledger_service.credit_solve(db, user.id, easy.id)

    total = db.query(func.sum(PointEvent.delta)).filter(PointEvent.user_id == user.id).scalar()
    assert total == _balance(db, user.id) == 130

    history = ledger_service.point_history(db, user.id)
    assert [event.reason for event in history] == ["problem_solved", "problem_solved", "quiz_pass"]
