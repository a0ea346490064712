from codemaster.models.ledger import SolvedProblem
from codemaster.services.leaderboard_service import leaderboard_service

from conftest import make_problem, make_user


def _solve(db, user, count):
    for index in range(count):
        problem = make_problem(db, f"{user.username}-problem-{index}")
        db.add(SolvedProblem(user_id=user.id, problem_id=problem.id))
    db.commit()


def test_orders_by_points_then_solved_count(db):
    a = make_user(db, "a", points=300)
    b = make_user(db, "b", points=300)
    c = make_user(db, "c", points=150)
    _solve(db, a, 5)
    _solve(db, b, 3)
    _solve(db, c, 10)

    board = leaderboard_service.get_leaderboard(db)

    assert [(row["username"], row["points"], row["solved_count"]) for row in board] == [
        ("a", 300, 5),
        ("b", 300, 3),
        ("c", 150, 10),
    ]


def test_full_tie_breaks_by_registration_order(db):
    first = make_user(db, "first", points=10)
    second = make_user(db, "second", points=10)

    board = leaderboard_service.get_leaderboard(db)

    assert [row["id"] for row in board] == [first.id, second.id]


def test_excludes_admins_and_inactive_users(db):
    make_user(db, "player", points=5)
    make_user(db, "boss", points=9999, role="admin")
    retired = make_user(db, "retired", points=500)
    retired.is_active = False
    db.commit()

    board = leaderboard_service.get_leaderboard(db)

    assert [row["username"] for row in board] == ["player"]


def test_returns_at_most_fifty(db):
    for index in range(55):
        make_user(db, f"user{index:02d}", points=index)

    board = leaderboard_service.get_leaderboard(db)
    assert len(board) == 50
    assert board[0]["points"] == 54

    assert len(leaderboard_service.get_leaderboard(db, limit=500)) == 50
    assert len(leaderboard_service.get_leaderboard(db, limit=3)) == 3


def test_empty_when_no_users(db):
    assert leaderboard_service.get_leaderboard(db) == []
