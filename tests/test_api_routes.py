from codemaster.models.problem import Problem
from codemaster.models.user import User


def _signup(client, username="alice", password="secret1"):
    response = client.post(
        "/api/auth/signup",
        json={"username": username, "email": f"{username}@example.com", "password": password},
    )
    assert response.status_code == 201, response.text
    return response.json()


def _auth(token):
    return {"Authorization": f"Bearer {token}"}


def test_signup_then_login(client):
    body = _signup(client)
    assert body["user"]["points"] == 0
    assert body["tokenType"] == "bearer"

    response = client.post("/api/auth/login", json={"email": "alice@example.com", "password": "secret1"})
    assert response.status_code == 200
    token = response.json()["token"]

    me = client.get("/api/auth/me", headers=_auth(token)).json()
    assert me["username"] == "alice"
    assert len(me["loginHistory"]) == 1
    assert me["solvedCount"] == 0


def test_duplicate_signup_conflicts(client):
    _signup(client)
    response = client.post(
        "/api/auth/signup",
        json={"username": "alice", "email": "alice@example.com", "password": "secret1"},
    )
    assert response.status_code == 409
    assert response.json()["success"] is False


def test_malformed_body_is_400(client):
    response = client.post("/api/auth/signup", json={"username": "x"})
    assert response.status_code == 400
    assert response.json()["error"] == "Validation failed"


def test_bad_credentials_are_401(client):
    _signup(client)
    response = client.post("/api/auth/login", json={"email": "alice@example.com", "password": "wrong"})
    assert response.status_code == 401


def test_missing_or_bad_token_is_401(client):
    assert client.get("/api/store").status_code == 401
    assert client.get("/api/store", headers=_auth("garbage")).status_code == 401


def test_add_points_validates_amount(client):
    token = _signup(client)["token"]

    ok = client.post("/api/auth/add-points", json={"points": 120, "reason": "quiz_pass"}, headers=_auth(token))
    assert ok.status_code == 200
    assert ok.json()["points"] == 120

    # 2 ** 31 - 1 is a valid amount but would push the balance past the column range
    for bad in ("abc", -1, True, None, 1.5, 10 ** 20, 2 ** 31, "99999999999", 2 ** 31 - 1):
        response = client.post("/api/auth/add-points", json={"points": bad}, headers=_auth(token))
        assert response.status_code == 400, bad

    history = client.get("/api/users/me/points", headers=_auth(token)).json()
    assert [event["delta"] for event in history] == [120]
    assert history[0]["balanceAfter"] == 120


def test_buy_flow(client):
    token = _signup(client)["token"]
    seeded = client.post("/api/store/seed")
    assert seeded.status_code == 200
    assert seeded.json()["created"] == 8

    items = client.get("/api/store", headers=_auth(token)).json()
    sticker = next(item for item in items if item["name"] == "Code Sticker Pack")

    broke = client.post("/api/store/buy", json={"itemId": sticker["id"]}, headers=_auth(token))
    assert broke.status_code == 400
    assert broke.json()["error"] == "Not enough points"

    client.post("/api/auth/add-points", json={"points": 250}, headers=_auth(token))
    bought = client.post("/api/store/buy", json={"itemId": sticker["id"]}, headers=_auth(token))
    assert bought.status_code == 200
    body = bought.json()
    assert body["points"] == 50
    assert body["message"] == "Successfully purchased Code Sticker Pack"
    assert body["inventory"][0]["item"]["name"] == "Code Sticker Pack"
    assert body["inventory"][0]["pricePaid"] == 200

    missing = client.post("/api/store/buy", json={"itemId": 9999}, headers=_auth(token))
    assert missing.status_code == 404

    inventory = client.get("/api/users/me/inventory", headers=_auth(token)).json()
    assert len(inventory) == 1


def test_submission_credits_and_leaderboard(client, session_factory):
    session = session_factory()
    try:
        session.add(Problem(title="Two Sum", description="Find two numbers", difficulty="Medium"))
        session.commit()
        problem_id = session.query(Problem.id).scalar()
    finally:
        session.close()

    alice = _signup(client, "alice")["token"]
    _signup(client, "bob")
    payload = {"problemId": problem_id, "language": "python", "code": "def two_sum(nums, target): pass"}

    first = client.post("/api/submissions", json=payload, headers=_auth(alice))
    second = client.post("/api/submissions", json=payload, headers=_auth(alice))
    assert first.status_code == second.status_code == 201
    assert first.json()["status"] == "Accepted"

    board = client.get("/api/leaderboard").json()
    assert [(row["username"], row["points"], row["solvedCount"]) for row in board] == [
        ("alice", 20, 1),
        ("bob", 0, 0),
    ]

    history = client.get("/api/submissions/user", headers=_auth(alice)).json()
    assert len(history) == 2
    assert history[0]["problem"]["title"] == "Two Sum"


def test_submission_accepts_compiled_languages(client, session_factory):
    session = session_factory()
    try:
        session.add(Problem(title="Reverse String", description="Reverse it", difficulty="Easy"))
        session.commit()
        problem_id = session.query(Problem.id).scalar()
    finally:
        session.close()

    token = _signup(client)["token"]
    for language in ("go", "rust", "csharp"):
        payload = {"problemId": problem_id, "language": language, "code": "func reverse(s string) string { return s }"}
        response = client.post("/api/submissions", json=payload, headers=_auth(token))
        assert response.status_code == 201, language
        assert response.json()["language"] == language

    unknown = {"problemId": problem_id, "language": "cobol", "code": "DISPLAY 'HI'."}
    assert client.post("/api/submissions", json=unknown, headers=_auth(token)).status_code == 400


def test_admin_routes_require_admin(client, session_factory):
    token = _signup(client)["token"]
    assert client.get("/api/admin/stats", headers=_auth(token)).status_code == 403
    assert client.get("/api/users", headers=_auth(token)).status_code == 403

    session = session_factory()
    try:
        session.query(User).filter(User.username == "alice").update({User.role: "admin"})
        session.commit()
    finally:
        session.close()

    stats = client.get("/api/admin/stats", headers=_auth(token))
    assert stats.status_code == 200
    assert stats.json()["totalProblems"] == 0

    created = client.post(
        "/api/problems",
        json={
            "title": "Reverse String",
            "description": "Reverse it",
            "difficulty": "Easy",
            "testCases": [
                {"input": "abc", "output": "cba", "isPublic": True},
                {"input": "xy", "output": "yx"},
            ],
        },
        headers=_auth(token),
    )
    assert created.status_code == 201
    problem_id = created.json()["id"]

    public_view = client.get(f"/api/problems/{problem_id}").json()
    assert [case["input"] for case in public_view["testCases"]] == ["abc"]

    events = client.get("/api/admin/audit-events", headers=_auth(token)).json()
    assert events[0]["action"] == "create_problem"
    assert events[0]["actorUsername"] == "alice"


def test_contest_registration(client, session_factory):
    token = _signup(client)["token"]
    session = session_factory()
    try:
        session.query(User).filter(User.username == "alice").update({User.role: "admin"})
        session.commit()
    finally:
        session.close()

    created = client.post(
        "/api/contests",
        json={"title": "Friday Sprint", "startTime": "2026-11-06T18:00:00Z", "endTime": "2026-11-06T20:00:00Z"},
        headers=_auth(token),
    )
    assert created.status_code == 201
    contest_id = created.json()["id"]

    assert client.post(f"/api/contests/{contest_id}/register", headers=_auth(token)).status_code == 200
    assert client.post(f"/api/contests/{contest_id}/register", headers=_auth(token)).status_code == 409

    detail = client.get(f"/api/contests/{contest_id}").json()
    assert [participant["username"] for participant in detail["participants"]] == ["alice"]


def test_health_and_root(client):
    assert client.get("/").json()["name"] == "CodeMaster Platform"
    response = client.get("/health")
    assert response.status_code == 200
    assert "X-Request-ID" in response.headers
