# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
PR Reviewer Service: HTTP Tests
=================================
Run:  pytest test_main.py -v
Backed by the shared in-memory SQLite engine (see conftest.py).
"""
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from main import app
from reviewer_service.core.database import engine
from reviewer_service.core.dependencies import get_pr_service
from reviewer_service.repositories.pr_repository import PRRepository
from reviewer_service.repositories.team_repository import TeamRepository
from reviewer_service.repositories.user_repository import UserRepository
from reviewer_service.services.pr_service import PRService

client = TestClient(app)


@pytest.fixture(autouse=True)
def clean_state(db_engine):
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def deterministic(sorted_picker):
    """Swap in a PRService whose picker always takes the first ids in sorted order."""
    service = PRService(
        PRRepository(engine), TeamRepository(engine), UserRepository(engine),
        picker=sorted_picker,
    )
    app.dependency_overrides[get_pr_service] = lambda: service
    return service


# ── Helpers ──────────────────────────────────────────────────────────────
def _add_team(name="T", members=(("A", True), ("R1", True), ("R2", True), ("R3", True))):
    r = client.post("/team/add", json={
        "team_name": name,
        "members": [{"user_id": uid, "username": uid.lower(), "is_active": active}
                    for uid, active in members],
    })
    assert r.status_code == 201, r.text
    return r


def _create_pr(pr_id="pr-1", author="A", name="x"):
    return client.post("/pullRequest/create", json={
        "pull_request_id": pr_id, "pull_request_name": name, "author_id": author,
    })


def _assert_error(r, status, code):
    assert r.status_code == status, r.text
    body = r.json()
    assert body["error"]["code"] == code
    assert body["error"]["message"]


# ═══════════════════════════════════════════════════════════════════════════
# HEALTH & METRICS
# ═══════════════════════════════════════════════════════════════════════════
class TestHealth:
    def test_health_ok(self):
        r = client.get("/health")
        assert r.status_code == 200
        assert r.json()["status"] == "ok"
        assert r.json()["service"] == "reviewer-service"

    def test_readiness_ok(self):
        r = client.get("/health/ready")
        assert r.status_code == 200
        assert r.json()["database"] == "connected"

    def test_readiness_db_down_503(self):
        with patch.object(PRRepository, "verify_connection", side_effect=Exception("boom")):
            r = client.get("/health/ready")
        assert r.status_code == 503

    def test_metrics_endpoint(self):
        _add_team()
        _create_pr()
        r = client.get("/metrics")
        assert r.status_code == 200
        assert "prs_created_total" in r.text

    def test_request_id_propagated(self):
        r = client.get("/health", headers={"X-Request-ID": "my-req-42"})
        assert r.headers["X-Request-ID"] == "my-req-42"

    def test_request_id_generated(self):
        assert client.get("/health").headers["X-Request-ID"]


# ═══════════════════════════════════════════════════════════════════════════
# TEAMS
# ═══════════════════════════════════════════════════════════════════════════
class TestTeams:
    def test_add_and_get(self):
        r = _add_team()
        assert r.json()["team"]["team_name"] == "T"
        r = client.get("/team/get", params={"team_name": "T"})
        assert r.status_code == 200
        assert [m["user_id"] for m in r.json()["members"]] == ["A", "R1", "R2", "R3"]

    def test_duplicate_team_409(self):
        _add_team()
        r = client.post("/team/add", json={
            "team_name": "T", "members": [{"user_id": "Z", "username": "z", "is_active": True}],
        })
        _assert_error(r, 409, "TEAM_EXISTS")

    def test_duplicate_member_ids_400_and_nothing_written(self):
        r = client.post("/team/add", json={
            "team_name": "dup",
            "members": [
                {"user_id": "U", "username": "u", "is_active": True},
                {"user_id": "U", "username": "u2", "is_active": False},
            ],
        })
        _assert_error(r, 400, "BAD_REQUEST")
        _assert_error(client.get("/team/get", params={"team_name": "dup"}), 404, "NOT_FOUND")

    def test_missing_is_active_400(self):
        r = client.post("/team/add", json={
            "team_name": "T", "members": [{"user_id": "U", "username": "u"}],
        })
        _assert_error(r, 400, "BAD_REQUEST")

    def test_null_is_active_400(self):
        r = client.post("/team/add", json={
            "team_name": "T", "members": [{"user_id": "U", "username": "u", "is_active": None}],
        })
        _assert_error(r, 400, "BAD_REQUEST")

    def test_empty_members_400(self):
        _assert_error(client.post("/team/add", json={"team_name": "T", "members": []}),
                      400, "BAD_REQUEST")

    def test_get_unknown_team_404(self):
        _assert_error(client.get("/team/get", params={"team_name": "nope"}), 404, "NOT_FOUND")

    def test_get_without_team_name_400(self):
        _assert_error(client.get("/team/get"), 400, "BAD_REQUEST")


# ═══════════════════════════════════════════════════════════════════════════
# USERS
# ═══════════════════════════════════════════════════════════════════════════
class TestUsers:
    def test_set_is_active(self):
        _add_team()
        r = client.post("/users/setIsActive", json={"user_id": "R1", "is_active": False})
        assert r.status_code == 200
        assert r.json()["user"] == {
            "user_id": "R1", "username": "r1", "team_name": "T", "is_active": False,
        }

    def test_set_is_active_unknown_user_404(self):
        r = client.post("/users/setIsActive", json={"user_id": "ghost", "is_active": True})
        _assert_error(r, 404, "NOT_FOUND")

    def test_set_is_active_requires_explicit_flag(self):
        _add_team()
        r = client.post("/users/setIsActive", json={"user_id": "R1", "is_active": None})
        _assert_error(r, 400, "BAD_REQUEST")

    def test_get_review(self, deterministic):
        _add_team()
        _create_pr("pr-1")
        _create_pr("pr-2", author="R3")
        r = client.get("/users/getReview", params={"user_id": "R1"})
        assert r.status_code == 200
        body = r.json()
        assert body["user_id"] == "R1"
        assert [p["pull_request_id"] for p in body["pull_requests"]] == ["pr-1", "pr-2"]
        assert body["pull_requests"][0]["status"] == "OPEN"

    def test_get_review_unknown_user_404(self):
        _assert_error(client.get("/users/getReview", params={"user_id": "ghost"}), 404, "NOT_FOUND")


# ═══════════════════════════════════════════════════════════════════════════
# POST /pullRequest/create
# ═══════════════════════════════════════════════════════════════════════════
class TestCreatePR:
    def test_create_assigns_reviewers_from_team(self):
        _add_team()
        r = _create_pr()
        assert r.status_code == 201
        pr = r.json()["pr"]
        assert pr["pull_request_id"] == "pr-1"
        assert pr["status"] == "OPEN"
        assert pr["author_id"] == "A"
        assert len(pr["assigned_reviewers"]) == 2
        assert set(pr["assigned_reviewers"]) <= {"R1", "R2", "R3"}
        assert "createdAt" in pr
        assert "mergedAt" not in pr

    def test_inactive_members_not_assigned(self):
        _add_team(members=(("A", True), ("R1", False), ("R2", True)))
        assert _create_pr().json()["pr"]["assigned_reviewers"] == ["R2"]

    def test_lone_author_gets_no_reviewers(self):
        _add_team("solo", members=(("S", True),))
        r = _create_pr(author="S")
        assert r.status_code == 201
        assert r.json()["pr"]["assigned_reviewers"] == []

    def test_deactivated_user_not_picked(self, deterministic):
        _add_team()
        client.post("/users/setIsActive", json={"user_id": "R1", "is_active": False})
        assert _create_pr().json()["pr"]["assigned_reviewers"] == ["R2", "R3"]

    def test_duplicate_pr_409(self):
        _add_team()
        _create_pr()
        _assert_error(_create_pr(author="R1"), 409, "PR_EXISTS")

    def test_unknown_author_404(self):
        _assert_error(_create_pr(author="ghost"), 404, "NOT_FOUND")

    def test_missing_field_400(self):
        r = client.post("/pullRequest/create", json={"pull_request_id": "pr-1", "author_id": "A"})
        _assert_error(r, 400, "BAD_REQUEST")

    def test_malformed_json_400(self):
        r = client.post("/pullRequest/create", content=b"{not json",
                        headers={"Content-Type": "application/json"})
        _assert_error(r, 400, "BAD_REQUEST")


# ═══════════════════════════════════════════════════════════════════════════
# POST /pullRequest/merge
# ═══════════════════════════════════════════════════════════════════════════
class TestMergePR:
    def test_merge_open_pr(self):
        _add_team()
        _create_pr()
        r = client.post("/pullRequest/merge", json={"pull_request_id": "pr-1"})
        assert r.status_code == 200
        pr = r.json()["pr"]
        assert pr["status"] == "MERGED"
        assert pr["mergedAt"]

    def test_merge_twice_returns_identical_pr(self):
        _add_team()
        _create_pr()
        first = client.post("/pullRequest/merge", json={"pull_request_id": "pr-1"})
        second = client.post("/pullRequest/merge", json={"pull_request_id": "pr-1"})
        assert second.status_code == 200
        assert second.json() == first.json()

    def test_merge_unknown_404(self):
        _assert_error(client.post("/pullRequest/merge", json={"pull_request_id": "nope"}),
                      404, "NOT_FOUND")


# ═══════════════════════════════════════════════════════════════════════════
# POST /pullRequest/reassign
# ═══════════════════════════════════════════════════════════════════════════
class TestReassign:
    @pytest.fixture(autouse=True)
    def team_of_five(self):
        _add_team(members=(("A", True), ("R1", True), ("R2", True), ("R3", True), ("R4", True)))

    def test_reassign_picks_unassigned_member(self, deterministic):
        assert _create_pr().json()["pr"]["assigned_reviewers"] == ["R1", "R2"]
        r = client.post("/pullRequest/reassign",
                        json={"pull_request_id": "pr-1", "old_reviewer_id": "R1"})
        assert r.status_code == 200
        body = r.json()
        assert body["replaced_by"] == "R3"
        assert body["pr"]["assigned_reviewers"] == ["R3", "R2"]

    def test_reassign_random_stays_in_candidates(self):
        reviewers = _create_pr().json()["pr"]["assigned_reviewers"]
        old = reviewers[0]
        r = client.post("/pullRequest/reassign",
                        json={"pull_request_id": "pr-1", "old_reviewer_id": old})
        assert r.status_code == 200
        new = r.json()["replaced_by"]
        assert new not in reviewers
        assert new != "A"
        assert len(r.json()["pr"]["assigned_reviewers"]) == 2

    def test_reassign_persists(self, deterministic):
        _create_pr()
        client.post("/pullRequest/reassign", json={"pull_request_id": "pr-1", "old_reviewer_id": "R2"})
        r = client.get("/users/getReview", params={"user_id": "R2"})
        assert r.json()["pull_requests"] == []

    def test_reassign_on_merged_409(self):
        reviewers = _create_pr().json()["pr"]["assigned_reviewers"]
        client.post("/pullRequest/merge", json={"pull_request_id": "pr-1"})
        r = client.post("/pullRequest/reassign",
                        json={"pull_request_id": "pr-1", "old_reviewer_id": reviewers[0]})
        _assert_error(r, 409, "PR_MERGED")

    def test_reassign_not_assigned_409(self, deterministic):
        _create_pr()
        r = client.post("/pullRequest/reassign",
                        json={"pull_request_id": "pr-1", "old_reviewer_id": "R4"})
        _assert_error(r, 409, "NOT_ASSIGNED")

    def test_reassign_no_candidate_409(self, deterministic):
        for uid in ("R3", "R4"):
            client.post("/users/setIsActive", json={"user_id": uid, "is_active": False})
        _create_pr()
        r = client.post("/pullRequest/reassign",
                        json={"pull_request_id": "pr-1", "old_reviewer_id": "R1"})
        _assert_error(r, 409, "NO_CANDIDATE")

    def test_reassign_unknown_pr_404(self):
        r = client.post("/pullRequest/reassign",
                        json={"pull_request_id": "nope", "old_reviewer_id": "R1"})
        _assert_error(r, 404, "NOT_FOUND")


# ═══════════════════════════════════════════════════════════════════════════
# STATS
# ═══════════════════════════════════════════════════════════════════════════
class TestStats:
    def test_empty_stats(self):
        assert client.get("/stats/reviewers").json() == {"stats": []}
        assert client.get("/stats/pullRequests").json() == {"stats": []}

    def test_stats(self, deterministic):
        _add_team()
        _create_pr("pr-1")
        _create_pr("pr-2", author="R1")
        reviewers = client.get("/stats/reviewers").json()["stats"]
        assert reviewers == [
            {"user_id": "R2", "assigned_count": 2},
            {"user_id": "A", "assigned_count": 1},
            {"user_id": "R1", "assigned_count": 1},
        ]
        prs = client.get("/stats/pullRequests").json()["stats"]
        assert [(p["pull_request_id"], p["reviewer_count"]) for p in prs] == [("pr-1", 2), ("pr-2", 2)]


# ═══════════════════════════════════════════════════════════════════════════
# INTERNAL ERRORS
# ═══════════════════════════════════════════════════════════════════════════
class TestInternalErrors:
    def test_unhandled_error_is_opaque_500(self):
        class Broken:
            def merge_pull_request(self, pr_id):
                raise RuntimeError("password=hunter2 in connection string")

        app.dependency_overrides[get_pr_service] = lambda: Broken()
        safe_client = TestClient(app, raise_server_exceptions=False)
        r = safe_client.post("/pullRequest/merge", json={"pull_request_id": "pr-1"})
        assert r.status_code == 500
        assert r.json() == {"error": {"code": "INTERNAL_ERROR", "message": "internal server error"}}
