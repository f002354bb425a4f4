"""Live-server checks. Start the server and seed it with ``init_data`` first:

    python manage.py migrate && python manage.py init_data
    python manage.py runserver
    pytest -m integration
"""
import os
import pytest
import requests
import logging
from datetime import datetime, timedelta, timezone

BASE_URL = os.environ.get("INTEGRATION_BASE_URL", "http://127.0.0.1:8000")
USERNAME = os.environ.get("INTEGRATION_USERNAME", "testuser1")
logger = logging.getLogger(__name__)


def api(method, path, **kwargs):
    headers = {"X-User-NAME": USERNAME, **kwargs.pop("headers", {})}
    r = requests.request(method, f"{BASE_URL}{path}", headers=headers, timeout=10, **kwargs)
    logger.info("%s %s → status=%s", method, path, r.status_code)
    return r


def solve(name, marked=True, **fields):
    return api("POST", "/api/problems", json={
        "name": name,
        "platform": "LeetCode",
        "difficulty": "Medium",
        "topic": "Graphs",
        "time_taken": 25,
        "marked_for_revision": marked,
        **fields,
    })


@pytest.mark.integration
def test_solve_schedules_three_live():
    r = solve("Course Schedule")
    assert r.status_code == 201
    assert r.json()["revisions_scheduled"] == 3
    logger.info("✓ Passed: solve scheduled 3 revisions")


@pytest.mark.integration
def test_listing_shape_live():
    r = api("GET", "/api/revisions")
    d = r.json()
    assert r.status_code == 200
    assert set(d) == {"today", "upcoming", "stats"}
    assert len(d["upcoming"]) <= 10
    assert 0.0 <= d["stats"]["completion_rate"] <= 100.0


@pytest.mark.integration
def test_complete_is_single_fire_live():
    """A revision solved ten days ago is due; completing it twice gives 200 then 404."""
    solved_at = (datetime.now(timezone.utc) - timedelta(days=10)).isoformat()
    problem_id = solve("Clone Graph", date_solved=solved_at).json()["problem"]["id"]

    today = api("GET", "/api/revisions").json()["today"]
    due = [r for r in today if r["problem"]["id"] == problem_id]
    assert [r["cycle"] for r in due] == ["3-day", "7-day"]

    revision_id = due[0]["id"]
    first = api("POST", f"/api/revisions/{revision_id}/complete", json={"time_taken": 5})
    second = api("POST", f"/api/revisions/{revision_id}/complete", json={})

    assert first.status_code == 200
    assert second.status_code == 404
    logger.info("✓ Passed: completion accepted once")


@pytest.mark.integration
def test_opt_out_then_in_live():
    problem_id = solve("Network Delay Time").json()["problem"]["id"]

    out = api("DELETE", "/api/revisions", params={"problem_id": problem_id})
    assert out.json()["deleted"] == 3

    back = api("POST", "/api/revisions", json={"problem_id": problem_id})
    assert back.status_code == 201
    again = api("POST", "/api/revisions", json={"problem_id": problem_id})
    assert again.status_code == 409
