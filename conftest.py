from datetime import datetime, timezone as dt_tz

import pytest


@pytest.fixture
def owner(db):
    from tracker.models import User
    return User.objects.create_user(username="alice")


@pytest.fixture
def other_owner(db):
    from tracker.models import User
    return User.objects.create_user(username="bob")


@pytest.fixture
def make_problem(db):
    from tracker.models import Problem

    def _make(owner, name="Two Sum", date_solved=None, **fields):
        fields.setdefault("platform", "LeetCode")
        fields.setdefault("difficulty", Problem.Difficulty.EASY)
        fields.setdefault("topic", "Arrays")
        fields.setdefault("time_taken", 15)
        return Problem.objects.create(
            owner=owner,
            name=name,
            date_solved=date_solved or datetime(2024, 1, 10, tzinfo=dt_tz.utc),
            **fields,
        )
    return _make


@pytest.fixture(scope="session")
def django_db_modify_db_settings(django_db_modify_db_settings_parallel_suffix):
    # The default in-memory shared-cache SQLite test database raises
    # "database table is locked" under concurrent writers; use a file instead,
    # and take the write lock up front (SQLite ignores select_for_update).
    import os
    import tempfile

    from django.conf import settings

    db = settings.DATABASES["default"]
    if db["ENGINE"] == "django.db.backends.sqlite3":
        test = db.setdefault("TEST", {})
        if not test.get("NAME"):
            test["NAME"] = os.path.join(tempfile.gettempdir(), "revision_tracker_test_db.sqlite3")
        db.setdefault("OPTIONS", {}).setdefault("transaction_mode", "IMMEDIATE")
