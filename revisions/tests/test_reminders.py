import pytest
from datetime import datetime, timezone as dt_tz
from django.core.management import call_command

from revisions.services.reminders import (
    LoggingReminderDispatcher,
    ReminderDispatcher,
    format_reminder_message,
    get_dispatcher,
    send_due_reminders,
)
from revisions.services.scheduler import schedule_on_solve


def utc(*args):
    return datetime(*args, tzinfo=dt_tz.utc)


class RecordingDispatcher(ReminderDispatcher):
    def __init__(self, fail_for=()):
        self.sent = []
        self.fail_for = set(fail_for)

    def send(self, owner_id, due_count, problem_name=None):
        if owner_id in self.fail_for:
            raise RuntimeError("push service unavailable")
        self.sent.append((owner_id, due_count, problem_name))


def test_format_reminder_message():
    assert format_reminder_message(1, "Two Sum") == "You have 1 pending revision: Two Sum"
    assert format_reminder_message(1) == "You have 1 pending revisions to complete."
    assert format_reminder_message(4, "Two Sum") == "You have 4 pending revisions to complete."


def test_get_dispatcher_uses_setting(settings):
    settings.REVISION_REMINDER_DISPATCHER = "revisions.services.reminders.LoggingReminderDispatcher"

    assert isinstance(get_dispatcher(), LoggingReminderDispatcher)


@pytest.mark.django_db
def test_send_due_reminders_counts_and_names(owner, other_owner, make_problem):
    first = make_problem(owner, "Two Sum", date_solved=utc(2024, 1, 1))
    second = make_problem(owner, "Three Sum", date_solved=utc(2024, 1, 2))
    quiet = make_problem(other_owner, "Later", date_solved=utc(2024, 1, 14))
    for problem in (first, second, quiet):
        schedule_on_solve(problem.owner_id, problem.pk, problem.date_solved, True)
    dispatcher = RecordingDispatcher()

    results = send_due_reminders(now=utc(2024, 1, 10, 7), dispatcher=dispatcher)

    # 01-04, 01-05, 01-08, 01-09 are due for alice; bob's first is 01-17
    assert dispatcher.sent == [(owner.pk, 4, "Two Sum")]
    assert results == {"owners": 1, "revision_reminders": 1, "errors": 0}


@pytest.mark.django_db
def test_send_due_reminders_continues_after_failure(owner, other_owner, make_problem):
    for user in (owner, other_owner):
        problem = make_problem(user, date_solved=utc(2024, 1, 1))
        schedule_on_solve(user.pk, problem.pk, problem.date_solved, True)
    dispatcher = RecordingDispatcher(fail_for={owner.pk})

    results = send_due_reminders(now=utc(2024, 1, 4, 12), dispatcher=dispatcher)

    assert dispatcher.sent == [(other_owner.pk, 1, "Two Sum")]
    assert results == {"owners": 2, "revision_reminders": 1, "errors": 1}


@pytest.mark.django_db
def test_send_revision_reminders_command(owner, make_problem, capsys):
    problem = make_problem(owner, date_solved=utc(2024, 1, 1))
    schedule_on_solve(owner.pk, problem.pk, problem.date_solved, True)

    call_command("send_revision_reminders")

    assert "Reminders sent: 1 (owners: 1, errors: 0)" in capsys.readouterr().out


def test_dispatcher_requires_send():
    class Silent(ReminderDispatcher):
        pass

    with pytest.raises(TypeError):
        Silent()
