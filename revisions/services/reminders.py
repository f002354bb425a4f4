"""Daily revision reminders.

Nothing here runs on a timer. An outside trigger (cron hitting the API
endpoint, or the ``send_revision_reminders`` management command) calls
:func:`send_due_reminders` once a day; each owner with something due gets
one reminder handed to the configured dispatcher.
"""
from abc import ABC, abstractmethod

from django.conf import settings
from django.utils import timezone
from django.utils.module_loading import import_string
import structlog

from ..data.repos import owners_with_pending_due_by
from ..utils.time import end_of_day
from .scheduler import get_due_and_upcoming

logger = structlog.get_logger()


def format_reminder_message(due_count: int, problem_name=None) -> str:
    if due_count == 1 and problem_name:
        return f"You have 1 pending revision: {problem_name}"
    return f"You have {due_count} pending revisions to complete."


class ReminderDispatcher(ABC):
    """Delivery backend for revision reminders."""

    @abstractmethod
    def send(self, owner_id, due_count: int, problem_name=None):
        ...


class LoggingReminderDispatcher(ReminderDispatcher):
    def send(self, owner_id, due_count, problem_name=None):
        logger.info("revision_reminder",
            owner_id=str(owner_id),
            due_count=due_count,
            problem_name=problem_name,
            message=format_reminder_message(due_count, problem_name),
        )


def get_dispatcher() -> ReminderDispatcher:
    return import_string(settings.REVISION_REMINDER_DISPATCHER)()


def send_due_reminders(now=None, dispatcher=None):
    now = now or timezone.now()
    dispatcher = dispatcher or get_dispatcher()
    owner_ids = owners_with_pending_due_by(end_of_day(now))
    results = {"owners": len(owner_ids), "revision_reminders": 0, "errors": 0}

    for owner_id in owner_ids:
        try:
            summary = get_due_and_upcoming(owner_id, now)
            if not summary.today:
                continue
            dispatcher.send(owner_id, len(summary.today), summary.today[0].problem.name)
            results["revision_reminders"] += 1
        except Exception:
            # One failing owner must not stop the rest of the batch
            logger.exception("revision_reminder_failed", owner_id=str(owner_id))
            results["errors"] += 1

    logger.info("revision_reminders_sent", **results)
    return results
