from dataclasses import dataclass, field
from datetime import timedelta, timezone as dt_tz

from django.db import DatabaseError
from django.utils import timezone
import structlog

from tracker.repos import (
    get_owned_problem,
    record_problem_revision,
    set_marked_for_revision,
)
from ..config import CYCLE_DAYS, OPT_IN_CYCLE, UPCOMING_LIMIT
from ..data import repos
from ..domain.enums import Cycle, RevisionStatus
from ..domain.logic import completion_rate, scheduled_date_for
from ..errors import AlreadyScheduledError, DuplicatePendingError, NotFoundError
from ..utils.time import as_local_datetime, end_of_day, to_local_iso

logger = structlog.get_logger()


@dataclass
class DueSummary:
    today: list = field(default_factory=list)
    upcoming: list = field(default_factory=list)
    completion_rate: float = 0.0
    total_pending: int = 0
    total_completed: int = 0


def schedule_on_solve(owner_id, problem_id, solved_date, revision_requested: bool):
    """
    Create the 3/7/30-day Pending records for a freshly solved problem.

    Each cycle is created on its own; a cycle that is already pending is
    skipped, so calling this again for the same problem is harmless.
    Returns the records created by this call.
    """
    if not revision_requested:
        return []

    solved_local = as_local_datetime(solved_date)
    created = []
    for cycle in Cycle:
        scheduled = scheduled_date_for(solved_local, cycle)
        try:
            created.append(
                repos.create_revision(owner_id, problem_id, cycle, scheduled)
            )
        except DuplicatePendingError:
            logger.info("revision_duplicate_skipped",
                owner_id=str(owner_id),
                problem_id=str(problem_id),
                cycle=cycle.value,
            )
            continue

        logger.info("revision_scheduled",
            owner_id=str(owner_id),
            problem_id=str(problem_id),
            cycle=cycle.value,
            scheduled_utc=scheduled.astimezone(dt_tz.utc).isoformat(),
            scheduled_local=to_local_iso(scheduled),
        )
    return created


def opt_in_revision(owner_id, problem_id, now=None):
    """Start revising an already-solved problem, counted from now."""
    if get_owned_problem(owner_id, problem_id) is None:
        raise NotFoundError(f"problem {problem_id} not found for owner {owner_id}")

    if repos.pending_exists(owner_id, problem_id, OPT_IN_CYCLE):
        raise AlreadyScheduledError(owner_id, problem_id, OPT_IN_CYCLE)

    now = as_local_datetime(now or timezone.now())
    scheduled = now + timedelta(days=CYCLE_DAYS[OPT_IN_CYCLE])
    try:
        revision = repos.create_revision(owner_id, problem_id, OPT_IN_CYCLE, scheduled)
    except DuplicatePendingError as exc:
        # Lost a race with a concurrent opt-in
        raise AlreadyScheduledError(owner_id, problem_id, OPT_IN_CYCLE) from exc

    set_marked_for_revision(owner_id, problem_id, True)
    logger.info("revision_opt_in",
        owner_id=str(owner_id),
        problem_id=str(problem_id),
        revision_id=revision.pk,
        scheduled_local=to_local_iso(scheduled),
    )
    return revision


def opt_out_revision(owner_id, problem_id):
    deleted = repos.delete_pending_for(owner_id, problem_id)
    set_marked_for_revision(owner_id, problem_id, False)
    logger.info("revision_opt_out",
        owner_id=str(owner_id),
        problem_id=str(problem_id),
        deleted=deleted,
    )
    return deleted


def get_due_and_upcoming(owner_id, now=None) -> DueSummary:
    # Overdue items stay in "today" until completed
    cutoff = end_of_day(now or timezone.now())
    pending = repos.count_by_status(owner_id, RevisionStatus.PENDING)
    completed = repos.count_by_status(owner_id, RevisionStatus.COMPLETED)
    return DueSummary(
        today=repos.find_pending_due_by(owner_id, cutoff),
        upcoming=repos.find_pending_after(owner_id, cutoff, UPCOMING_LIMIT),
        completion_rate=completion_rate(completed, pending),
        total_pending=pending,
        total_completed=completed,
    )


def complete_revision(revision_id, owner_id, notes="", time_taken=None, now=None):
    """
    Complete a Pending revision, then bump the problem's counters.

    The completion is committed before the counters are touched. Only a
    DatabaseError from the counter update is logged and tolerated; any
    other exception is a bug and propagates, with the completion still
    committed.
    """
    now = now or timezone.now()
    # NotFoundError propagates: retrying cannot change the outcome
    revision = repos.mark_completed(revision_id, owner_id, notes, time_taken, now)

    logger.info("revision_completed",
        owner_id=str(owner_id),
        revision_id=revision.pk,
        problem_id=str(revision.problem_id),
        cycle=revision.cycle,
        time_taken=time_taken,
    )

    # Problem counters are advisory; the revision record is the source of truth
    try:
        problem = record_problem_revision(revision.problem_id, now)
        if problem is not None:
            revision.problem = problem
    except DatabaseError:
        logger.exception("problem_counter_update_failed",
            owner_id=str(owner_id),
            revision_id=revision.pk,
            problem_id=str(revision.problem_id),
        )
    return revision
