from django.db import transaction, IntegrityError
from django.utils import timezone

from ..config import UPCOMING_LIMIT
from ..domain.enums import RevisionStatus
from ..errors import DuplicatePendingError, NotFoundError
from .models import Revision


def pending_exists(owner_id, problem_id, cycle):
    return Revision.objects.filter(
        owner_id=owner_id, problem_id=problem_id, cycle=cycle,
        status=RevisionStatus.PENDING,
    ).exists()


def create_revision(owner_id, problem_id, cycle, scheduled_date):
    """
    Insert a Pending record. The partial unique constraint on
    (owner, problem, cycle) decides concurrent duplicates.
    """
    try:
        # Savepoint so a rejected insert leaves an outer transaction usable
        with transaction.atomic():
            return Revision.objects.create(
                owner_id=owner_id, problem_id=problem_id, cycle=cycle,
                scheduled_date=scheduled_date, status=RevisionStatus.PENDING,
            )
    except IntegrityError as exc:
        raise DuplicatePendingError(owner_id, problem_id, cycle) from exc


def _pending(owner_id):
    return (Revision.objects
            .filter(owner_id=owner_id, status=RevisionStatus.PENDING)
            .select_related("problem")
            .order_by("scheduled_date", "id"))


def find_pending_due_by(owner_id, cutoff):
    return list(_pending(owner_id).filter(scheduled_date__lte=cutoff))


def find_pending_after(owner_id, cutoff, limit=UPCOMING_LIMIT):
    return list(_pending(owner_id).filter(scheduled_date__gt=cutoff)[:limit])


def count_by_status(owner_id, status):
    return Revision.objects.filter(owner_id=owner_id, status=status).count()


def delete_pending_for(owner_id, problem_id):
    deleted, _ = Revision.objects.filter(
        owner_id=owner_id, problem_id=problem_id, status=RevisionStatus.PENDING
    ).delete()
    return deleted


def mark_completed(revision_id, owner_id, notes="", time_taken=None, now=None):
    """
    Pending -> Completed as one conditional UPDATE. Concurrent callers
    race on the status filter; only one of them sees a matched row.
    """
    now = now or timezone.now()
    updated = Revision.objects.filter(
        pk=revision_id, owner_id=owner_id, status=RevisionStatus.PENDING
    ).update(
        status=RevisionStatus.COMPLETED,
        completed_date=now,
        performance_notes=notes or "",
        time_taken=time_taken,
        updated_at=now,
    )
    if updated == 0:
        raise NotFoundError(f"no pending revision {revision_id} for owner {owner_id}")
    return Revision.objects.select_related("problem").get(pk=revision_id)


def owners_with_pending_due_by(cutoff):
    return list(
        Revision.objects
        .filter(status=RevisionStatus.PENDING, scheduled_date__lte=cutoff)
        .order_by("owner_id")
        .values_list("owner_id", flat=True)
        .distinct()
    )
