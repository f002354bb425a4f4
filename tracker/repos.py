from django.db import transaction
from django.db.models import F

from .models import Problem


def get_owned_problem(owner_id, problem_id):
    return Problem.objects.filter(pk=problem_id, owner_id=owner_id).first()


def create_problem(owner_id, **fields):
    return Problem.objects.create(owner_id=owner_id, **fields)


def set_marked_for_revision(owner_id, problem_id, marked):
    return Problem.objects.filter(pk=problem_id, owner_id=owner_id).update(
        marked_for_revision=marked
    )


def record_problem_revision(problem_id, revised_at):
    """Bump the denormalized revision counters on a problem."""
    with transaction.atomic():
        problem = (Problem.objects
                   .select_for_update()
                   .filter(pk=problem_id)
                   .first())
        if problem is None:
            return None
        problem.revision_count = F("revision_count") + 1
        problem.last_revised = revised_at
        problem.revision_dates = [*problem.revision_dates, revised_at.isoformat()]
        problem.save(update_fields=["revision_count", "last_revised", "revision_dates"])
        problem.refresh_from_db(fields=["revision_count"])
        return problem
