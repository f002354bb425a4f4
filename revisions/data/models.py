from django.conf import settings
from django.db import models
from django.db.models import Q

from ..domain.enums import Cycle, RevisionStatus


class Revision(models.Model):
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="revisions"
    )
    problem = models.ForeignKey(
        "tracker.Problem", on_delete=models.CASCADE, related_name="revisions"
    )
    cycle = models.CharField(max_length=8, choices=Cycle.choices)
    scheduled_date = models.DateTimeField()  # solved + cycle offset, never recomputed
    status = models.CharField(
        max_length=16, choices=RevisionStatus.choices, default=RevisionStatus.PENDING
    )
    completed_date = models.DateTimeField(null=True, blank=True)
    performance_notes = models.TextField(blank=True, default="")
    time_taken = models.PositiveIntegerField(null=True, blank=True)  # minutes
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["owner", "problem", "cycle"],
                condition=Q(status="Pending"),
                name="uq_pending_revision_cycle",
            ),
        ]
        indexes = [
            models.Index(fields=["owner", "scheduled_date"], name="revision_owner_sched_idx"),
            models.Index(fields=["owner", "status"], name="revision_owner_status_idx"),
        ]
        ordering = ["scheduled_date", "id"]
