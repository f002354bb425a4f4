from django.conf import settings
from django.contrib.auth.models import AbstractUser
from django.db import models
from django.utils import timezone


class User(AbstractUser):
    """
    Custom User model that extends the default Django User model.
    Problems and revisions hang off this as their owner.
    """

    pass


class Problem(models.Model):
    class Difficulty(models.TextChoices):
        EASY = "Easy"
        MEDIUM = "Medium"
        HARD = "Hard"

    class Status(models.TextChoices):
        SOLVED = "Solved"
        NEEDS_REVISION = "Needs Revision"
        COULDNT_SOLVE = "Couldn't Solve"

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="problems"
    )
    name = models.CharField(max_length=255)
    platform = models.CharField(max_length=64)
    link = models.URLField(blank=True, default="")
    difficulty = models.CharField(max_length=8, choices=Difficulty.choices)
    topic = models.CharField(max_length=128)
    status = models.CharField(
        max_length=16, choices=Status.choices, default=Status.SOLVED
    )
    time_taken = models.PositiveIntegerField(help_text="minutes")
    date_solved = models.DateTimeField(default=timezone.now)

    # Denormalized revision counters, written by the revisions app
    marked_for_revision = models.BooleanField(default=False)
    revision_count = models.PositiveIntegerField(default=0)
    last_revised = models.DateTimeField(null=True, blank=True)
    revision_dates = models.JSONField(default=list, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=["owner", "date_solved"], name="problem_owner_solved_idx"),
            models.Index(fields=["owner", "marked_for_revision"], name="problem_owner_marked_idx"),
        ]

    def __str__(self):
        return self.name
