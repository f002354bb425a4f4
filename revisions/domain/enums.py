from django.db import models


class Cycle(models.TextChoices):
    THREE_DAY = "3-day"
    SEVEN_DAY = "7-day"
    THIRTY_DAY = "30-day"


class RevisionStatus(models.TextChoices):
    PENDING = "Pending"
    COMPLETED = "Completed"
    SKIPPED = "Skipped"  # reserved, nothing transitions here yet
