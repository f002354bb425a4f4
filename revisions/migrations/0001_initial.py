import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("tracker", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Revision",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("cycle", models.CharField(choices=[("3-day", "3-day"), ("7-day", "7-day"), ("30-day", "30-day")], max_length=8)),
                ("scheduled_date", models.DateTimeField()),
                ("status", models.CharField(choices=[("Pending", "Pending"), ("Completed", "Completed"), ("Skipped", "Skipped")], default="Pending", max_length=16)),
                ("completed_date", models.DateTimeField(blank=True, null=True)),
                ("performance_notes", models.TextField(blank=True, default="")),
                ("time_taken", models.PositiveIntegerField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("owner", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="revisions", to=settings.AUTH_USER_MODEL)),
                ("problem", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="revisions", to="tracker.problem")),
            ],
            options={
                "ordering": ["scheduled_date", "id"],
                "indexes": [
                    models.Index(fields=["owner", "scheduled_date"], name="revision_owner_sched_idx"),
                    models.Index(fields=["owner", "status"], name="revision_owner_status_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(condition=models.Q(("status", "Pending")), fields=("owner", "problem", "cycle"), name="uq_pending_revision_cycle"),
                ],
            },
        ),
    ]
