from datetime import timedelta

from django.core.management.base import BaseCommand
from django.utils import timezone

from revisions.data.models import Revision
from revisions.services.scheduler import schedule_on_solve
from tracker.models import Problem, User

SAMPLE_PROBLEMS = [
    ("Two Sum", "LeetCode", "Easy", "Arrays"),
    ("Longest Increasing Subsequence", "LeetCode", "Medium", "Dynamic Programming"),
    ("Shortest Path", "Codeforces", "Medium", "Graphs"),
    ("Segment Tree Beats", "CodeChef", "Hard", "Data Structures"),
]


class Command(BaseCommand):
    help = "Replace all users, problems and revisions with demo data"

    def add_arguments(self, parser):
        parser.add_argument(
            "--users", type=int, default=5, help="Number of demo users to create"
        )

    def handle(self, *args, **options):
        Revision.objects.all().delete()
        Problem.objects.all().delete()
        User.objects.all().delete()

        self.stdout.write(self.style.SUCCESS("All existing data has been deleted"))

        User.objects.create_superuser(
            "testuser", email="testuser@example.com", password="testpassword"
        )
        now = timezone.now()
        for i in range(1, options["users"] + 1):
            user = User.objects.create_user(
                f"testuser{i}",
                email=f"testuser{i}@example.com",
                password="testpassword",
            )
            # Stagger solve dates so some revisions are already due
            for offset, (name, platform, difficulty, topic) in enumerate(SAMPLE_PROBLEMS):
                problem = Problem.objects.create(
                    owner=user,
                    name=name,
                    platform=platform,
                    difficulty=difficulty,
                    topic=topic,
                    time_taken=20 + 10 * offset,
                    date_solved=now - timedelta(days=offset * 2 + i),
                    marked_for_revision=offset % 2 == 0,
                )
                schedule_on_solve(
                    user.pk, problem.pk, problem.date_solved, problem.marked_for_revision
                )

        self.stdout.write(
            self.style.SUCCESS(
                f"Demo data loaded: {options['users']} users, "
                f"{Problem.objects.count()} problems, {Revision.objects.count()} revisions"
            )
        )
