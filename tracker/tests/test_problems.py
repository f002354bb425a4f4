import pytest
from django.core.management import call_command
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from revisions.data.models import Revision
from tracker.models import Problem, User


def solve(client, username, **overrides):
    payload = {
        "name": "Two Sum",
        "platform": "LeetCode",
        "difficulty": "Easy",
        "topic": "Arrays",
        "time_taken": 15,
        "date_solved": "2024-01-10T00:00:00Z",
    }
    payload.update(overrides)
    return client.post(reverse("problems"), payload, format="json",
                       HTTP_X_USER_NAME=username)


def toggle(client, username, problem_id, marked):
    url = reverse("problem-detail", kwargs={"problem_id": problem_id})
    return client.patch(url, {"marked_for_revision": marked}, format="json",
                        HTTP_X_USER_NAME=username)


@pytest.mark.django_db
class TestProblemEndpoints:
    def setup_method(self):
        self.client = APIClient()
        self.user = User.objects.create_user(username="solver")

    def test_solve_with_revision_flag_schedules_three_cycles(self):
        response = solve(self.client, "solver", marked_for_revision=True)

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["revisions_scheduled"] == 3
        problem_id = response.data["problem"]["id"]
        dates = sorted(
            Revision.objects.filter(problem_id=problem_id)
            .values_list("scheduled_date", flat=True)
        )
        assert [d.date().isoformat() for d in dates] == [
            "2024-01-13", "2024-01-17", "2024-02-09"
        ]

    def test_needs_revision_status_also_schedules(self):
        response = solve(self.client, "solver", status="Needs Revision")

        assert response.data["revisions_scheduled"] == 3

    def test_solve_without_flag_schedules_nothing(self):
        response = solve(self.client, "solver")

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["revisions_scheduled"] == 0
        assert Revision.objects.count() == 0

    def test_solve_missing_fields(self):
        response = self.client.post(reverse("problems"), {"name": "x"}, format="json",
                                    HTTP_X_USER_NAME="solver")

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_toggle_on_then_off(self):
        problem_id = solve(self.client, "solver").data["problem"]["id"]

        on = toggle(self.client, "solver", problem_id, True)
        assert on.status_code == status.HTTP_200_OK
        assert on.data["problem"]["marked_for_revision"] is True
        # Second click is not an error
        assert toggle(self.client, "solver", problem_id, True).status_code == status.HTTP_200_OK
        assert Revision.objects.filter(problem_id=problem_id).count() == 1

        off = toggle(self.client, "solver", problem_id, False)
        assert off.data["problem"]["marked_for_revision"] is False
        assert Revision.objects.filter(problem_id=problem_id).count() == 0

    def test_toggle_on_after_needs_revision_solve_marks_problem(self):
        solved = solve(self.client, "solver", status="Needs Revision")
        problem_id = solved.data["problem"]["id"]
        assert solved.data["problem"]["marked_for_revision"] is False

        on = toggle(self.client, "solver", problem_id, True)

        assert on.status_code == status.HTTP_200_OK
        assert on.data["problem"]["marked_for_revision"] is True
        assert Problem.objects.get(pk=problem_id).marked_for_revision is True
        assert Revision.objects.filter(problem_id=problem_id).count() == 3

    def test_toggle_unknown_problem(self):
        assert toggle(self.client, "solver", 424242, True).status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
def test_init_data_seeds_users_and_revisions():
    call_command("init_data", users=2)

    assert User.objects.filter(is_superuser=True).count() == 1
    assert User.objects.count() == 3
    assert Problem.objects.count() == 8
    # Two of four sample problems per user are marked: 2 users * 2 * 3 cycles
    assert Revision.objects.count() == 12
