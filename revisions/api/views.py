from django.conf import settings
from django.utils.crypto import constant_time_compare
from rest_framework import views, status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
import structlog
import uuid
from ..errors import AlreadyScheduledError, NotFoundError
from ..services.reminders import send_due_reminders
from ..services.scheduler import (
    complete_revision,
    get_due_and_upcoming,
    opt_in_revision,
    opt_out_revision,
)
from .serializers import (
    CompleteSerializer,
    OptInSerializer,
    OptOutQuerySerializer,
    RevisionSerializer,
)

base_logger = structlog.get_logger()


class RevisionListView(views.APIView):
    def get(self, request):
        # Create a unique request_id
        logger = base_logger.bind(request_id=str(uuid.uuid4()))

        summary = get_due_and_upcoming(request.user.pk)

        logger.info(
            "revisions_api_response",
            owner_id=str(request.user.pk),
            today_count=len(summary.today),
            upcoming_count=len(summary.upcoming),
            completion_rate=summary.completion_rate,
        )

        return Response(
            {
                "today": RevisionSerializer(summary.today, many=True).data,
                "upcoming": RevisionSerializer(summary.upcoming, many=True).data,
                "stats": {
                    "total_pending": summary.total_pending,
                    "total_completed": summary.total_completed,
                    "completion_rate": summary.completion_rate,
                },
            }
        )

    def post(self, request):
        logger = base_logger.bind(request_id=str(uuid.uuid4()))

        s = OptInSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        problem_id = s.validated_data["problem_id"]

        try:
            revision = opt_in_revision(request.user.pk, problem_id)
        except AlreadyScheduledError:
            return Response(
                {"error": "Problem is already marked for revision"},
                status=status.HTTP_409_CONFLICT,
            )
        except NotFoundError:
            return Response(
                {"error": "Problem not found"}, status=status.HTTP_404_NOT_FOUND
            )

        logger.info(
            "revision_opt_in_api_response",
            owner_id=str(request.user.pk),
            problem_id=problem_id,
            revision_id=revision.pk,
        )
        return Response(RevisionSerializer(revision).data, status=status.HTTP_201_CREATED)

    def delete(self, request):
        logger = base_logger.bind(request_id=str(uuid.uuid4()))

        qs = OptOutQuerySerializer(data=request.query_params)
        qs.is_valid(raise_exception=True)
        problem_id = qs.validated_data["problem_id"]

        deleted = opt_out_revision(request.user.pk, problem_id)

        logger.info(
            "revision_opt_out_api_response",
            owner_id=str(request.user.pk),
            problem_id=problem_id,
            deleted=deleted,
        )
        return Response({"problem_id": problem_id, "deleted": deleted})


class CompleteRevisionView(views.APIView):
    def post(self, request, revision_id):
        logger = base_logger.bind(request_id=str(uuid.uuid4()))

        s = CompleteSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        try:
            revision = complete_revision(
                revision_id,
                request.user.pk,
                notes=s.validated_data["performance_notes"],
                time_taken=s.validated_data["time_taken"],
            )
        except NotFoundError:
            # Usually a stale page completing something already done
            logger.info(
                "revision_complete_not_pending",
                owner_id=str(request.user.pk),
                revision_id=revision_id,
            )
            return Response(
                {"error": "This revision is no longer pending"},
                status=status.HTTP_404_NOT_FOUND,
            )

        logger.info(
            "revision_complete_api_response",
            owner_id=str(request.user.pk),
            revision_id=revision.pk,
            problem_id=revision.problem_id,
        )
        return Response(
            {
                "message": "Revision completed successfully",
                "revision": RevisionSerializer(revision).data,
            }
        )


class RevisionReminderCronView(views.APIView):
    authentication_classes = []
    permission_classes = [AllowAny]

    def post(self, request):
        logger = base_logger.bind(request_id=str(uuid.uuid4()))

        secret = settings.CRON_SECRET
        auth_header = request.headers.get("Authorization", "")
        if not secret or not constant_time_compare(auth_header, f"Bearer {secret}"):
            logger.warning("revision_reminders_cron_unauthorized")
            return Response({"error": "Unauthorized"}, status=status.HTTP_401_UNAUTHORIZED)

        results = send_due_reminders()
        return Response({"message": "Revision reminders sent", "results": results})
