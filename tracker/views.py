from rest_framework import status, views, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
import structlog
import uuid

from revisions.errors import AlreadyScheduledError, NotFoundError
from revisions.services.scheduler import (
    opt_in_revision,
    opt_out_revision,
    schedule_on_solve,
)
from .models import Problem
from .repos import create_problem, get_owned_problem, set_marked_for_revision
from .serializers import ProblemSerializer, RevisionToggleSerializer

base_logger = structlog.get_logger()


class UserViewSet(viewsets.ViewSet):
    """
    ViewSet for user-related operations.
    """

    permission_classes = [AllowAny]

    @action(detail=False, methods=["get"])
    def me(self, request):
        """
        Returns the username of the caller identified by the request header.
        """
        if request.user.is_authenticated:
            return Response(
                {"username": request.user.username}, status=status.HTTP_200_OK
            )
        else:
            return Response(
                {"error": "User not authenticated"}, status=status.HTTP_401_UNAUTHORIZED
            )


class ProblemListView(views.APIView):
    def post(self, request):
        logger = base_logger.bind(request_id=str(uuid.uuid4()))

        s = ProblemSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        problem = create_problem(request.user.pk, **s.validated_data)

        revision_requested = (
            problem.marked_for_revision
            or problem.status == Problem.Status.NEEDS_REVISION
        )
        created = schedule_on_solve(
            request.user.pk, problem.pk, problem.date_solved, revision_requested
        )

        logger.info(
            "problem_solved_api_response",
            owner_id=str(request.user.pk),
            problem_id=problem.pk,
            revision_requested=revision_requested,
            revisions_created=len(created),
        )
        return Response(
            {"problem": ProblemSerializer(problem).data, "revisions_scheduled": len(created)},
            status=status.HTTP_201_CREATED,
        )


class ProblemDetailView(views.APIView):
    def patch(self, request, problem_id):
        logger = base_logger.bind(request_id=str(uuid.uuid4()))

        s = RevisionToggleSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        marked = s.validated_data["marked_for_revision"]

        if get_owned_problem(request.user.pk, problem_id) is None:
            return Response({"error": "Problem not found"}, status=status.HTTP_404_NOT_FOUND)

        if marked:
            try:
                opt_in_revision(request.user.pk, problem_id)
            except AlreadyScheduledError:
                # Repeated toggles are fine from the user's side
                set_marked_for_revision(request.user.pk, problem_id, True)
                logger.info("problem_already_marked", problem_id=problem_id)
            except NotFoundError:
                return Response({"error": "Problem not found"}, status=status.HTTP_404_NOT_FOUND)
        else:
            opt_out_revision(request.user.pk, problem_id)

        problem = get_owned_problem(request.user.pk, problem_id)
        logger.info(
            "problem_revision_toggled",
            owner_id=str(request.user.pk),
            problem_id=problem_id,
            marked_for_revision=marked,
        )
        return Response({"problem": ProblemSerializer(problem).data})
