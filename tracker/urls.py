from django.urls import include, path
from rest_framework.routers import SimpleRouter

from .views import ProblemDetailView, ProblemListView, UserViewSet

router = SimpleRouter(trailing_slash=False)
router.register("users", UserViewSet, basename="user")

urlpatterns = [
    path("api/", include(router.urls)),
    path("api/problems", ProblemListView.as_view(), name="problems"),
    path("api/problems/<int:problem_id>", ProblemDetailView.as_view(), name="problem-detail"),
    path("api/", include("revisions.api.urls")),
]
