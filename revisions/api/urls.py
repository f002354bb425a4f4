from django.urls import path
from .views import RevisionListView, CompleteRevisionView, RevisionReminderCronView

urlpatterns = [
    path("revisions", RevisionListView.as_view(), name="revisions"),
    path("revisions/<int:revision_id>/complete", CompleteRevisionView.as_view(), name="revision-complete"),
    path("cron/revision-reminders", RevisionReminderCronView.as_view(), name="revision-reminders-cron"),
]
