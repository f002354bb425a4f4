from rest_framework import serializers

from .models import Problem


class ProblemSerializer(serializers.ModelSerializer):
    class Meta:
        model = Problem
        fields = [
            "id", "name", "platform", "link", "difficulty", "topic", "status",
            "time_taken", "date_solved", "marked_for_revision",
            "revision_count", "last_revised", "revision_dates",
        ]
        read_only_fields = ["revision_count", "last_revised", "revision_dates"]


class RevisionToggleSerializer(serializers.Serializer):
    marked_for_revision = serializers.BooleanField()
