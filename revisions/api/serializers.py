from rest_framework import serializers

from ..data.models import Revision
from ..utils.time import to_local_iso


class OptInSerializer(serializers.Serializer):
    problem_id = serializers.IntegerField(min_value=1)


class OptOutQuerySerializer(serializers.Serializer):
    problem_id = serializers.IntegerField(min_value=1)


class CompleteSerializer(serializers.Serializer):
    performance_notes = serializers.CharField(required=False, allow_blank=True, default="")
    time_taken = serializers.IntegerField(required=False, allow_null=True, min_value=0, default=None)


class ProblemSummarySerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    platform = serializers.CharField()
    difficulty = serializers.CharField()
    topic = serializers.CharField()
    revision_count = serializers.IntegerField()


class RevisionSerializer(serializers.ModelSerializer):
    problem = ProblemSummarySerializer(read_only=True)
    scheduled_date_local = serializers.SerializerMethodField()

    class Meta:
        model = Revision
        fields = [
            "id", "problem", "cycle", "status", "scheduled_date",
            "scheduled_date_local", "completed_date", "performance_notes",
            "time_taken",
        ]

    def get_scheduled_date_local(self, obj):
        return to_local_iso(obj.scheduled_date)
