from rest_framework import serializers

from apps.courses.models import Activity, Course

from .criteria import ActivityCriterion
from .models import CriterionCompletion


class CompletionCourseSerializer(serializers.ModelSerializer):
    criteria_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = Course
        fields = ("id", "slug", "title", "enable_completion", "criteria_count")
        read_only_fields = fields


class ActivityCriterionSerializer(serializers.ModelSerializer):
    """Read-only representation of an activity criterion with its report titles."""

    title = serializers.CharField(source="get_title", read_only=True)
    title_detailed = serializers.CharField(source="get_title_detailed", read_only=True)
    type_title = serializers.CharField(source="get_type_title", read_only=True)
    activity_name = serializers.CharField(source="module_instance.name", read_only=True)

    class Meta:
        model = ActivityCriterion
        fields = (
            "id",
            "module",
            "module_instance",
            "activity_name",
            "title",
            "title_detailed",
            "type_title",
            "time_end",
            "created_at",
        )
        read_only_fields = fields


class SelectableActivitySerializer(serializers.ModelSerializer):
    """An activity offered for selection as a completion criterion."""

    label = serializers.SerializerMethodField()
    selected = serializers.SerializerMethodField()

    class Meta:
        model = Activity
        fields = ("id", "label", "selected")
        read_only_fields = fields

    def get_label(self, obj) -> str:
        return ActivityCriterion.get_config_label(obj)

    def get_selected(self, obj) -> bool:
        return obj.pk in self.context.get("selected_ids", set())


class ActivityCriteriaConfigSerializer(serializers.Serializer):
    activities = serializers.ListField(
        child=serializers.UUIDField(), allow_empty=True
    )

    def validate_activities(self, value):
        course = self.context["course"]
        unique_ids = set(value)
        found = (
            Activity.objects.filter(course=course, pk__in=unique_ids)
            .exclude(completion=Activity.CompletionTracking.NONE)
            .count()
        )
        if found != len(unique_ids):
            raise serializers.ValidationError(
                "All activities must belong to this course and track completion."
            )
        return list(unique_ids)


class CriterionDetailsSerializer(serializers.Serializer):
    type = serializers.CharField()
    criteria = serializers.CharField()
    requirement = serializers.CharField(allow_blank=True)
    status = serializers.CharField(allow_blank=True)


class CriterionCompletionSerializer(serializers.ModelSerializer):
    complete = serializers.BooleanField(source="is_complete", read_only=True)

    class Meta:
        model = CriterionCompletion
        fields = ("criterion", "user", "complete", "time_completed")
        read_only_fields = fields


class CourseProgressItemSerializer(serializers.Serializer):
    """One row of a learner's course completion report."""

    criterion = serializers.UUIDField()
    title = serializers.CharField()
    title_detailed = serializers.CharField()
    complete = serializers.BooleanField()
    time_completed = serializers.DateTimeField(allow_null=True)
    details = CriterionDetailsSerializer()
