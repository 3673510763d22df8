import logging

from django.db import transaction
from django.db.models import Count, Q
from django.shortcuts import get_object_or_404
from drf_spectacular.utils import extend_schema
from rest_framework import permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import PermissionDenied
from rest_framework.response import Response

from apps.courses.models import Activity, Course
from apps.enrollments.services import EnrollmentService

from .criteria import ActivityCriterion
from .models import CompletionCriterion, CriterionCompletion
from .serializers import (
    ActivityCriteriaConfigSerializer,
    ActivityCriterionSerializer,
    CompletionCourseSerializer,
    CourseProgressItemSerializer,
    CriterionCompletionSerializer,
    CriterionDetailsSerializer,
    SelectableActivitySerializer,
)

logger = logging.getLogger(__name__)


def get_user_completion(criterion, user) -> CriterionCompletion:
    """The user's stored completion record for `criterion`, or an unsaved pending one."""
    completion = CriterionCompletion.objects.filter(
        criterion_id=criterion.pk, user=user
    ).first()
    if completion is None:
        completion = CriterionCompletion(
            criterion_id=criterion.pk, course_id=criterion.course_id, user=user
        )
    return completion


@extend_schema(tags=["Completion"])
class CompletionCourseViewSet(viewsets.ReadOnlyModelViewSet):
    """Courses with their completion settings and the learner's progress report."""

    serializer_class = CompletionCourseSerializer
    lookup_field = "slug"
    permission_classes = [permissions.IsAuthenticated]

    def get_queryset(self):
        return Course.objects.annotate(
            criteria_count=Count(
                "completion_criteria",
                filter=Q(
                    completion_criteria__criteria_type=CompletionCriterion.CriteriaType.ACTIVITY,
                    completion_criteria__module_instance__isnull=False,
                ),
            )
        )

    @extend_schema(responses=CourseProgressItemSerializer(many=True))
    @action(detail=True, methods=["get"])
    def progress(self, request, slug=None):
        """Report the requesting user's status on every activity criterion of the course."""
        course = self.get_object()
        criteria = ActivityCriterion.objects.filter(course=course).select_related(
            "module_instance__activity_type"
        )

        items = []
        for criterion in criteria:
            completion = get_user_completion(criterion, request.user)
            items.append(
                {
                    "criterion": criterion.pk,
                    "title": criterion.get_title(),
                    "title_detailed": criterion.get_title_detailed(),
                    "complete": completion.is_complete(),
                    "time_completed": completion.time_completed,
                    "details": criterion.get_details(completion),
                }
            )
        return Response(CourseProgressItemSerializer(items, many=True).data)


@extend_schema(tags=["Completion"])
class ActivityCriterionViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Activity completion criteria of a course.

    Staff configure which activities count; learners review their own
    completion and read report details.
    """

    serializer_class = ActivityCriterionSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_permissions(self):
        if self.action == "activities" and self.request.method == "POST":
            return [permissions.IsAdminUser()]
        return super().get_permissions()

    def get_course(self) -> Course:
        if not hasattr(self, "_course"):
            self._course = get_object_or_404(Course, slug=self.kwargs["course_slug"])
        return self._course

    def get_queryset(self):
        if getattr(self, "swagger_fake_view", False):
            return ActivityCriterion.objects.none()
        return ActivityCriterion.objects.filter(course=self.get_course()).select_related(
            "course", "module_instance__activity_type"
        )

    @extend_schema(
        request=ActivityCriteriaConfigSerializer,
        responses=SelectableActivitySerializer(many=True),
    )
    @action(detail=False, methods=["get", "post"])
    def activities(self, request, course_slug=None):
        """List selectable activities (GET) or set the selected ones (POST)."""
        course = self.get_course()

        if request.method == "POST":
            serializer = ActivityCriteriaConfigSerializer(
                data=request.data, context={"course": course}
            )
            serializer.is_valid(raise_exception=True)
            ActivityCriterion.update_config(course, serializer.validated_data["activities"])

        selected_ids = set(
            ActivityCriterion.objects.filter(course=course).values_list(
                "module_instance_id", flat=True
            )
        )
        activities = (
            Activity.objects.filter(course=course)
            .exclude(completion=Activity.CompletionTracking.NONE)
            .select_related("activity_type")
        )
        data = SelectableActivitySerializer(
            activities, many=True, context={"selected_ids": selected_ids}
        ).data
        return Response(data, status=status.HTTP_200_OK)

    @extend_schema(responses=CriterionDetailsSerializer)
    @action(detail=True, methods=["get"])
    def details(self, request, course_slug=None, pk=None):
        criterion = self.get_object()
        completion = get_user_completion(criterion, request.user)
        return Response(CriterionDetailsSerializer(criterion.get_details(completion)).data)

    @extend_schema(request=None, responses=CriterionCompletionSerializer)
    @action(detail=True, methods=["post"])
    def review(self, request, course_slug=None, pk=None):
        """Review the requesting user against this criterion, recording completion."""
        criterion = self.get_object()
        if not EnrollmentService.is_enrolled(request.user, criterion.course):
            raise PermissionDenied("You are not enrolled in this course.")

        completion = get_user_completion(criterion, request.user)
        complete = criterion.review(completion, mark=False)
        if complete:
            # cron may have stored the record since it was read
            with transaction.atomic():
                completion, _ = CriterionCompletion.objects.get_or_create(
                    criterion_id=criterion.pk,
                    user=request.user,
                    defaults={"course_id": criterion.course_id},
                )
                completion.mark_complete()
        logger.debug(
            f"Review of criterion {criterion.pk} for user {request.user.pk}: {complete}"
        )
        return Response(CriterionCompletionSerializer(completion).data)
