import logging

from django.db import transaction
from django.utils import timezone

from apps.courses.models import Activity, Course

from .models import ActivityCompletion

logger = logging.getLogger(__name__)


class CompletionInfo:
    """Read and update activity completion data for one course."""

    def __init__(self, course: Course):
        self.course = course

    def is_enabled(self, activity: Activity = None) -> bool:
        """
        Whether completion is tracked for the course, or for `activity`
        when one is given.
        """
        if not self.course.enable_completion:
            return False
        if activity is None:
            return True
        return activity.completion != Activity.CompletionTracking.NONE

    def get_data(self, activity: Activity, user) -> ActivityCompletion:
        """
        Return the user's completion record for `activity`.

        Users with no stored record get an unsaved one in the INCOMPLETE state.
        """
        try:
            return ActivityCompletion.objects.get(activity=activity, user=user)
        except ActivityCompletion.DoesNotExist:
            return ActivityCompletion(
                activity=activity,
                user=user,
                completion_state=ActivityCompletion.State.INCOMPLETE,
            )

    @transaction.atomic
    def update_state(
        self, activity: Activity, user, state: int, viewed: bool = None
    ) -> ActivityCompletion:
        """Store a new completion state for the user on `activity`."""
        if activity.course_id != self.course.pk:
            raise ValueError("Activity does not belong to this course.")
        if state not in ActivityCompletion.State.values:
            raise ValueError(f"Unknown completion state {state!r}.")

        record, created = ActivityCompletion.objects.get_or_create(
            activity=activity, user=user
        )
        record.completion_state = state
        if viewed is not None:
            record.viewed = viewed
        record.time_modified = timezone.now()
        record.save(
            update_fields=["completion_state", "viewed", "time_modified", "updated_at"]
        )

        logger.debug(
            f"Completion state for user {user.pk} on activity {activity.pk} "
            f"set to {record.get_completion_state_display()} (created: {created})"
        )
        return record
