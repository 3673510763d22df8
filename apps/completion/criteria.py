"""
Completion by activity.

A learner satisfies an activity criterion once the configured activity
reaches the COMPLETE or COMPLETE_PASS state for them.
"""

import logging
import uuid
from urllib.parse import unquote_plus

from django.conf import settings
from django.db import models, transaction
from django.db.models import Exists, OuterRef
from django.utils.html import format_html
from django.utils.text import capfirst
from django.utils.translation import gettext

from apps.common.utils import shorten_text
from apps.courses.models import Activity, ActivityType, Course
from apps.enrollments.models import Enrollment

from .exceptions import CriteriaConfigurationError
from .models import (
    ActivityCompletion,
    CompletionCriterion,
    CriterionCompletion,
    register_evaluator,
)
from .services import CompletionInfo

logger = logging.getLogger(__name__)


class ActivityCriterionManager(models.Manager):
    def get_queryset(self):
        return (
            super()
            .get_queryset()
            .filter(
                criteria_type=CompletionCriterion.CriteriaType.ACTIVITY,
                module_instance__isnull=False,
            )
        )


@register_evaluator(CompletionCriterion.CriteriaType.ACTIVITY)
class ActivityCriterion(CompletionCriterion):
    """Course completion criterion satisfied by completing one activity."""

    objects = ActivityCriterionManager()

    class Meta:
        proxy = True
        verbose_name = "activity criterion"
        verbose_name_plural = "activity criteria"

    def save(self, *args, **kwargs):
        self.criteria_type = CompletionCriterion.CriteriaType.ACTIVITY
        if self.module_instance_id and not self.module:
            self.module = self.get_mod_name(self.module_instance.activity_type_id)
        super().save(*args, **kwargs)

    # --- Configuration ---

    @classmethod
    def fetch(cls, **params):
        """Return the first activity criterion matching `params`, or None."""
        params["criteria_type"] = CompletionCriterion.CriteriaType.ACTIVITY
        return cls.objects.filter(**params).first()

    @classmethod
    @transaction.atomic
    def update_config(cls, course: Course, activity_ids) -> list:
        """
        Make the course's activity criteria match the selected activities.

        Criteria for activities that stay selected keep their completion
        records; deselected ones are removed.
        """
        requested = {uuid.UUID(str(activity_id)) for activity_id in activity_ids}
        activities = {
            activity.pk: activity
            for activity in Activity.objects.filter(
                course=course, pk__in=requested
            ).select_related("activity_type")
        }
        missing = requested - set(activities)
        if missing:
            raise CriteriaConfigurationError(
                f"Activities {sorted(str(pk) for pk in missing)} do not belong "
                f"to course {course.slug}."
            )
        untracked = [
            str(pk)
            for pk, activity in activities.items()
            if activity.completion == Activity.CompletionTracking.NONE
        ]
        if untracked:
            raise CriteriaConfigurationError(
                f"Activities {sorted(untracked)} do not track completion."
            )

        existing = {
            criterion.module_instance_id: criterion
            for criterion in cls.objects.filter(course=course)
        }
        removed = [pk for pk in existing if pk not in activities]
        if removed:
            cls.objects.filter(course=course, module_instance_id__in=removed).delete()

        criteria = []
        for activity_id, activity in activities.items():
            criterion = existing.get(activity_id)
            if criterion is None:
                criterion = cls(
                    course=course,
                    module=activity.activity_type.name,
                    module_instance=activity,
                )
                criterion.save()
            criteria.append(criterion)

        logger.info(
            f"Configured {len(criteria)} activity criteria for course {course.slug} "
            f"({len(removed)} removed)."
        )
        return criteria

    @staticmethod
    def get_mod_name(activity_type_id) -> str:
        return ActivityType.objects.values_list("name", flat=True).get(
            pk=activity_type_id
        )

    @staticmethod
    def get_config_label(activity: Activity) -> str:
        """Label for an activity in the criteria selection list, e.g. 'Quiz - Week 1'."""
        return f"{capfirst(activity.activity_type.name)} - {activity.name}"

    def get_mod_instance(self):
        """The configured Activity, or None if it no longer matches this criterion."""
        return (
            Activity.objects.filter(
                pk=self.module_instance_id, activity_type__name=self.module
            )
            .select_related("activity_type")
            .first()
        )

    # --- Evaluation ---

    def review(self, completion: CriterionCompletion, mark: bool = True) -> bool:
        """
        Decide whether the user on `completion` has completed this criterion.

        When the activity is complete and `mark` is set, the verdict is saved.
        """
        info = CompletionInfo(completion.course)
        data = info.get_data(self.module_instance, completion.user)

        logger.debug(
            f"Reviewing criterion {self.pk} for user {completion.user_id}: "
            f"activity state {data.get_completion_state_display()}"
        )

        if data.completion_state in ActivityCompletion.COMPLETE_STATES:
            if mark:
                completion.mark_complete()
            return True

        return False

    @classmethod
    def cron(cls) -> int:
        """
        Record completion for every enrolled user whose activity is already
        complete but who has no verdict for the criterion yet.

        Returns the number of verdicts recorded.
        """
        criteria = cls.objects.filter(
            course__enable_completion=True, module_instance__isnull=False
        )
        recorded = 0
        for criterion in criteria:
            recorded += criterion.record_completed_users()

        logger.info(f"Activity criteria cron recorded {recorded} completions.")
        return recorded

    @transaction.atomic
    def record_completed_users(self) -> int:
        enrolled = Enrollment.objects.filter(
            course_id=self.course_id, user_id=OuterRef("user_id")
        ).exclude(status=Enrollment.Status.CANCELLED)
        verdict = CriterionCompletion.objects.filter(
            criterion_id=self.pk,
            user_id=OuterRef("user_id"),
            time_completed__isnull=False,
        )
        completed = list(
            ActivityCompletion.objects.filter(
                activity_id=self.module_instance_id,
                completion_state__in=ActivityCompletion.COMPLETE_STATES,
            )
            .filter(Exists(enrolled))
            .exclude(Exists(verdict))
            .only("user", "time_modified")
        )

        for activity_completion in completed:
            completion, _ = CriterionCompletion.objects.get_or_create(
                criterion_id=self.pk,
                user_id=activity_completion.user_id,
                defaults={"course_id": self.course_id},
            )
            completion.mark_complete(activity_completion.time_modified)

        return len(completed)

    # --- Reporting ---

    def get_title(self) -> str:
        return gettext("Activities completed")

    def get_title_detailed(self) -> str:
        return shorten_text(unquote_plus(self.module_instance.name))

    def get_type_title(self) -> str:
        return gettext("Activities")

    def get_details(self, completion: CriterionCompletion) -> dict:
        """Progress details for one user's completion, for display in reports."""
        activity = self.module_instance
        url = f"{settings.SITE_URL}/mod/{self.module}/view/{self.module_instance_id}/"

        requirement = []
        if activity.completion == Activity.CompletionTracking.MANUAL:
            requirement.append(gettext("Marking yourself complete"))
        elif activity.completion == Activity.CompletionTracking.AUTOMATIC:
            if activity.completion_view:
                requirement.append(
                    gettext("Viewing the %(module)s") % {"module": self.module}
                )
            if activity.completion_grade_required:
                requirement.append(gettext("Achieving grade"))

        return {
            "type": self.get_title(),
            "criteria": format_html('<a href="{}">{}</a>', url, activity.name),
            "requirement": ", ".join(requirement),
            "status": "",
        }
