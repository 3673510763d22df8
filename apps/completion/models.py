import logging

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from apps.common.models import TimestampedModel
from apps.courses.models import Activity, Course

from .exceptions import UnsupportedCriteriaType
from .signals import criterion_completed

logger = logging.getLogger(__name__)

# criteria_type -> proxy model class that knows how to evaluate it
CRITERIA_EVALUATORS = {}


def register_evaluator(criteria_type):
    """Class decorator registering an evaluator for a criteria type."""

    def decorator(evaluator_cls):
        CRITERIA_EVALUATORS[criteria_type] = evaluator_cls
        return evaluator_cls

    return decorator


class ActivityCompletion(TimestampedModel):
    """A User's completion state for one Activity."""

    class State(models.IntegerChoices):
        INCOMPLETE = 0, _("Incomplete")
        COMPLETE = 1, _("Complete")
        COMPLETE_PASS = 2, _("Complete (passed)")
        COMPLETE_FAIL = 3, _("Complete (failed)")

    # States that count as having completed the activity
    COMPLETE_STATES = (State.COMPLETE, State.COMPLETE_PASS)

    activity = models.ForeignKey(
        Activity, on_delete=models.CASCADE, related_name="completions"
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="activity_completions",
    )
    completion_state = models.PositiveSmallIntegerField(
        choices=State.choices, default=State.INCOMPLETE, db_index=True
    )
    viewed = models.BooleanField(default=False)
    time_modified = models.DateTimeField(default=timezone.now)

    def __str__(self):
        return f"{self.user} on {self.activity.name}: {self.get_completion_state_display()}"

    @property
    def is_complete(self) -> bool:
        return self.completion_state in self.COMPLETE_STATES

    class Meta:
        unique_together = ("activity", "user")
        ordering = ["-time_modified"]


class CompletionCriterion(TimestampedModel):
    """
    A configured rule that must be satisfied for course completion.

    Rows of every criteria type share this table; typed behaviour lives in
    proxy models registered with `register_evaluator`.
    """

    class CriteriaType(models.IntegerChoices):
        SELF = 1, _("Self completion")
        DATE = 2, _("Date")
        UNENROL = 3, _("Unenrolment")
        ACTIVITY = 4, _("Activity completion")
        DURATION = 5, _("Duration")
        GRADE = 6, _("Course grade")
        ROLE = 7, _("Manual completion by others")
        COURSE = 8, _("Completion of other courses")

    course = models.ForeignKey(
        Course, on_delete=models.CASCADE, related_name="completion_criteria"
    )
    criteria_type = models.PositiveSmallIntegerField(
        choices=CriteriaType.choices, db_index=True
    )
    module = models.CharField(
        max_length=50, blank=True, help_text="Activity type name for activity criteria"
    )
    module_instance = models.ForeignKey(
        Activity,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="completion_criteria",
    )
    time_end = models.DateTimeField(null=True, blank=True)

    def __str__(self):
        return f"{self.get_criteria_type_display()} criterion for {self.course.title}"

    def clean(self):
        super().clean()
        if self.criteria_type == self.CriteriaType.ACTIVITY and not self.module_instance_id:
            raise ValidationError(
                {"module_instance": _("Activity criteria require an activity.")}
            )

    def as_evaluator(self):
        """Return this row as an instance of its registered evaluator class."""
        evaluator_cls = CRITERIA_EVALUATORS.get(self.criteria_type)
        if evaluator_cls is None:
            raise UnsupportedCriteriaType(
                f"No evaluator registered for criteria type {self.criteria_type}."
            )
        if isinstance(self, evaluator_cls):
            return self
        field_names = [f.attname for f in self._meta.concrete_fields]
        return evaluator_cls.from_db(
            self._state.db, field_names, [getattr(self, name) for name in field_names]
        )

    class Meta:
        ordering = ["course", "criteria_type", "created_at"]
        verbose_name_plural = "completion criteria"


class CriterionCompletion(TimestampedModel):
    """A User's verdict for one CompletionCriterion: pending until time_completed is set."""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="criterion_completions",
    )
    course = models.ForeignKey(
        Course, on_delete=models.CASCADE, related_name="criterion_completions"
    )
    criterion = models.ForeignKey(
        CompletionCriterion, on_delete=models.CASCADE, related_name="completions"
    )
    time_completed = models.DateTimeField(null=True, blank=True)

    def __str__(self):
        state = "complete" if self.is_complete() else "pending"
        return f"{self.user} / {self.criterion}: {state}"

    def save(self, *args, **kwargs):
        if not self.course_id and self.criterion_id:
            self.course_id = self.criterion.course_id
        super().save(*args, **kwargs)

    def is_complete(self) -> bool:
        return self.time_completed is not None

    def mark_complete(self, time_completed=None):
        """Record the criterion as complete. Does nothing if already complete."""
        if self.is_complete():
            return

        self.time_completed = time_completed or timezone.now()
        self.save()
        logger.info(
            f"Criterion {self.criterion_id} completed by user {self.user_id} "
            f"in course {self.course_id} at {self.time_completed.isoformat()}."
        )
        criterion_completed.send(sender=self.__class__, completion=self)

    class Meta:
        unique_together = ("user", "criterion")
        ordering = ["course", "criterion", "-time_completed"]
