from django.db import models
from django.utils.translation import gettext_lazy as _

from apps.common.models import TimestampedModel


class Course(TimestampedModel):
    """Represents a course in the LMS."""

    title = models.CharField(max_length=255)
    slug = models.SlugField(
        max_length=255,
        unique=True,
        db_index=True,
        help_text="Unique identifier for the course URL",
    )
    description = models.TextField(blank=True)
    enable_completion = models.BooleanField(
        default=False, help_text="Track activity and course completion for learners"
    )

    def __str__(self):
        return self.title

    def save(self, *args, **kwargs):
        from apps.common.utils import generate_unique_slug

        if not self.slug:
            self.slug = generate_unique_slug(self, source_field="title")
        super().save(*args, **kwargs)

    class Meta:
        ordering = ["title"]


class ActivityType(TimestampedModel):
    """A kind of activity a course can contain (quiz, assignment, forum...)."""

    name = models.CharField(
        max_length=50, unique=True, help_text="Machine name, e.g. 'quiz' or 'assign'"
    )

    def __str__(self):
        return self.name

    class Meta:
        ordering = ["name"]


class Activity(TimestampedModel):
    """An activity instance placed in a Course."""

    class CompletionTracking(models.IntegerChoices):
        NONE = 0, _("Do not indicate activity completion")
        MANUAL = 1, _("Learners can manually mark the activity as completed")
        AUTOMATIC = 2, _("Show activity as complete when conditions are met")

    course = models.ForeignKey(
        Course, related_name="activities", on_delete=models.CASCADE
    )
    activity_type = models.ForeignKey(
        ActivityType, related_name="activities", on_delete=models.PROTECT
    )
    name = models.CharField(max_length=255)
    completion = models.PositiveSmallIntegerField(
        choices=CompletionTracking.choices, default=CompletionTracking.NONE
    )
    completion_view = models.BooleanField(
        default=False, help_text="Automatic completion requires viewing the activity"
    )
    completion_grade_required = models.BooleanField(
        default=False, help_text="Automatic completion requires receiving a grade"
    )
    order = models.PositiveIntegerField(
        default=0, help_text="Order of the activity within the course"
    )

    def __str__(self):
        return f"{self.name} (Course: {self.course.title})"

    class Meta:
        ordering = ["course", "order", "name"]
        verbose_name_plural = "activities"
