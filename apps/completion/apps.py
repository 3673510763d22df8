from django.apps import AppConfig


class CompletionConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.completion"
    verbose_name = "Course Completion"

    def ready(self):
        """Register the criteria evaluators."""
        import apps.completion.criteria  # noqa: F401
