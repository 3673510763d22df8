from django.contrib import admin, messages

from .models import ActivityCompletion, CompletionCriterion, CriterionCompletion


@admin.register(CompletionCriterion)
class CompletionCriterionAdmin(admin.ModelAdmin):
    list_display = ("course", "criteria_type", "module", "module_instance", "time_end")
    list_filter = ("criteria_type", "module")
    search_fields = ("course__title", "module_instance__name")
    list_select_related = ("course", "module_instance")
    actions = ["record_completions"]

    @admin.action(description="Record completions for selected activity criteria")
    def record_completions(self, request, queryset):
        criteria = queryset.filter(
            criteria_type=CompletionCriterion.CriteriaType.ACTIVITY,
            course__enable_completion=True,
            module_instance__isnull=False,
        )
        recorded = sum(
            criterion.as_evaluator().record_completed_users() for criterion in criteria
        )
        self.message_user(
            request, f"Recorded {recorded} completions.", level=messages.SUCCESS
        )


@admin.register(ActivityCompletion)
class ActivityCompletionAdmin(admin.ModelAdmin):
    list_display = ("activity", "user", "completion_state", "viewed", "time_modified")
    list_filter = ("completion_state", "viewed", "activity__course")
    search_fields = ("activity__name", "user__username", "user__email")
    list_select_related = ("activity", "activity__course", "user")


@admin.register(CriterionCompletion)
class CriterionCompletionAdmin(admin.ModelAdmin):
    list_display = ("user", "course", "criterion", "time_completed")
    list_filter = ("course",)
    search_fields = ("user__username", "user__email", "course__title")
    list_select_related = ("user", "course", "criterion")
    readonly_fields = ("time_completed",)
