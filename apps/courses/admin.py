from django.contrib import admin

from .models import Activity, ActivityType, Course


class ActivityInline(admin.TabularInline):
    model = Activity
    extra = 1
    ordering = ("order",)
    fields = (
        "name",
        "activity_type",
        "order",
        "completion",
        "completion_view",
        "completion_grade_required",
    )


@admin.register(Course)
class CourseAdmin(admin.ModelAdmin):
    list_display = ("title", "slug", "enable_completion", "activity_count", "created_at")
    list_filter = ("enable_completion",)
    search_fields = ("title", "slug", "description")
    prepopulated_fields = {"slug": ("title",)}
    inlines = [ActivityInline]

    def activity_count(self, obj):
        return obj.activities.count()

    activity_count.short_description = "Activities"


@admin.register(ActivityType)
class ActivityTypeAdmin(admin.ModelAdmin):
    list_display = ("name", "created_at")
    search_fields = ("name",)


@admin.register(Activity)
class ActivityAdmin(admin.ModelAdmin):
    list_display = ("name", "activity_type", "course", "completion", "order")
    list_filter = ("activity_type", "completion", "course")
    search_fields = ("name", "course__title")
    list_select_related = ("course", "activity_type")
