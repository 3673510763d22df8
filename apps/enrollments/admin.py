from django.contrib import admin

from .models import Enrollment


@admin.register(Enrollment)
class EnrollmentAdmin(admin.ModelAdmin):
    list_display = ("user", "course", "role", "status", "enrolled_at")
    list_filter = ("role", "status", "course")
    search_fields = ("user__username", "user__email", "course__title")
    list_select_related = ("user", "course")
    readonly_fields = ("enrolled_at",)
