from django.urls import include, path
from rest_framework_nested import routers

from .viewsets import ActivityCriterionViewSet, CompletionCourseViewSet

app_name = "completion"

# Base router for /courses/
router = routers.DefaultRouter()
router.register(r"courses", CompletionCourseViewSet, basename="course")

# Nested router for /courses/{course_slug}/criteria/
courses_router = routers.NestedSimpleRouter(router, r"courses", lookup="course")
courses_router.register(r"criteria", ActivityCriterionViewSet, basename="course-criterion")

urlpatterns = [
    path("", include(router.urls)),
    path("", include(courses_router.urls)),
]

# URL structure:
# List Courses:               /api/v1/completion/courses/
# Course progress report:     /api/v1/completion/courses/{course_slug}/progress/
# List activity criteria:     /api/v1/completion/courses/{course_slug}/criteria/
# Selectable activities/set:  /api/v1/completion/courses/{course_slug}/criteria/activities/
# Criterion report details:   /api/v1/completion/courses/{course_slug}/criteria/{pk}/details/
# Review own completion:      /api/v1/completion/courses/{course_slug}/criteria/{pk}/review/
