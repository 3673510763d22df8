import logging

from django.db import transaction

from apps.courses.models import Course

from .models import Enrollment

logger = logging.getLogger(__name__)


class EnrollmentError(Exception):
    pass


class EnrollmentService:
    """Service layer for managing enrollments."""

    @staticmethod
    @transaction.atomic
    def enroll_user(
        user,
        course: Course,
        role: str = Enrollment.Role.STUDENT,
        status: str = Enrollment.Status.ACTIVE,
    ) -> tuple[Enrollment, bool]:
        """Enrolls a single user in a course. Returns (enrollment, created)."""
        if not user or not course:
            raise ValueError("User and Course must be provided.")
        if status not in Enrollment.Status.values:
            raise EnrollmentError(f"Unknown enrollment status '{status}'.")

        enrollment, created = Enrollment.objects.get_or_create(
            user=user, course=course, defaults={"status": status, "role": role}
        )
        if not created and (enrollment.status != status or enrollment.role != role):
            # Reactivate/update existing enrollment, keep the original enrollment time
            enrollment.status = status
            enrollment.role = role
            enrollment.save(update_fields=["status", "role", "updated_at"])
            logger.info(
                f"Updated enrollment for user {user.pk} in {course.title} to {role}/{status}."
            )
        elif created:
            logger.info(
                f"Created enrollment for user {user.pk} in {course.title} as {role}."
            )
        return enrollment, created

    @staticmethod
    def is_enrolled(user, course: Course) -> bool:
        """True if the user holds a non-cancelled enrollment in the course."""
        return (
            Enrollment.objects.filter(user=user, course=course)
            .exclude(status=Enrollment.Status.CANCELLED)
            .exists()
        )
