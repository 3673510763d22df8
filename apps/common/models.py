import uuid

from django.db import models


class TimestampedModel(models.Model):
    """
    Abstract base with a UUID primary key and self-updating
    `created_at` / `updated_at` fields.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    created_at = models.DateTimeField(auto_now_add=True, editable=False)
    updated_at = models.DateTimeField(auto_now=True, editable=False)

    class Meta:
        abstract = True
        ordering = ["-created_at"]
