import logging
import uuid

from django.utils.text import Truncator, slugify

logger = logging.getLogger(__name__)

# Report titles are cut to this many characters
SHORT_TEXT_LENGTH = 30


def generate_unique_slug(instance, source_field="title", slug_field="slug"):
    """
    Generates a unique slug for a model instance from `source_field`.
    If the slug is taken, a numeric suffix is appended.
    """
    if getattr(instance, slug_field):  # Already set, assume it's intended
        return getattr(instance, slug_field)

    base_slug = slugify(getattr(instance, source_field) or "")
    if not base_slug:  # slugify can return an empty string
        base_slug = slugify(str(uuid.uuid4())[:8])

    ModelClass = instance.__class__
    slug = base_slug
    counter = 1
    while (
        ModelClass.objects.filter(**{slug_field: slug}).exclude(pk=instance.pk).exists()
    ):
        slug = f"{base_slug}-{counter}"
        counter += 1

    return slug


def shorten_text(text, length=SHORT_TEXT_LENGTH, ending="..."):
    """
    Shorten text to at most `length` characters, `ending` included, for reports.
    Cuts at the last word boundary unless the first word alone is too long.
    """
    if not text or len(text) <= length:
        return text or ""
    shortened = Truncator(text).chars(length, truncate=ending)
    if not shortened.endswith(ending):
        return shortened
    kept = shortened[: -len(ending)]
    # the cut landed mid-word
    if text[len(kept) : len(kept) + 1].strip() and len(kept.split()) > 1:
        kept = kept.rsplit(None, 1)[0]
    return kept.rstrip() + ending
