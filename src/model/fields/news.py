"""FormField definitions for News Updates and Featured Stories.

Both endpoints share the same shape (title, description, upload date, picture),
only the key prefix differs.
"""

from constants import IMAGE_MAX_BYTES, IMAGE_MIME_TYPES
from model.schema import NEVER, FileField, FormField


def _article_fields(prefix: str, noun: str) -> tuple[FormField, ...]:
    """Build the four article fields for a key prefix like "newsupdate"."""
    return (
        FormField(f"{prefix}Id", f"{noun} ID", writable=NEVER, column=True),
        FormField(f"{prefix}Title", f"{noun} Title", column=True),
        FormField("uploadDate", "Upload Date", kind="date", column=True, placeholder="YYYY-MM-DD"),
        FormField(f"{prefix}Description", f"{noun} Description", kind="textarea"),
    )


def _article_file(prefix: str, noun: str) -> FileField:
    return FileField(
        f"{prefix}Image", f"{noun} Image", f"{prefix}PicPath",
        IMAGE_MIME_TYPES, IMAGE_MAX_BYTES,
    )


NEWS_FIELDS = _article_fields("newsupdate", "News")
NEWS_FILE = _article_file("newsupdate", "News")

STORY_FIELDS = _article_fields("featuredstories", "Story")
STORY_FILE = _article_file("featuredstories", "Story")
