"""Client-side validation run before any network call."""

import mimetypes
import re
from datetime import datetime
from pathlib import Path

from constants import SERVER_TIMESTAMP_FORMAT
from model.filtering import normalize
from model.schema import FileField, FormField


class ValidationError(Exception):
    """Raised when user input fails a client-side check.

    `messages` holds one user-facing line per problem.
    """

    def __init__(self, messages: list[str] | str) -> None:
        if isinstance(messages, str):
            messages = [messages]
        self.messages = list(messages)
        super().__init__("\n".join(self.messages))


def require_fields(draft: dict[str, str], fields: list[FormField]) -> list[str]:
    """Return one message per required field left empty.

    Args:
        draft: Current form values
        fields: Fields that must be filled

    Returns:
        Messages like "Service Title is required.", in field order
    """
    return [f"{f.label} is required." for f in fields if not normalize(draft.get(f.name))]


def check_lengths(draft: dict[str, str], fields: tuple[FormField, ...]) -> list[str]:
    return [
        f"{f.label} must be at most {f.max_length} characters."
        for f in fields
        if f.max_length is not None and len(normalize(draft.get(f.name))) > f.max_length
    ]


def validate_file(path: Path, file_field: FileField) -> tuple[str, int]:
    """Check a picked file against the MIME allow-list and size ceiling.

    Args:
        path: Local file the user picked
        file_field: Limits for the resource's attachment

    Returns:
        (mime_type, size) of the accepted file

    Raises:
        ValidationError: if the file is missing, of a disallowed type, or too large
    """
    if not path.is_file():
        raise ValidationError(f"File not found: {path}")
    mime_type, _ = mimetypes.guess_type(path.name)
    if mime_type not in file_field.mime_types:
        kinds = ", ".join(sorted(t.split("/")[1].upper() for t in file_field.mime_types))
        raise ValidationError(f"Invalid file type. Allowed: {kinds}.")
    size = path.stat().st_size
    if size > file_field.max_bytes:
        raise ValidationError(
            f"File is too large. Maximum size is {file_field.max_megabytes}MB."
        )
    return mime_type, size


# Date-only inputs accepted from the form or from server records
_DATE_FORMATS = ("%Y-%m-%d", "%B %d, %Y", "%b %d, %Y")
_TIMESTAMP_RE = re.compile(r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}$")


def to_server_timestamp(value: str, now: datetime | None = None) -> str:
    """Convert a date-only value to the server's "YYYY-MM-DD HH:MM:SS".

    The time of day comes from `now`; an empty value means `now` itself.
    Values already in server format pass through unchanged.

    Raises:
        ValidationError: if the value is not a recognised date
    """
    now = now or datetime.now()
    stripped = normalize(value)
    if not stripped:
        return now.strftime(SERVER_TIMESTAMP_FORMAT)
    if _TIMESTAMP_RE.match(stripped):
        return stripped
    for fmt in _DATE_FORMATS:
        try:
            day = datetime.strptime(stripped, fmt)
        except ValueError:
            continue
        return day.replace(hour=now.hour, minute=now.minute, second=now.second).strftime(
            SERVER_TIMESTAMP_FORMAT
        )
    raise ValidationError(f"Invalid date: {stripped}")
