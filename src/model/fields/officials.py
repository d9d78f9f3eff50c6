"""FormField definitions for Head Officials."""

from constants import IMAGE_MAX_BYTES, IMAGE_MIME_TYPES
from model.schema import NEVER, FileField, FormField

employee_id = FormField("employeeId", "Employee ID", writable=NEVER, column=True)
name = FormField("name", "Name", column=True, placeholder="Full name of the official")
position = FormField("position", "Position", column=True, placeholder="e.g. Municipal Mayor")
dept = FormField("dept", "Department", required=False, writable=NEVER, column=True)

FIELDS = (employee_id, name, position, dept)

FILE = FileField(
    "officialImage", "Official Picture", "picture",
    IMAGE_MIME_TYPES, IMAGE_MAX_BYTES, resend_path=True,
)
