"""FormField definitions for Family & Community officials.

Same record shape as the head officials; the endpoint stores them in their
own table and stamps every row with the "fc" department.
"""

from constants import IMAGE_MAX_BYTES, IMAGE_MIME_TYPES
from model.schema import NEVER, FileField, FormField

employee_id = FormField("employeeId", "Employee ID", writable=NEVER, column=True)
name = FormField("name", "Name", column=True, placeholder="Full name of the official")
position = FormField("position", "Position", column=True, placeholder="e.g. Barangay Captain")

FIELDS = (employee_id, name, position)

FILE = FileField(
    "officialImage", "Official Picture", "picture",
    IMAGE_MIME_TYPES, IMAGE_MAX_BYTES, resend_path=True,
)
