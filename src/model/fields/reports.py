"""FormField definitions for Accomplishment Reports.

Department heads create reports (title, content, PDF); the rest of the header
is auto-filled. Admins review them in edit mode, where only the review fields
accept input.
"""

from constants import PDF_MAX_BYTES, PDF_MIME_TYPES
from model.schema import (
    AUTO_TODAY,
    CREATE_ONLY,
    EDIT_ONLY,
    NEVER,
    FileField,
    FormField,
)

STATUSES = ("Pending", "Approved", "Declined")

report_id = FormField("reportId", "Report ID", writable=NEVER, column=True)
date_submitted = FormField(
    "dateSubmitted", "Date Submission", kind="date", writable=NEVER,
    auto=AUTO_TODAY, auto_modes=CREATE_ONLY, column=True,
)
head_id = FormField("headId", "User ID", writable=NEVER, auto="user_id", auto_modes=CREATE_ONLY)
department = FormField(
    "department", "Department", writable=NEVER, auto="user_dept", auto_modes=CREATE_ONLY,
    column=True,
)
title = FormField("title", "Title", writable=CREATE_ONLY, column=True)
content = FormField("content", "Content", kind="textarea", writable=CREATE_ONLY, max_length=255)
status = FormField(
    "status", "Status", kind="select", choices=STATUSES, writable=EDIT_ONLY, column=True,
)
admin_id = FormField("adminId", "Admin ID", writable=NEVER, auto="user_id", auto_modes=EDIT_ONLY)
date_reviewed = FormField(
    "dateReviewed", "Date Reviewed", kind="date", writable=EDIT_ONLY,
    placeholder="YYYY-MM-DD",
)
admin_comments = FormField(
    "adminComments", "Remarks", kind="textarea", writable=EDIT_ONLY, required=False,
    max_length=255,
)

FIELDS = (
    report_id,
    date_submitted,
    head_id,
    department,
    title,
    content,
    status,
    admin_id,
    date_reviewed,
    admin_comments,
)

FILE = FileField(
    "reportFile", "Report PDF", "filePath",
    PDF_MIME_TYPES, PDF_MAX_BYTES, required_on_create=True, writable=CREATE_ONLY,
)
