"""FormField definitions for Ordinances."""

from constants import PDF_MAX_BYTES, PDF_MIME_TYPES
from model.schema import NEVER, FileField, FormField

ordinance_id = FormField("ordinanceId", "Ordinance ID", writable=NEVER, column=True)
ordinance_no = FormField("ordinanceNo", "Ordinance No.", column=True, placeholder="e.g. 2024-015")
date_enacted = FormField(
    "dateEnacted", "Date Enacted", kind="date", column=True, placeholder="YYYY-MM-DD",
)
description = FormField("description", "Description", kind="textarea", column=True)

FIELDS = (ordinance_id, ordinance_no, date_enacted, description)

FILE = FileField(
    "ordinancePdf", "Ordinance PDF", "pdfPath",
    PDF_MIME_TYPES, PDF_MAX_BYTES, required_on_create=True,
)
