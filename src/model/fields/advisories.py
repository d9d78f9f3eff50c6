"""FormField definitions for Advisories."""

from model.schema import NEVER, FormField

advisory_id = FormField("advisoryId", "Advisory ID", writable=NEVER, column=True)
advisory_title = FormField("advisoryTitle", "Advisory Title", column=True)
upload_date = FormField("uploadDate", "Upload Date", kind="date", column=True, placeholder="YYYY-MM-DD")
advisory_description = FormField("advisoryDescription", "Advisory Description", kind="textarea")

FIELDS = (advisory_id, advisory_title, upload_date, advisory_description)
