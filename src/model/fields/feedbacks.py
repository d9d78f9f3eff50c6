"""FormField definitions for citizen feedback.

Residents submit feedback from the public site; the console only reads it,
so nothing here is writable.
"""

from model.schema import NEVER, FormField

feedback_id = FormField("feedback_id", "No.", writable=NEVER, column=True)
barangay = FormField("feedback_baranggay", "Barangay", writable=NEVER, column=True)
satisfaction = FormField("feedback_satisfaction", "Satisfaction", writable=NEVER, column=True)
visit = FormField("feedback_visit", "Visit Purpose", kind="textarea", writable=NEVER, column=True)
found_info = FormField("feedback_looking", "Found What They Needed", writable=NEVER)
recommendations = FormField(
    "feedback_recommend", "Recommendations", kind="textarea", writable=NEVER, required=False,
)
date = FormField("feedback_date", "Date", writable=NEVER, column=True)

FIELDS = (feedback_id, barangay, satisfaction, visit, found_info, recommendations, date)
