"""FormField definitions for Services."""

from constants import IMAGE_MAX_BYTES, IMAGE_MIME_TYPES
from model.schema import NEVER, FileField, FormField

DEPARTMENTS = (
    "Social Welfare",
    "Health Services",
    "Education",
    "Community Development",
    "Youth Affairs",
    "Environmental Services",
)

DURATIONS = ("3 working days", "5 working days", "7 working days", "14 working days")

service_id = FormField("serviceId", "Service ID", writable=NEVER, column=True)
service_title = FormField(
    "serviceTitle", "Service Title", column=True,
    placeholder="Input service title here...",
)
service_department = FormField(
    "serviceDepartment", "Department", kind="select", choices=DEPARTMENTS, column=True,
)
process_duration = FormField(
    "processDuration", "Process Duration", kind="select", choices=DURATIONS, column=True,
)
service_description = FormField(
    "serviceDescription", "Service Description", kind="textarea", max_length=300,
)
service_requirements = FormField(
    "serviceRequirements", "Service Requirements", kind="textarea", max_length=150,
    placeholder="ex. (PSA Certificate, Barangay Clearance, etc.)",
)
service_who_can_avail = FormField(
    "serviceWhoCanAvail", "Who Can Avail", kind="textarea", max_length=150,
    placeholder="ex. (Senior Citizens, Single Parents, etc.)",
)

FIELDS = (
    service_id,
    service_title,
    service_department,
    process_duration,
    service_description,
    service_requirements,
    service_who_can_avail,
)

FILE = FileField(
    "serviceImage", "Service Image", "servicePicPath",
    IMAGE_MIME_TYPES, IMAGE_MAX_BYTES,
)
