"""All resource schemas and the registry that names them.

Each schema maps one PHP endpoint to the generic list/modal workflow. The
order of REGISTRY is the order of the tabs in the console.
"""

from __future__ import annotations

from model.fields import (
    advisories,
    famcom,
    feedbacks,
    news,
    officials,
    ordinances,
    reports,
    services,
    users,
)
from model.schema import Actions, ResourceSchema

OFFICIALS = ResourceSchema(
    name="officials",
    title="Head Officials",
    endpoint="php_folder/manageHeadOfficials.php",
    identity_field="employeeId",
    event_noun="official",
    fields=officials.FIELDS,
    searchable=("name", "position", "employeeId"),
    filterable=("position",),
    file=officials.FILE,
    actions=Actions(get="getOfficialById", next_id="getNextEmployeeId", delete="delete"),
    id_param="official_id",
    next_id_key="employeeId",
)

FAMCOM = ResourceSchema(
    name="famcom",
    title="Family & Community Officials",
    endpoint="php_folder/manageFamComOfficials.php",
    identity_field="employeeId",
    event_noun="official",
    fields=famcom.FIELDS,
    searchable=("name", "position", "employeeId"),
    filterable=("position",),
    file=famcom.FILE,
    actions=Actions(get="getOfficialById", next_id="getNextEmployeeId", delete="delete"),
    id_param="official_id",
    next_id_key="employeeId",
)

SERVICES = ResourceSchema(
    name="services",
    title="Services",
    endpoint="php_folder/manageService.php",
    identity_field="serviceId",
    event_noun="service",
    fields=services.FIELDS,
    searchable=("serviceTitle", "serviceDepartment", "serviceDescription", "serviceId"),
    filterable=("processDuration", "serviceDepartment"),
    file=services.FILE,
    actions=Actions(get="getServiceById"),
    list_keys=("services",),
    next_id_key="serviceId",
)

ORDINANCES = ResourceSchema(
    name="ordinances",
    title="Ordinances",
    endpoint="php_folder/manageOrdinances.php",
    identity_field="ordinanceId",
    event_noun="ordinance",
    fields=ordinances.FIELDS,
    searchable=("ordinanceNo", "description", "dateEnacted", "ordinanceId"),
    file=ordinances.FILE,
    actions=Actions(get="getOrdinanceById"),
    list_keys=("ordinances",),
    next_id_key="ordinanceId",
)

ADVISORIES = ResourceSchema(
    name="advisories",
    title="Advisories",
    endpoint="php_folder/manageAdvisories.php",
    identity_field="advisoryId",
    event_noun="advisory",
    fields=advisories.FIELDS,
    searchable=("advisoryTitle", "advisoryDescription", "advisoryId"),
    filterable=("uploadDate",),
    actions=Actions(get="getAdvisoryById", delete="delete"),
    list_keys=("advisories",),
    next_id_key="advisoryId",
)

NEWS = ResourceSchema(
    name="newsupdates",
    title="News & Updates",
    endpoint="php_folder/manageNewsUpdates.php",
    identity_field="newsupdateId",
    event_noun="newsupdate",
    fields=news.NEWS_FIELDS,
    searchable=("newsupdateTitle", "newsupdateDescription", "newsupdateId"),
    filterable=("uploadDate",),
    file=news.NEWS_FILE,
    actions=Actions(get="getNewsupdateById"),
    list_keys=("newsupdates",),
    next_id_key="newsupdateId",
)

STORIES = ResourceSchema(
    name="featuredstories",
    title="Featured Stories",
    endpoint="php_folder/manageFeaturedStories.php",
    identity_field="featuredstoriesId",
    event_noun="featuredstory",
    fields=news.STORY_FIELDS,
    searchable=("featuredstoriesTitle", "featuredstoriesDescription", "featuredstoriesId"),
    filterable=("uploadDate",),
    file=news.STORY_FILE,
    actions=Actions(get="getFeaturedstoriesById"),
    list_keys=("featuredstories",),
    next_id_key="featuredstoriesId",
)

REPORTS = ResourceSchema(
    name="reports",
    title="Accomplishment Reports",
    endpoint="php_folder/manageAccomplishmentReports.php",
    identity_field="reportId",
    event_noun="report",
    fields=reports.FIELDS,
    searchable=("title", "content", "department", "reportId"),
    filterable=("department", "status"),
    file=reports.FILE,
    actions=Actions(get="getReportById", delete="delete"),
    next_id_key="reportId",
    id_prefix="RPT",
    status_field="status",
)

FEEDBACKS = ResourceSchema(
    name="feedbacks",
    title="Feedbacks",
    endpoint="php_folder/manageFeedbacks.php",
    identity_field="feedback_id",
    event_noun="feedback",
    fields=feedbacks.FIELDS,
    searchable=(
        "feedback_baranggay",
        "feedback_satisfaction",
        "feedback_visit",
        "feedback_recommend",
        "feedback_date",
        "feedback_id",
    ),
    filterable=("feedback_baranggay", "feedback_satisfaction", "feedback_date"),
    actions=Actions(get="getFeedbackById", next_id=None, create=None, update=None),
)

USERS = ResourceSchema(
    name="users",
    title="Users",
    endpoint="php_folder/manageUsers.php",
    identity_field="userId",
    event_noun="user",
    fields=users.FIELDS,
    searchable=("username", "handlerName", "department", "userType", "userId"),
    filterable=("userType", "department"),
    actions=Actions(get="getUserById", delete="delete"),
    list_keys=("users",),
    record_keys=("user",),
    next_id_key="userId",
    aliases=(("userDept", "department"), ("userHandler", "handlerName")),
    json_delete=True,
)

REGISTRY: dict[str, ResourceSchema] = {
    schema.name: schema
    for schema in (
        OFFICIALS,
        FAMCOM,
        SERVICES,
        ORDINANCES,
        ADVISORIES,
        NEWS,
        STORIES,
        REPORTS,
        FEEDBACKS,
        USERS,
    )
}


def get_schema(name: str) -> ResourceSchema:
    """Look up a schema by resource name.

    Raises:
        KeyError: with the known names, if `name` is not registered
    """
    try:
        return REGISTRY[name]
    except KeyError:
        known = ", ".join(REGISTRY)
        raise KeyError(f"Unknown resource {name!r} (known: {known})") from None
