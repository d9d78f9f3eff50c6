"""FormField definitions organized by resource.

Each module holds the fields (and the attachment, if any) of one endpoint.
"""

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

__all__ = [
    "advisories",
    "famcom",
    "feedbacks",
    "news",
    "officials",
    "ordinances",
    "reports",
    "services",
    "users",
]
