"""FormField definitions for console user accounts.

Only the account records are managed here; signing in is handled by the
web backend.
"""

from model.fields.services import DEPARTMENTS
from model.schema import NEVER, FormField

USER_TYPES = ("Administrator", "WebAdministrator", "DepartmentAdmin")

user_id = FormField("userId", "User ID", writable=NEVER, column=True)
user_type = FormField("userType", "User Type", kind="select", choices=USER_TYPES, column=True)
department = FormField(
    "department", "Department", kind="select", choices=DEPARTMENTS, column=True,
)
username = FormField("username", "Username", column=True)
handler_name = FormField("handlerName", "Handler Name", column=True)
password = FormField("password", "Password", kind="password")

FIELDS = (user_id, user_type, department, username, handler_name, password)
