"""Widget ID constants for the console.

Using constants prevents typos and makes refactoring easier. IDs inside a
ResourceListView or ResourceModal are per-widget (queried from that widget),
so the same ID repeats once per resource tab.
"""


def css(widget_id: str) -> str:
    """Return a CSS selector for a widget ID.

    Usage:
        from ui.ids import css, RECORDS_TABLE
        self.query_one(css(RECORDS_TABLE), DataTable)
    """
    return f"#{widget_id}"


def tab_id(resource: str) -> str:
    """TabPane ID for a resource (or "dashboard")."""
    return f"tab-{resource}"


def list_view_id(resource: str) -> str:
    return f"list-{resource}"


def filter_id(field: str) -> str:
    return f"filter-{field}"


def field_id(field: str) -> str:
    return f"field-{field}"


def page_btn_id(page: int) -> str:
    return f"page-{page}"


# App-level IDs
HEADER_TITLE = "header-title"
MAIN_TABS = "main-tabs"
DASHBOARD = "dashboard"
DASHBOARD_VIEW = "dashboard-view"

# List view IDs
LIST_TOOLBAR = "list-toolbar"
SEARCH_INPUT = "search-input"
PAGE_SIZE_SELECT = "page-size-select"
REFRESH_BTN = "refresh-btn"
RESET_BTN = "reset-btn"
ADD_BTN = "add-btn"
VIEW_BTN = "view-btn"
EDIT_BTN = "edit-btn"
DELETE_BTN = "delete-btn"
RECORDS_TABLE = "records-table"
LIST_PLACEHOLDER = "list-placeholder"
STATUS_COUNTS = "status-counts"

# Pagination IDs
PAGINATION_BAR = "pagination-bar"
PREV_PAGE_BTN = "prev-page-btn"
NEXT_PAGE_BTN = "next-page-btn"
PAGE_BUTTONS = "page-buttons"
RESULTS_INFO = "results-info"

# Record modal IDs
RECORD_MODAL = "record-modal"
MODAL_TITLE = "modal-title"
MODAL_FORM = "modal-form"
MODAL_ERROR = "modal-error"
MODAL_BUTTONS = "modal-buttons"
SAVE_BTN = "save-btn"
CANCEL_BTN = "cancel-btn"
CLOSE_BTN = "close-btn"
FILE_INPUT = "file-input"
ATTACH_BTN = "attach-btn"
REMOVE_FILE_BTN = "remove-file-btn"
FILE_PREVIEW = "file-preview"

# Confirm / loading IDs
CONFIRM_DIALOG = "confirm-dialog"
CONFIRM_MESSAGE = "confirm-message"
CONFIRM_YES_BTN = "confirm-yes-btn"
CONFIRM_NO_BTN = "confirm-no-btn"
LOADING_DIALOG = "loading-dialog"
LOADING_MESSAGE = "loading-message"
