"""Shared constants for civic-console."""

APP_NAME = "civic-console"
APP_VERSION = "0.3.0"

# Pagination
PAGE_SIZES = (5, 10, 25, 50, 100)
DEFAULT_PAGE_SIZE = 10

# Collections above this size show the "applying filters" placeholder
LARGE_COLLECTION_THRESHOLD = 100

# Attachments
MB = 1024 * 1024
IMAGE_MAX_BYTES = 5 * MB
PDF_MAX_BYTES = 10 * MB
IMAGE_MIME_TYPES = frozenset({"image/jpeg", "image/jpg", "image/png", "image/gif"})
PDF_MIME_TYPES = frozenset({"application/pdf"})

# Network
DEFAULT_TIMEOUT = 30.0
DEFAULT_USER_INFO_PATH = "php_folder/get-user-data.php"

# Server timestamp convention (MySQL DATETIME)
SERVER_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
