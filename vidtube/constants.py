"""Application constants - centralized configuration values."""

# =============================================================================
# Pagination
# =============================================================================
DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

# Sortable columns on the public video feed
VIDEO_SORT_FIELDS = ("created_at", "views", "duration", "title")

# =============================================================================
# Auth
# =============================================================================
ACCESS_TOKEN_COOKIE = "accessToken"
REFRESH_TOKEN_COOKIE = "refreshToken"
JWT_ALGORITHM = "HS256"
BCRYPT_ROUNDS = 12

# =============================================================================
# Field limits
# =============================================================================
USERNAME_MAX_LENGTH = 50
TITLE_MAX_LENGTH = 200
NAME_MAX_LENGTH = 200
CONTENT_MAX_LENGTH = 5000

# =============================================================================
# Blob storage
# =============================================================================
CLOUDINARY_API_URL = "https://api.cloudinary.com/v1_1"
BLOB_TIMEOUT = 120.0  # uploads of large video files are slow
RESOURCE_TYPE_IMAGE = "image"
RESOURCE_TYPE_VIDEO = "video"
