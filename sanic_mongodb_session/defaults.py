"""
Session Store Default Values
All hardcoded values should be defined here and referenced by name
These are sensible defaults that can be overridden in .env or at construction
"""

# ============================================================================
# MONGODB DEFAULTS
# ============================================================================

# Construction-time bounds (seconds)
DEFAULT_CONNECT_TIMEOUT = 15.0
DEFAULT_INDEX_TIMEOUT = 15  # createIndexes maxTimeMS, in seconds

# Per-request bound for find/upsert/delete (seconds)
DEFAULT_OPERATION_TIMEOUT = 10.0

# ============================================================================
# SESSION DEFAULTS
# ============================================================================

DEFAULT_SESSION_COOKIE_NAME = 'session'
DEFAULT_SESSION_TTL = 7200  # seconds (2 hours)
DEFAULT_TTL_INDEX_NAME = 'last_modified_ttl'
DEFAULT_FLASH_KEY = '_flash'

# ============================================================================
# COOKIE DEFAULTS
# ============================================================================

DEFAULT_COOKIE_PATH = '/'
DEFAULT_COOKIE_HTTP_ONLY = True
DEFAULT_COOKIE_SECURE = False
DEFAULT_COOKIE_SAME_SITE = 'Lax'

# ============================================================================
# CODEC DEFAULTS
# ============================================================================

DEFAULT_CODEC_MAX_AGE = 86400 * 30  # seconds (30 days)

# ============================================================================
# LOGGING DEFAULTS
# ============================================================================

DEFAULT_LOG_MAX_BYTES = 10 * 1024 * 1024  # 10MB
DEFAULT_LOG_BACKUP_COUNT = 5
