"""Core constants: cache key structure and shared literal values.

Single source of truth for cache key structure (DRY). Used by
infrastructure cache and the resource access layer.
"""

# Cache key prefix for enveloped API list results
CACHE_PREFIX_API = "api"
CACHE_USER_SEGMENT = "user"
CACHE_ANONYMOUS_BUCKET = "anonymous"

# Delimiter for composite keys
CACHE_KEY_SEP = ":"

# Pagination defaults (overridable in settings)
DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20
MAX_LIMIT = 100
# Largest OFFSET a 64-bit SQL integer can carry
MAX_ROW_OFFSET = 2**63 - 1

# Marker column for soft delete
SOFT_DELETE_COLUMN = "deleted_at"
