"""Application constants - centralized configuration values."""

# =============================================================================
# Library
# =============================================================================
AUTHOR_SEPARATOR = ", "
MANUAL_ID_PREFIX = "manual_"
MANUAL_DEFAULT_DESCRIPTION = "Registered manually"

# =============================================================================
# Rating
# =============================================================================
RATING_MIN = 0
RATING_MAX = 10

# =============================================================================
# Statistics
# =============================================================================
DEFAULT_YEARLY_GOAL = 12

# =============================================================================
# Catalog search
# =============================================================================
CATALOG_PRINT_TYPE = "books"
CATALOG_MAX_RESULTS_LIMIT = 40
SEARCH_MIN_LENGTH = 1
SEARCH_MAX_LENGTH = 200

# =============================================================================
# Shelves
# =============================================================================
DEFAULT_SHELF_COLOR = -12627531  # 0xFF3F51B5 as signed 32-bit ARGB
