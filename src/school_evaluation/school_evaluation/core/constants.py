"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# Every student starts in good standing at this value for both scores.
BASELINE_POINT = 100

DEFAULT_SKIP = 0
DEFAULT_LIMIT = 100
MAX_LIMIT = 500

DEFAULT_API_TIMEOUT = 10.0

GENERIC_ERROR_MESSAGE = "Lỗi hệ thống, vui lòng thử lại"
