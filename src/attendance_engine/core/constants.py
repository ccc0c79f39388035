"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_GRACE_MINUTES = 0
DEFAULT_TRANSITION_BUFFER_MINUTES = 15
DEFAULT_EARLY_CHECK_IN_MINUTES = 29
DEFAULT_LATE_CHECKOUT_TOLERANCE_MINUTES = 0

DEFAULT_DAILY_HOURS = 8
DEFAULT_DAYS_PER_MONTH = 30
DEFAULT_LATE_DEDUCTION_THRESHOLD_MINUTES = 30

# ISO weekdays, Monday=1 .. Sunday=7
DEFAULT_WORKDAYS = frozenset({1, 2, 3, 4, 5, 6})

DEFAULT_PAYROLL_CHUNK_SIZE = 50
