DEBUG = False
TESTING = True

ATTENDANCE_TIMEZONE = None

GRACE_MINUTES = 0
TRANSITION_BUFFER_MINUTES = 15
EARLY_CHECK_IN_MINUTES = 29
LATE_CHECKOUT_TOLERANCE_MINUTES = 0

OVERTIME_MULTIPLIERS = {"WORKDAY": "1.5", "DAY_OFF": "1.0", "HOLIDAY": "2.0"}
PARTTIME_OVERTIME_MULTIPLIERS = {"DAY_OFF": "2.0"}
HOLIDAY_MULTIPLIER = "1.0"

SOCIAL_SECURITY_RATE = "0.05"
SOCIAL_SECURITY_CEILING = "15000"
SOCIAL_SECURITY_MIN_BASE = "0"

TAX_BRACKETS = '[[150000, "0"], [300000, "0.05"], [500000, "0.10"], [null, "0.15"]]'
TAX_ANNUALIZATION_FACTOR = 1

LATE_DEDUCTION_THRESHOLD_MINUTES = 30
DAILY_HOURS = "8"
DAYS_PER_MONTH = "30"

ALLOWANCES = {}

LOG_JSON = False
LOG_LEVEL = "WARNING"
