import os

DEBUG = True

ATTENDANCE_TIMEZONE = os.getenv("ATTENDANCE_TIMEZONE", "Asia/Bangkok")

GRACE_MINUTES = int(os.getenv("GRACE_MINUTES", "0"))
TRANSITION_BUFFER_MINUTES = int(os.getenv("TRANSITION_BUFFER_MINUTES", "15"))
EARLY_CHECK_IN_MINUTES = int(os.getenv("EARLY_CHECK_IN_MINUTES", "29"))
LATE_CHECKOUT_TOLERANCE_MINUTES = int(os.getenv("LATE_CHECKOUT_TOLERANCE_MINUTES", "0"))

OVERTIME_MULTIPLIERS = {
    "WORKDAY": os.getenv("OVERTIME_WORKDAY_MULTIPLIER", "1.5"),
    "DAY_OFF": os.getenv("OVERTIME_DAY_OFF_MULTIPLIER", "1.0"),
    "HOLIDAY": os.getenv("OVERTIME_HOLIDAY_MULTIPLIER", "2.0"),
}
PARTTIME_OVERTIME_MULTIPLIERS = {
    "DAY_OFF": os.getenv("PARTTIME_OVERTIME_DAY_OFF_MULTIPLIER", "2.0"),
}
HOLIDAY_MULTIPLIER = os.getenv("HOLIDAY_MULTIPLIER", "1.0")

SOCIAL_SECURITY_RATE = os.getenv("SOCIAL_SECURITY_RATE", "0.05")
SOCIAL_SECURITY_CEILING = os.getenv("SOCIAL_SECURITY_CEILING", "15000")
SOCIAL_SECURITY_MIN_BASE = os.getenv("SOCIAL_SECURITY_MIN_BASE", "0")

# JSON list of [upper, rate]; null upper = unbounded top bracket
TAX_BRACKETS = os.getenv(
    "TAX_BRACKETS",
    '[[150000, "0"], [300000, "0.05"], [500000, "0.10"], [750000, "0.15"], '
    '[1000000, "0.20"], [2000000, "0.25"], [5000000, "0.30"], [null, "0.35"]]',
)
TAX_ANNUALIZATION_FACTOR = int(os.getenv("TAX_ANNUALIZATION_FACTOR", "1"))

LATE_DEDUCTION_THRESHOLD_MINUTES = int(os.getenv("LATE_DEDUCTION_THRESHOLD_MINUTES", "30"))
DAILY_HOURS = os.getenv("DAILY_HOURS", "8")
DAYS_PER_MONTH = os.getenv("DAYS_PER_MONTH", "30")

ALLOWANCES = {
    "FULLTIME": {
        "transportation": os.getenv("FULLTIME_TRANSPORT_ALLOWANCE", "1000"),
        "housing": os.getenv("FULLTIME_HOUSING_ALLOWANCE", "1000"),
        "meal_per_day": os.getenv("FULLTIME_MEAL_ALLOWANCE", "0"),
    },
    "PARTTIME": {
        "transportation": "0",
        "housing": "0",
        "meal_per_day": os.getenv("PARTTIME_MEAL_ALLOWANCE", "30"),
    },
}

LOG_JSON = bool(int(os.getenv("LOG_JSON", "0")))
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
