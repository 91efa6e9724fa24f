"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SHIFT_START = "08:00"
DEFAULT_SHIFT_END = "16:00"

DEFAULT_UNSANCTIONED_MULTIPLIER = 2

# Fallbacks used when a branch's late deduction rules omit a field.
DEFAULT_DEDUCT_PER_MINUTE = 0.5
DEFAULT_FIXED_AMOUNT_PER_MINUTE = 1
DEFAULT_MAX_DEDUCTION_TIME = 90
DEFAULT_HALF_DAY_THRESHOLD = 120
DEFAULT_ABSENT_THRESHOLD = 240

DEFAULT_CURRENCY_SYMBOL = "₹"

ZERO_WORKING_HOURS = "0h 0m"
