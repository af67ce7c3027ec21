"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
The monthly quotas are fixed business rules; change them here (or inject a
different reward policy) rather than passing thresholds per call.
"""

from datetime import time

# Monthly quotas required for a reward.
MIN_MONTHLY_ATTENDANCE = 4
MIN_MONTHLY_NLP_PRAYER = 20
MIN_MONTHLY_BIBLE_STUDY = 20
MIN_MONTHLY_DEVOTIONALS = 20
MIN_MONTHLY_FASTING = 8
MIN_MONTHLY_GIVING = 4

# Attendance windows (UTC).
SUNDAY_SERVICE_START = time(8, 0)
SUNDAY_SERVICE_END = time(19, 0)
SUNDAY_SERVICE_EARLY_CUTOFF = time(9, 0)

MIDWEEK_SERVICE_START = time(18, 45)
MIDWEEK_SERVICE_END = time(20, 30)
MIDWEEK_SERVICE_EARLY_CUTOFF = time(18, 45)

DEFAULT_WORKER_TIMEOUT_SECONDS = 30.0
DEFAULT_HISTORY_LIMIT = 30
WORKER_NUMBER_DIGITS = 3
