from __future__ import annotations

from enum import Enum


class AttendanceType(str, Enum):
    """Kind of gathering a worker checks in to."""

    SUNDAY_SERVICE = "SundayService"
    MIDWEEK_SERVICE = "MidweekService"
    WORKERS_MEETING = "WorkersMeeting"
    SPECIAL_SERVICE_MEETING = "SpecialServiceMeeting"


class AttendanceStatus(str, Enum):
    PRESENT = "Present"
    ABSENT = "Absent"


class HabitType(str, Enum):
    """Spiritual habits a worker can log."""

    GIVING = "Giving"
    FASTING = "Fasting"
    BIBLE_STUDY = "BibleStudy"
    NLP_PRAYER = "NLPPrayer"
    DEVOTIONALS = "Devotionals"


class GivingType(str, Enum):
    """Sub-type of a Giving habit (only meaningful when type == GIVING)."""

    TITHE = "Tithe"
    OFFERING = "Offering"
    FOOD_BANK = "FoodBank"
    OTHER_KINGDOM_DONATIONS = "OtherKingdomDonations"


class RewardType(str, Enum):
    GIFT_VOUCHER = "GiftVoucher"


class RewardStatus(str, Enum):
    PENDING = "Pending"
    ISSUED = "Issued"
    REDEEMED = "Redeemed"


class FailureKind(str, Enum):
    """Why a single worker failed inside a reward batch."""

    WORKER_NOT_FOUND = "WorkerNotFound"
    STORE_FAILURE = "StoreFailure"
    TIMEOUT = "Timeout"
    UNEXPECTED = "Unexpected"
