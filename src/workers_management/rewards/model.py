from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from ..core.enums import RewardStatus, RewardType


@dataclass(frozen=True)
class Reward:
    """Domain entity: a reward earned for one period (e.g. '2024-01')."""

    reward_id: int
    worker_id: int
    reward_type: RewardType
    status: RewardStatus
    period: str
    created_at: datetime
    redeemed_at: Optional[datetime] = None


@dataclass(frozen=True)
class NewReward:
    worker_id: int
    reward_type: RewardType
    status: RewardStatus
    period: str
    created_at: datetime


@dataclass(frozen=True)
class IssuedReward:
    """What the issuer handed back; newly_issued is False when the period already had a reward."""

    reward: Reward
    newly_issued: bool


@dataclass(frozen=True)
class QuotaCounts:
    """Monthly counts the reward policy is evaluated against."""

    sunday_attendance: int = 0
    midweek_attendance: int = 0
    special_meeting_attendance: int = 0
    nlp_prayer: int = 0
    bible_study: int = 0
    devotionals: int = 0
    fasting: int = 0
    giving: int = 0

    @property
    def total_attendance(self) -> int:
        return self.sunday_attendance + self.midweek_attendance + self.special_meeting_attendance

    def as_dict(self) -> Dict[str, int]:
        return {
            "sunday_attendance": self.sunday_attendance,
            "midweek_attendance": self.midweek_attendance,
            "special_meeting_attendance": self.special_meeting_attendance,
            "total_attendance": self.total_attendance,
            "nlp_prayer": self.nlp_prayer,
            "bible_study": self.bible_study,
            "devotionals": self.devotionals,
            "fasting": self.fasting,
            "giving": self.giving,
        }


@dataclass(frozen=True)
class EvaluationResult:
    worker_id: int
    period: str
    counts: QuotaCounts
    qualifies: bool
    shortfalls: Dict[str, int] = field(default_factory=dict)
    reward: Optional[Reward] = None
    newly_issued: bool = False


@dataclass(frozen=True)
class RewardListing:
    rewards: List[Reward]
    message: str
