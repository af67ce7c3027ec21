from __future__ import annotations

from typing import Dict

from ...core.constants import (
    MIN_MONTHLY_ATTENDANCE,
    MIN_MONTHLY_BIBLE_STUDY,
    MIN_MONTHLY_DEVOTIONALS,
    MIN_MONTHLY_FASTING,
    MIN_MONTHLY_GIVING,
    MIN_MONTHLY_NLP_PRAYER,
)
from ..model import QuotaCounts
from .base import RewardPolicy


class MonthlyQuotaPolicy(RewardPolicy):
    """Standard rule: every monthly quota must be met."""

    thresholds: Dict[str, int] = {
        "total_attendance": MIN_MONTHLY_ATTENDANCE,
        "nlp_prayer": MIN_MONTHLY_NLP_PRAYER,
        "bible_study": MIN_MONTHLY_BIBLE_STUDY,
        "devotionals": MIN_MONTHLY_DEVOTIONALS,
        "fasting": MIN_MONTHLY_FASTING,
        "giving": MIN_MONTHLY_GIVING,
    }

    def shortfalls(self, counts: QuotaCounts) -> Dict[str, int]:
        actual = counts.as_dict()
        return {
            category: minimum - actual[category]
            for category, minimum in self.thresholds.items()
            if actual[category] < minimum
        }
