from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict

from ..model import QuotaCounts


class RewardPolicy(ABC):
    """Policy interface (Strategy Pattern for reward eligibility)."""

    @abstractmethod
    def shortfalls(self, counts: QuotaCounts) -> Dict[str, int]:
        """Category -> how many more events are needed (empty when qualified)."""
        raise NotImplementedError

    def qualifies(self, counts: QuotaCounts) -> bool:
        return not self.shortfalls(counts)
