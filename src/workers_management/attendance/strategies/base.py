from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class WindowDecision:
    valid: bool
    early: bool
    message: Optional[str] = None


class TimeWindowStrategy(ABC):
    """Strategy Pattern: encapsulate the check-in window rule of one attendance type."""

    @abstractmethod
    def decide(self, *, at: datetime) -> WindowDecision:
        """`at` is naive UTC."""
        raise NotImplementedError
