from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Worker:
    """Domain entity: a church worker.

    Relationships (team, department) are plain values/ids, not object references.
    """

    worker_id: int
    worker_number: str
    first_name: str
    last_name: str
    email: Optional[str] = None
    team_name: Optional[str] = None
    is_active: bool = True

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
