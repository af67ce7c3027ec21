from __future__ import annotations

import logging
from typing import Mapping

from ..common.validators import require_non_empty
from ..core.constants import WORKER_NUMBER_DIGITS
from ..core.exceptions import ValidationError
from .repository import WorkerRepository

logger = logging.getLogger("workers_management.workers")


class WorkerNumberGenerator:
    """Build worker numbers such as 'MIN-007' from a team → code map.

    The map comes from configuration (TEAM_CODES); team names match
    case-insensitively.
    """

    def __init__(self, workers: WorkerRepository, team_codes: Mapping[str, str], *, digits: int = WORKER_NUMBER_DIGITS):
        self._workers = workers
        self._team_codes = {name.strip().lower(): code for name, code in team_codes.items()}
        self._digits = int(digits)

    def code_for_team(self, team_name: str) -> str:
        team_name = require_non_empty(team_name, "Team name")
        code = self._team_codes.get(team_name.lower())
        if code is None:
            logger.error(
                "team_code_not_found",
                extra={"team_name": team_name, "available_teams": sorted(self._team_codes)},
            )
            raise ValidationError(f"Team code for {team_name} is not defined")
        return code

    def next_number(self, team_name: str) -> str:
        code = self.code_for_team(team_name)
        sequence = self._workers.count_all() + 1
        return f"{code}{sequence:0{self._digits}d}"
