from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum

from jobscout.models import Job


class TimeFilter(str, Enum):
    LAST_HOUR = "1h"
    LAST_24_HOURS = "24h"
    LAST_WEEK = "7d"
    LAST_MONTH = "30d"
    ANY_TIME = "any"


class JobSource(ABC):
    name: str = "source"

    @abstractmethod
    def search(self, term: str, location: str, time_filter: TimeFilter = TimeFilter.ANY_TIME) -> list[Job]:
        pass
