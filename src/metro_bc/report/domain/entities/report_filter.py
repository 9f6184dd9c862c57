from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .crowd_level import CrowdLevel


class ReportSort(str, Enum):
    NEWEST = "newest"
    OLDEST = "oldest"
    MOST_LIKED = "most_liked"


@dataclass(frozen=True)
class ReportFilter:
    """Recognised filters for listing reports."""
    station_id: Optional[str] = None  # Case-insensitive substring match
    level: Optional[CrowdLevel] = None
    page: int = 1
    limit: int = 12
    sort: ReportSort = ReportSort.NEWEST

    def __post_init__(self):
        if self.page < 1:
            raise ValueError("page must be >= 1")
        if not 1 <= self.limit <= 100:
            raise ValueError("limit must be between 1 and 100")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit
