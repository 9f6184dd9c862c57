from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .crowd_level import CrowdLevel


@dataclass(frozen=True)
class Report:
    """Community crowd report for a station.

    station_id is the station slug, not a reference to a Station record:
    reports may exist for stations missing from the dataset.
    """
    id: str
    station_id: str
    level: CrowdLevel
    user_id: str
    created_at: datetime
    remarks: str = ""
    likes: int = 0
    verified: bool = False
    photo: Optional[str] = None
