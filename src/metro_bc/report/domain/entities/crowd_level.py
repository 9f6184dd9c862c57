from enum import Enum
from typing import Union

from src.metro_bc.shared.domain.exceptions import InvalidCrowdLevelError


class CrowdLevel(str, Enum):
    """Canonical crowd levels.

    The middle tier is exposed as "moderate" on every output contract;
    "medium" is accepted on input only.
    """
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"

    @property
    def ordinal(self) -> int:
        """Position on the 1-3 ordinal scale."""
        return _ORDINALS[self]

    @classmethod
    def normalize(cls, label: Union[str, "CrowdLevel"]) -> "CrowdLevel":
        """Map a synonym (light/medium/heavy, any case) to a canonical level.

        Raises:
            InvalidCrowdLevelError: if the label is not recognised
        """
        if isinstance(label, CrowdLevel):
            return label
        if not isinstance(label, str):
            raise InvalidCrowdLevelError(label)

        level = _SYNONYMS.get(label.strip().lower())
        if level is None:
            raise InvalidCrowdLevelError(label)
        return level


_ORDINALS = {
    CrowdLevel.LOW: 1,
    CrowdLevel.MODERATE: 2,
    CrowdLevel.HIGH: 3,
}

_SYNONYMS = {
    "low": CrowdLevel.LOW,
    "light": CrowdLevel.LOW,
    "moderate": CrowdLevel.MODERATE,
    "medium": CrowdLevel.MODERATE,
    "high": CrowdLevel.HIGH,
    "heavy": CrowdLevel.HIGH,
}

# Tie-break order when normalized scores are equal
LEVEL_PRECEDENCE = (CrowdLevel.HIGH, CrowdLevel.MODERATE, CrowdLevel.LOW)
