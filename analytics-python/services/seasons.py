"""
Seasonal Frequency Helpers
Maps calendar months to seasons and looks up a type's desired frequency
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping


class Season(str, Enum):
    """Meteorological seasons (northern hemisphere)"""
    WINTER = "winter"
    SPRING = "spring"
    SUMMER = "summer"
    FALL = "fall"


def season_for_month(month: int) -> Season:
    """Dec-Feb winter, Mar-May spring, Jun-Aug summer, Sep-Nov fall"""
    if month == 12 or month <= 2:
        return Season.WINTER
    if month <= 5:
        return Season.SPRING
    if month <= 8:
        return Season.SUMMER
    return Season.FALL


@dataclass(frozen=True)
class SeasonalFrequency:
    """
    Desired frequency in days, keyed by season.

    Types that were created before seasonal targets existed carry the same
    value for every season; build those with `SeasonalFrequency.uniform`.
    Every season must be present; the mapping is read-only once built.
    """
    days: Mapping[Season, float]

    def __post_init__(self):
        values = {Season(key): float(value) for key, value in self.days.items()}
        missing = [season.value for season in Season if season not in values]
        if missing:
            raise KeyError(f"Missing desired frequency for: {', '.join(missing)}")
        object.__setattr__(self, 'days', MappingProxyType(values))

    @classmethod
    def uniform(cls, days: float) -> "SeasonalFrequency":
        return cls.from_mapping({season: days for season in Season})

    @classmethod
    def from_mapping(cls, values: Mapping) -> "SeasonalFrequency":
        """Build from a {season: days} mapping; keys may be Season or str"""
        return cls(days=values)

    def __eq__(self, other):
        if not isinstance(other, SeasonalFrequency):
            return NotImplemented
        return dict(self.days) == dict(other.days)

    def __hash__(self):
        return hash(tuple(self.days[season] for season in Season))

    def for_season(self, season: Season) -> float:
        return self.days[season]

    def for_month(self, month: int) -> float:
        return self.for_season(season_for_month(month))

    def for_date(self, day: date) -> float:
        return self.for_month(day.month)

    def as_dict(self) -> Dict[str, float]:
        return {season.value: self.days[season] for season in Season}
