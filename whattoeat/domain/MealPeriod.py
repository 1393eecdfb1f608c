"""Meal period enumeration and the hour -> period rule."""
from enum import Enum

from whattoeat.utilities.constants import (
    FILTER_ALL, BREAKFAST_HOURS, LUNCH_HOURS, PERIOD_LABELS,
)


class MealPeriod(str, Enum):
    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"

    @property
    def label(self) -> str:
        return PERIOD_LABELS[self.value]

    @classmethod
    def for_hour(cls, hour: int) -> "MealPeriod":
        """[6,10) breakfast, [10,16) lunch, everything else (16:00-05:59) dinner."""
        if BREAKFAST_HOURS[0] <= hour < BREAKFAST_HOURS[1]:
            return cls.BREAKFAST
        if LUNCH_HOURS[0] <= hour < LUNCH_HOURS[1]:
            return cls.LUNCH
        return cls.DINNER


def is_filter_value(value) -> bool:
    """True for 'all' or any meal period name."""
    return value == FILTER_ALL or value in {p.value for p in MealPeriod}
