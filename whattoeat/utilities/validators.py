"""
Input validation schemas using Pydantic for API request bodies.
"""
from pydantic import BaseModel, Field, field_validator
from typing import List

from whattoeat.utilities.constants import MEAL_PERIODS, FILTER_VALUES


class FoodInput(BaseModel):
    """Schema for a new food. An empty name is let through so the store can reject it."""
    name: str = Field(default="", max_length=100)
    tags: List[str] = Field(default_factory=list)

    @field_validator('name', mode='before')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace."""
        if v is None:
            return ""
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator('tags')
    @classmethod
    def validate_tags(cls, v):
        """Lower-case tags, drop blanks and reject unknown meal periods."""
        tags = [tag.strip().lower() for tag in v if tag and tag.strip()]
        unknown = [tag for tag in tags if tag not in MEAL_PERIODS]
        if unknown:
            raise ValueError(f"Unknown meal period(s): {', '.join(unknown)}")
        return tags


class FilterInput(BaseModel):
    """Schema for changing the list filter."""
    filter: str = Field(..., min_length=1)

    @field_validator('filter')
    @classmethod
    def validate_filter(cls, v):
        value = v.strip().lower()
        if value not in FILTER_VALUES:
            raise ValueError(f"Filter must be one of: {', '.join(FILTER_VALUES)}")
        return value
