"""JournalEntry data model."""

from datetime import date as date_type
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class Mood(str, Enum):
    """Trader mood for the day, ordered from worst to best."""

    TERRIBLE = "terrible"
    POOR = "poor"
    NEUTRAL = "neutral"
    GOOD = "good"
    EXCELLENT = "excellent"

    @property
    def rank(self) -> int:
        return list(Mood).index(self)


class NewsEvent(BaseModel):
    """A scheduled news or economic event."""

    name: str = Field(..., description="Event name")
    time: str = Field(default="", description="Event time (e.g. 08:30 AM)")

    model_config = {"frozen": True}


class JournalEntry(BaseModel):
    """Represents a daily trading journal entry.

    Field names also validate from the camelCase keys of journal backups.
    """

    date: date_type = Field(..., description="Journal entry date")
    mood: Mood = Field(default=Mood.NEUTRAL, description="Mood for the day")
    followed_system: bool = Field(default=True, description="Whether the trading plan was followed")
    is_news_day: bool = Field(default=False, description="High-impact news scheduled")
    did_trade: bool = Field(default=True, description="Whether any trades were taken")
    name: Optional[str] = Field(default=None, description="Optional title")
    notes: str = Field(default="", description="User notes")
    lessons_learned: str = Field(default="", description="Lessons learned")
    market_conditions: str = Field(default="", description="Market conditions")
    news_events: tuple[NewsEvent, ...] = Field(default=(), description="News events for the day")

    model_config = {"frozen": True, "alias_generator": to_camel, "populate_by_name": True}
