from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator
from pydantic.alias_generators import to_camel
from datetime import datetime, date as Date
from typing import Optional, List
from enum import Enum


class CamelModel(BaseModel):
    """Base for models exchanged with callers using camelCase keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FeedbackRecord(BaseModel):
    """One normalized row of the feedback sheet."""
    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    understanding: float = 0
    instructor_rating: float = 0
    comment: str = ""


class WindowMode(str, Enum):
    DAILY = "daily"
    MONTHLY = "monthly"
    SPECIFIC = "specific"
    RANGE = "range"
    FULL = "full"


POINT_MODES = (WindowMode.DAILY, WindowMode.MONTHLY, WindowMode.SPECIFIC)


class WindowSpec(BaseModel):
    """Which records participate in a digest."""
    model_config = ConfigDict(frozen=True)

    mode: WindowMode
    date: Optional[datetime] = None
    start_date: Optional[Date] = None
    end_date: Optional[Date] = None

    @model_validator(mode="after")
    def check_required_dates(self) -> "WindowSpec":
        if self.mode == WindowMode.SPECIFIC and self.date is None:
            raise ValueError("specific window requires a date")
        if self.mode == WindowMode.RANGE and (self.start_date is None or self.end_date is None):
            raise ValueError("range window requires both start_date and end_date")
        return self


class FeedbackRequest(CamelModel):
    """Caller input for a feedback digest."""
    employee_ref: str = ""
    window_mode: Optional[str] = None
    date: Optional[datetime] = None
    start_date: Optional[Date] = None
    end_date: Optional[Date] = None

    @field_validator("date")
    @classmethod
    def drop_offset(cls, value: Optional[datetime]) -> Optional[datetime]:
        # Keep the caller's own calendar date; a trailing Z is already UTC
        if value is not None and value.tzinfo is not None:
            return value.replace(tzinfo=None)
        return value

    def window_spec(self) -> WindowSpec:
        return WindowSpec(
            mode=self.window_mode,
            date=self.date,
            start_date=self.start_date,
            end_date=self.end_date,
        )


class AggregateSummary(CamelModel):
    """Point aggregate for daily/monthly/specific windows."""
    total_feedbacks: int
    avg_understanding: Optional[float] = None
    avg_instructor: Optional[float] = None


class TimeSeries(CamelModel):
    """Per-bucket averages for range/full windows, index-aligned with labels."""
    labels: List[str] = Field(default_factory=list)
    understanding: List[float] = Field(default_factory=list)
    instructor: List[float] = Field(default_factory=list)


class PositiveFeedback(CamelModel):
    quote: str
    keywords: List[str] = Field(default_factory=list, max_length=3)


class ImprovementArea(CamelModel):
    theme: str
    suggestion: str


class SummaryResult(CamelModel):
    """Structured comment summary returned by the LLM."""
    positive_feedback: List[PositiveFeedback] = Field(default_factory=list, max_length=3)
    improvement_areas: List[ImprovementArea] = Field(default_factory=list, max_length=3)


class FeedbackDigest(CamelModel):
    """Response shape returned to callers."""
    positive_feedback: List[PositiveFeedback] = Field(default_factory=list)
    improvement_areas: List[ImprovementArea] = Field(default_factory=list)
    total_feedbacks: int = 0
    graph_data: Optional[AggregateSummary] = None
    graph_timeseries: Optional[TimeSeries] = None

    @classmethod
    def empty(cls) -> "FeedbackDigest":
        return cls()


class AttendanceRecord(BaseModel):
    """Attendance entry for one scheduled standup."""
    scheduled_at: datetime
    status: str
