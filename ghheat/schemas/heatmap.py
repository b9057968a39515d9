from datetime import date

from pydantic import BaseModel
from pydantic import Field


class DateRange(BaseModel):
    """Inclusive range of dates covered by the heatmap grid."""

    start: date
    end: date


class MonthLabel(BaseModel):
    """Month name anchored at a week column of the grid."""

    position: int = Field(ge=0)
    name: str


class HeatmapLayout(BaseModel):
    """Week-major grid of dates plus everything needed to draw its frame."""

    weeks: list[list[date]]
    date_range: DateRange
    month_labels: list[MonthLabel]
    final_position: int
    border_width: int


class ContributionSummary(BaseModel):
    """Aggregate statistics over all fetched contribution days."""

    total: int = 0
    active_days: int = 0
    peak: int = 0
    average: float = 0.0
