from collections.abc import Mapping
from datetime import date
from datetime import timedelta

from ghheat.schemas.heatmap import DateRange
from ghheat.schemas.heatmap import HeatmapLayout
from ghheat.schemas.heatmap import MonthLabel
from ghheat.services.contributions_service import utc_today

LABEL_COLUMN_WIDTH = 4
CELL_WIDTH = 2
SUNDAY = 6
SATURDAY = 5

MONTH_NAMES = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def contribution_level(count: int) -> int:
    """Map daily contribution count to a heatmap level in range 0..5."""

    if count <= 0:
        return 0
    if count < 5:
        return 1
    if count < 10:
        return 2
    if count < 15:
        return 3
    if count < 20:
        return 4
    return 5


def month_name(month: int) -> str:
    return MONTH_NAMES[month - 1]


def week_start(day: date) -> date:
    """Return the Sunday on or before `day`."""

    weekday = (day.weekday() + 1) % 7
    return day - timedelta(days=weekday)


def compute_date_range(
    contributions: Mapping[date, int],
    today: date | None = None,
) -> DateRange:
    if not contributions:
        today = today or utc_today()
        return DateRange(start=today, end=today)

    return DateRange(
        start=week_start(min(contributions)),
        end=max(contributions),
    )


def build_weeks(date_range: DateRange) -> list[list[date]]:
    """Split the range into Sunday..Saturday weeks, padding the last one."""

    weeks: list[list[date]] = []
    current_week: list[date] = []
    current_day = date_range.start

    while current_day <= date_range.end:
        current_week.append(current_day)
        if current_day.weekday() == SATURDAY:
            weeks.append(current_week)
            current_week = []
        current_day += timedelta(days=1)

    if current_week:
        while len(current_week) < 7:
            current_week.append(current_week[-1] + timedelta(days=1))
        weeks.append(current_week)

    return weeks


def compute_month_labels(date_range: DateRange) -> tuple[list[MonthLabel], int]:
    """Anchor each month name at the column of its first Sunday.

    Returns the labels and the number of Sundays walked. The month the range
    opens with is labelled at column 0 unless the next month starts less
    than two columns later, where the two names would overlap.
    """

    labels = [MonthLabel(position=0, name=month_name(date_range.start.month))]
    current_month = date_range.start.month
    position = 0
    current_day = date_range.start

    while current_day <= date_range.end:
        if current_day.weekday() == SUNDAY:
            if current_day.month != current_month:
                current_month = current_day.month
                if position - labels[-1].position < 2:
                    labels.pop()
                labels.append(MonthLabel(position=position, name=month_name(current_month)))
            position += 1
        current_day += timedelta(days=1)

    return labels, position


def build_grid(
    contributions: Mapping[date, int],
    today: date | None = None,
) -> HeatmapLayout:
    """Lay contribution dates out as week columns with month header positions."""

    date_range = compute_date_range(contributions, today)
    weeks = build_weeks(date_range)
    month_labels, final_position = compute_month_labels(date_range)

    grid_width = LABEL_COLUMN_WIDTH + CELL_WIDTH * len(weeks)
    header_width = LABEL_COLUMN_WIDTH + CELL_WIDTH * final_position + 10

    return HeatmapLayout(
        weeks=weeks,
        date_range=date_range,
        month_labels=month_labels,
        final_position=final_position,
        border_width=max(grid_width, header_width),
    )
