import re
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date

from ghheat.github_api import parse_calendar_date


# GitHub only exposes a 0..4 level in newer markup, so levels are mapped
# to approximate counts.
LEVEL_TO_COUNT: Mapping[int, int] = {0: 0, 1: 1, 2: 4, 3: 8, 4: 12}

_DATE = r'data-date="([0-9]{4}-[0-9]{2}-[0-9]{2})"'


def level_to_count(level: int) -> int:
    """Convert a calendar level to an approximate count; unknown levels pass through."""

    return LEVEL_TO_COUNT.get(level, level)


@dataclass(frozen=True)
class MarkupPattern:
    """One known layout of the contributions calendar markup.

    The regex must capture the date first and the value second.
    """

    name: str
    regex: re.Pattern[str]
    value_is_level: bool = True

    def extract(self, markup: str) -> dict[date, int]:
        contributions: dict[date, int] = {}
        for match in self.regex.finditer(markup):
            day = parse_calendar_date(match.group(1))
            value = int(match.group(2))
            contributions[day] = level_to_count(value) if self.value_is_level else value
        return contributions


MARKUP_PATTERNS: tuple[MarkupPattern, ...] = (
    MarkupPattern(
        name="level-attributes",
        regex=re.compile(_DATE + r'[^>]*data-level="([0-9]+)"[^>]*>'),
    ),
    MarkupPattern(
        name="count-attributes",
        regex=re.compile(r"<[a-zA-Z]+[^>]*" + _DATE + r'[^>]*data-count="([0-9]+)"[^>]*>'),
        value_is_level=False,
    ),
    MarkupPattern(
        name="calendar-table-cells",
        regex=re.compile(
            r'<td(?=[^>]*class="[^"]*\bContributionCalendar-day\b)'
            r"(?=[^>]*" + _DATE + r")"
            r'(?=[^>]*data-level="([0-9]+)")[^>]*>'
        ),
    ),
)


def extract_contributions(
    markup: str,
    patterns: tuple[MarkupPattern, ...] = MARKUP_PATTERNS,
) -> tuple[str | None, dict[date, int]]:
    """Try each pattern in order and return the first one with any matches."""

    for pattern in patterns:
        contributions = pattern.extract(markup)
        if contributions:
            return pattern.name, contributions
    return None, {}
