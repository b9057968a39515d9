from collections.abc import Mapping
from datetime import date
from enum import Enum

from rich.console import Console
from rich.segment import Segments
from rich.text import Text

from ghheat.schemas.heatmap import ContributionSummary
from ghheat.schemas.heatmap import HeatmapLayout
from ghheat.services.heatmap_service import CELL_WIDTH
from ghheat.services.heatmap_service import LABEL_COLUMN_WIDTH
from ghheat.services.heatmap_service import contribution_level


class RenderMode(str, Enum):
    COLOR = "color"
    SYMBOLS = "symbols"
    NUMBERS = "numbers"


SYMBOLS = ("  ", "..", "--", "~~", "**", "##")
SYMBOL_STYLES = ("", "bright_black", "blue", "green", "yellow", "red")

# Background ramps for levels 1..5; level 0 has no background.
DARK_RAMP = ((59, 0, 0), (102, 0, 0), (157, 0, 0), (204, 0, 0), (255, 0, 0))
LIGHT_RAMP = (
    (220, 247, 220),
    (153, 237, 153),
    (85, 219, 85),
    (44, 160, 44),
    (0, 109, 0),
)

KEY_COUNTS = (0, 4, 8, 12, 16, 20)
WEEKDAY_LABELS = {1: "Mon ", 3: "Wed ", 5: "Fri "}


def select_render_mode(use_symbols: bool, use_numbers: bool) -> RenderMode:
    """Numbers win over symbols, symbols win over colour blocks."""

    if use_numbers:
        return RenderMode.NUMBERS
    if use_symbols:
        return RenderMode.SYMBOLS
    return RenderMode.COLOR


def background_style(level: int, dark_mode: bool) -> str:
    if level <= 0:
        return ""
    ramp = DARK_RAMP if dark_mode else LIGHT_RAMP
    red, green, blue = ramp[min(level, len(ramp)) - 1]
    return f"on rgb({red},{green},{blue})"


def format_cell(count: int, mode: RenderMode, dark_mode: bool = False) -> Text:
    """Render one day as a two character cell."""

    if mode is RenderMode.NUMBERS:
        return Text(f"{count:>2}")

    level = contribution_level(count)
    if mode is RenderMode.SYMBOLS:
        return Text(SYMBOLS[level], style=SYMBOL_STYLES[level])
    return Text(" " * CELL_WIDTH, style=background_style(level, dark_mode))


def _print(console: Console, line: Text | str = "") -> None:
    # Pre-rendered segments skip Text wrapping, which trims trailing blank
    # cells past the console width.
    if isinstance(line, str):
        line = Text(line)
    console.print(Segments(line.render(console, end="\n")), soft_wrap=True)


def month_header(layout: HeatmapLayout) -> str:
    line = " " * LABEL_COLUMN_WIDTH
    for label in layout.month_labels:
        column = LABEL_COLUMN_WIDTH + CELL_WIDTH * label.position
        gap = 1 if len(line) > LABEL_COLUMN_WIDTH else 0
        if column < len(line) + gap:
            continue
        line = line.ljust(column) + label.name
    return line


def border(layout: HeatmapLayout, message: str = "") -> str:
    return "=" * layout.border_width + message


def render_grid_rows(
    layout: HeatmapLayout,
    contributions: Mapping[date, int],
    mode: RenderMode,
    dark_mode: bool,
) -> list[Text]:
    """Transpose week columns into one row per weekday, Sunday first."""

    rows: list[Text] = []
    for day_index in range(7):
        row = Text(WEEKDAY_LABELS.get(day_index, " " * LABEL_COLUMN_WIDTH))
        for week in layout.weeks:
            if day_index < len(week):
                count = contributions.get(week[day_index], 0)
                row.append_text(format_cell(count, mode, dark_mode))
        rows.append(row)
    return rows


def render_key(mode: RenderMode, dark_mode: bool) -> Text | None:
    if mode is RenderMode.NUMBERS:
        return None

    key = Text("  Less ")
    for count in KEY_COUNTS:
        key.append_text(format_cell(count, mode, dark_mode))
    key.append(" More")
    return key


def render_heatmap(
    console: Console,
    layout: HeatmapLayout,
    contributions: Mapping[date, int],
    mode: RenderMode = RenderMode.COLOR,
    dark_mode: bool = False,
) -> None:
    """Print month header, framed grid and key to the console."""

    start = layout.date_range.start.isoformat()
    end = layout.date_range.end.isoformat()

    _print(console)
    _print(console, month_header(layout))
    _print(console, border(layout, f"  {start}-{end}"))
    for row in render_grid_rows(layout, contributions, mode, dark_mode):
        _print(console, row)
    _print(console, border(layout))
    _print(console)

    key = render_key(mode, dark_mode)
    if key is not None:
        _print(console, key)


def render_summary(
    console: Console,
    username: str,
    summary: ContributionSummary,
) -> None:
    _print(console)
    _print(console, Text.assemble("User: ", (username, "bold bright_white")))
    _print(console, Text.assemble("Total Contributions: ", (str(summary.total), "green")))
    _print(console, Text.assemble("Active Days: ", (str(summary.active_days), "green")))
    _print(
        console,
        Text.assemble("Max Contributions in a Day: ", (str(summary.peak), "green")),
    )
    _print(console, f"Average Contributions on Active Days: {summary.average:.2f}")
    _print(console)
