import io
from datetime import date

from rich.console import Console

from ghheat.render.terminal import RenderMode
from ghheat.render.terminal import format_cell
from ghheat.render.terminal import month_header
from ghheat.render.terminal import render_heatmap
from ghheat.render.terminal import render_key
from ghheat.render.terminal import render_summary
from ghheat.render.terminal import select_render_mode
from ghheat.services.heatmap_service import build_grid
from ghheat.services.summary_service import summarize


CONTRIBUTIONS = {date(2026, 2, 18): 3, date(2026, 3, 5): 7}


def recording_console() -> Console:
    return Console(
        record=True,
        file=io.StringIO(),
        width=80,
        force_terminal=True,
        color_system="truecolor",
    )


def test_select_render_mode_precedence() -> None:
    assert select_render_mode(use_symbols=True, use_numbers=True) is RenderMode.NUMBERS
    assert select_render_mode(use_symbols=True, use_numbers=False) is RenderMode.SYMBOLS
    assert select_render_mode(use_symbols=False, use_numbers=False) is RenderMode.COLOR


def test_number_cells_are_right_justified() -> None:
    assert format_cell(3, RenderMode.NUMBERS).plain == " 3"
    assert format_cell(12, RenderMode.NUMBERS).plain == "12"


def test_symbol_cells_use_fixed_glyphs_and_colors() -> None:
    cells = [format_cell(count, RenderMode.SYMBOLS) for count in (0, 4, 8, 12, 16, 20)]

    assert [cell.plain for cell in cells] == ["  ", "..", "--", "~~", "**", "##"]
    assert [str(cell.style) for cell in cells] == [
        "", "bright_black", "blue", "green", "yellow", "red",
    ]
    assert format_cell(20, RenderMode.SYMBOLS, dark_mode=True).style == "red"


def test_color_cells_follow_dark_and_light_ramps() -> None:
    assert format_cell(0, RenderMode.COLOR, dark_mode=True).style == ""
    assert format_cell(1, RenderMode.COLOR, dark_mode=True).style == "on rgb(59,0,0)"
    assert format_cell(25, RenderMode.COLOR, dark_mode=True).style == "on rgb(255,0,0)"
    assert format_cell(5, RenderMode.COLOR).style == "on rgb(153,237,153)"
    assert format_cell(19, RenderMode.COLOR).style == "on rgb(44,160,44)"
    assert format_cell(7, RenderMode.COLOR).plain == "  "


def test_key_is_omitted_in_numbers_mode() -> None:
    assert render_key(RenderMode.NUMBERS, dark_mode=False) is None

    key = render_key(RenderMode.SYMBOLS, dark_mode=False)

    assert key is not None
    assert key.plain == "  Less   ..--~~**## More"


def test_month_header_starts_names_at_their_first_sunday_column() -> None:
    layout = build_grid(CONTRIBUTIONS)

    header = month_header(layout)

    # Mar 1 is the third week column: 4 label characters + 2 cells of 2.
    assert header == "    Feb Mar"
    assert header.index("Mar") == 4 + 2 * 2


def test_render_heatmap_numbers_mode_layout() -> None:
    console = recording_console()
    layout = build_grid(CONTRIBUTIONS)

    render_heatmap(console, layout, CONTRIBUTIONS, mode=RenderMode.NUMBERS)

    assert console.export_text().splitlines() == [
        "",
        "    Feb Mar",
        "=" * 20 + "  2026-02-15-2026-03-05",
        "     0 0 0",
        "Mon  0 0 0",
        "     0 0 0",
        "Wed  3 0 0",
        "     0 0 7",
        "Fri  0 0 0",
        "     0 0 0",
        "=" * 20,
        "",
    ]


def test_render_heatmap_color_mode_emits_truecolor_backgrounds() -> None:
    console = recording_console()
    layout = build_grid(CONTRIBUTIONS)

    render_heatmap(console, layout, CONTRIBUTIONS, mode=RenderMode.COLOR, dark_mode=True)

    styled = console.export_text(styles=True, clear=False)
    plain = console.export_text()
    assert "48;2;59;0;0" in styled
    assert "48;2;255;0;0" in styled
    assert plain.splitlines()[-1].startswith("  Less ")
    assert plain.splitlines()[-1].endswith(" More")


def test_wide_grid_is_not_wrapped() -> None:
    console = recording_console()
    contributions = {date(2025, 10, 19): 1, date(2026, 10, 17): 30}
    layout = build_grid(contributions)

    render_heatmap(console, layout, contributions, mode=RenderMode.SYMBOLS)

    lines = console.export_text().splitlines()
    assert len(lines) == 13
    assert lines[4] == "Mon " + "  " * len(layout.weeks)
    assert lines[9].endswith("##")


def test_render_summary_lines() -> None:
    console = recording_console()
    contributions = {
        date(2026, 2, 15): 0,
        date(2026, 2, 16): 1,
        date(2026, 2, 17): 4,
        date(2026, 2, 18): 8,
        date(2026, 2, 19): 12,
        date(2026, 2, 20): 0,
        date(2026, 2, 21): 1,
    }

    render_summary(console, "alice", summarize(contributions))

    assert console.export_text().splitlines() == [
        "",
        "User: alice",
        "Total Contributions: 26",
        "Active Days: 5",
        "Max Contributions in a Day: 12",
        "Average Contributions on Active Days: 5.20",
        "",
    ]


def test_render_heatmap_writes_one_line_per_row() -> None:
    output = io.StringIO()
    console = Console(file=output, width=80)
    layout = build_grid(CONTRIBUTIONS)

    render_heatmap(console, layout, CONTRIBUTIONS, mode=RenderMode.NUMBERS)

    lines = output.getvalue().split("\n")
    assert output.getvalue().count("\n") == 12
    assert lines[1] == "    Feb Mar"
    assert lines[6] == "Wed  3 0 0"
    assert lines[10] == "=" * 20
