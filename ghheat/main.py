import logging
from datetime import date
from typing import Annotated

import sentry_sdk
import typer
from pydantic import ValidationError
from rich.console import Console

from ghheat.core.observability import configure_logging
from ghheat.core.observability import init_sentry
from ghheat.render.terminal import render_heatmap
from ghheat.render.terminal import render_summary
from ghheat.render.terminal import select_render_mode
from ghheat.services.contributions_service import fetch_contributions
from ghheat.services.heatmap_service import build_grid
from ghheat.services.summary_service import summarize
from ghheat.settings import Settings

logger = logging.getLogger(__name__)


def run(
    username: str,
    days: int = 365,
    dark_mode: bool = False,
    use_symbols: bool = False,
    use_numbers: bool = False,
    show_totals: bool = False,
    token: str | None = None,
    settings: Settings | None = None,
    console: Console | None = None,
    today: date | None = None,
) -> None:
    """Fetch contributions for `username` and print the heatmap."""

    console = console or Console(highlight=False)
    contributions = fetch_contributions(
        username=username,
        days=days,
        token=token,
        settings=settings,
        today=today,
    )
    layout = build_grid(contributions, today=today)

    if show_totals:
        render_summary(console, username, summarize(contributions))

    render_heatmap(
        console,
        layout,
        contributions,
        mode=select_render_mode(use_symbols, use_numbers),
        dark_mode=dark_mode,
    )


def create_app() -> typer.Typer:
    """Create and configure the command line application."""

    app = typer.Typer(add_completion=False)

    @app.command()
    def heatmap(
        username: Annotated[str, typer.Argument(help="GitHub username to generate heatmap for")],
        days: Annotated[
            int,
            typer.Option("--days", "-d", min=1, help="Number of days to include in the heatmap"),
        ] = 365,
        dark_mode: Annotated[
            bool,
            typer.Option("--dark-mode", "-D", help="Use a dark color scheme (red gradient)"),
        ] = False,
        symbols: Annotated[
            bool,
            typer.Option("--symbols", "-s", help="Use symbols instead of colors"),
        ] = False,
        numbers: Annotated[
            bool,
            typer.Option("--numbers", "-n", help="Show numbers instead of colors or symbols"),
        ] = False,
        totals: Annotated[
            bool,
            typer.Option("--totals", "-t", help="Show total contribution counts"),
        ] = False,
    ) -> None:
        """GitHub contribution heatmap in the terminal."""

        try:
            settings = Settings()
        except ValidationError as exc:
            Console(stderr=True).print(f"Error: {exc}", style="red", markup=False)
            raise typer.Exit(code=1) from exc

        configure_logging(settings)
        init_sentry(settings)

        try:
            run(
                username=username,
                days=days,
                dark_mode=dark_mode,
                use_symbols=symbols,
                use_numbers=numbers,
                show_totals=totals,
                token=settings.github_token,
                settings=settings,
            )
        except Exception as exc:
            logger.debug("Heatmap generation failed", exc_info=True)
            sentry_sdk.capture_exception(exc)
            Console(stderr=True).print(f"Error: {exc}", style="red", markup=False)
            raise typer.Exit(code=1) from exc

    return app


app = create_app()


if __name__ == "__main__":
    app()
