import logging

import sentry_sdk
from rich.console import Console
from rich.logging import RichHandler

from ghheat.settings import Settings


def configure_logging(app_settings: Settings) -> None:
    """Send `ghheat` log records to stderr so they never mix with the heatmap."""

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        show_time=False,
    )
    logger = logging.getLogger("ghheat")
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(app_settings.log_level)
    logger.propagate = False


def init_sentry(app_settings: Settings) -> None:
    """Initialize Sentry SDK when DSN is configured."""

    if not app_settings.sentry_dsn:
        return

    sentry_sdk.init(
        dsn=app_settings.sentry_dsn,
        environment=app_settings.environment,
        release=app_settings.release,
        traces_sample_rate=app_settings.sentry_traces_sample_rate,
        send_default_pii=False,
    )
