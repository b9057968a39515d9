import logging
import random
from datetime import UTC
from datetime import date
from datetime import datetime
from datetime import timedelta

from ghheat.core.errors import GitHubFetchError
from ghheat.core.errors import RateLimitError
from ghheat.github_api import fetch_contribution_days
from ghheat.github_api import fetch_contributions_page
from ghheat.services.markup_patterns import extract_contributions
from ghheat.settings import Settings

logger = logging.getLogger(__name__)

SYNTHETIC_DAYS = 365
# contributionsCollection rejects ranges longer than one year.
MAX_GRAPHQL_SPAN_DAYS = 364


def utc_today() -> date:
    return datetime.now(UTC).date()


def _describe(exc: GitHubFetchError) -> str:
    if isinstance(exc, RateLimitError):
        return "rate limited"
    return str(exc) or exc.__class__.__name__


def fetch_from_graphql(
    username: str,
    days: int,
    token: str | None,
    settings: Settings,
    today: date,
) -> dict[date, int] | None:
    """Structured-query tier. Returns None when the tier cannot provide data."""

    if not token:
        logger.debug("No GitHub token configured, skipping GraphQL API")
        return None

    try:
        contributions = fetch_contribution_days(
            username=username,
            token=token,
            graphql_url=settings.github_graphql_url,
            from_day=today - timedelta(days=min(days, MAX_GRAPHQL_SPAN_DAYS)),
            to_day=today,
            user_agent=settings.user_agent,
            timeout=settings.request_timeout_seconds,
        )
    except GitHubFetchError as exc:
        logger.warning(
            "GraphQL API access failed (%s), falling back to public page",
            _describe(exc),
        )
        return None

    if not contributions:
        logger.warning("GraphQL API returned no contribution days, falling back")
        return None
    return contributions


def fetch_from_markup(
    username: str,
    settings: Settings,
) -> dict[date, int] | None:
    """Markup-scrape tier. Returns None when no known layout matched."""

    logger.info(
        "Fetching contributions from: %s",
        settings.github_contributions_url.format(username=username),
    )
    try:
        markup = fetch_contributions_page(
            username=username,
            url_template=settings.github_contributions_url,
            user_agent=settings.user_agent,
            timeout=settings.request_timeout_seconds,
        )
        pattern_name, contributions = extract_contributions(markup)
    except GitHubFetchError as exc:
        logger.warning("Public contributions page failed (%s)", _describe(exc))
        return None

    if pattern_name is None:
        return None
    logger.debug("Parsed %d days with pattern %s", len(contributions), pattern_name)
    return contributions


def generate_synthetic_contributions(
    today: date,
    rng: random.Random | None = None,
) -> dict[date, int]:
    """Simulated counts for the last year, lighter on weekends."""

    rng = rng or random.Random()
    contributions: dict[date, int] = {}
    current_day = today - timedelta(days=SYNTHETIC_DAYS)
    while current_day <= today:
        upper = 5 if current_day.weekday() >= 5 else 10
        contributions[current_day] = rng.randrange(upper)
        current_day += timedelta(days=1)
    return contributions


def fetch_contributions(
    username: str,
    days: int = 365,
    token: str | None = None,
    settings: Settings | None = None,
    today: date | None = None,
    rng: random.Random | None = None,
) -> dict[date, int]:
    """Fetch daily contribution counts, degrading through the available sources.

    Order: GraphQL API (needs a token), public contributions page,
    simulated data. Failures of the first two are logged, never raised.
    """

    settings = settings or Settings()
    today = today or utc_today()

    contributions = fetch_from_graphql(username, days, token, settings, today)
    if contributions:
        logger.info("Loaded %d days from GraphQL API", len(contributions))
        return contributions

    contributions = fetch_from_markup(username, settings)
    if contributions:
        logger.info("Loaded %d days from public contributions page", len(contributions))
        return contributions

    logger.warning(
        "Could not parse GitHub contribution data. Using simulated data."
    )
    return generate_synthetic_contributions(today, rng)
