from collections.abc import Mapping
from datetime import date
from typing import Any

import httpx

from ghheat.core.errors import ApiFailure
from ghheat.core.errors import ParseFailure
from ghheat.core.errors import RateLimitError
from ghheat.core.errors import TransportFailure


CONTRIBUTION_QUERY = """
query($username: String!, $from: DateTime!, $to: DateTime!) {
  user(login: $username) {
    contributionsCollection(from: $from, to: $to) {
      contributionCalendar {
        weeks {
          contributionDays {
            date
            contributionCount
          }
        }
      }
    }
  }
}
"""


def parse_calendar_date(raw_value: str) -> date:
    """Parse a `YYYY-MM-DD` calendar date, raising ParseFailure otherwise."""

    try:
        return date.fromisoformat(raw_value)
    except ValueError as exc:
        raise ParseFailure(f"Invalid date format: {raw_value}") from exc


def _check_status(response: httpx.Response) -> None:
    if response.is_success:
        return
    if response.status_code == 403:
        raise RateLimitError()
    raise ApiFailure(
        f"Failed to fetch data: {response.status_code}",
        status_code=response.status_code,
    )


def fetch_contribution_days(
    username: str,
    token: str,
    graphql_url: str,
    from_day: date,
    to_day: date,
    user_agent: str = "ghheat",
    timeout: float = 20.0,
) -> dict[date, int]:
    """Fetch contribution counts for a date range from GitHub GraphQL API."""

    variables = {
        "username": username,
        "from": f"{from_day.isoformat()}T00:00:00Z",
        "to": f"{to_day.isoformat()}T23:59:59Z",
    }
    headers = {
        "Authorization": f"Bearer {token}",
        "Content-Type": "application/json",
        "User-Agent": user_agent,
    }

    try:
        response = httpx.post(
            graphql_url,
            json={"query": CONTRIBUTION_QUERY, "variables": variables},
            headers=headers,
            timeout=timeout,
        )
    except httpx.HTTPError as exc:
        raise TransportFailure(f"Network error: {exc}") from exc
    _check_status(response)

    try:
        payload: Any = response.json()
    except ValueError as exc:
        raise ParseFailure("GitHub GraphQL response is not valid JSON") from exc
    if not isinstance(payload, Mapping):
        raise ParseFailure("GitHub GraphQL response is invalid")

    errors = payload.get("errors")
    if errors:
        messages = [
            str(error.get("message", error)) if isinstance(error, Mapping) else str(error)
            for error in errors
        ]
        raise ApiFailure(", ".join(messages), status_code=response.status_code)

    data = payload.get("data")
    if not isinstance(data, Mapping):
        raise ParseFailure("No data in response")

    user = data.get("user")
    if not isinstance(user, Mapping):
        raise ParseFailure("User not found")

    collection = user.get("contributionsCollection")
    if not isinstance(collection, Mapping):
        raise ParseFailure("GitHub contributionsCollection is missing")

    calendar = collection.get("contributionCalendar")
    if not isinstance(calendar, Mapping):
        raise ParseFailure("GitHub contributionCalendar is missing")

    weeks = calendar.get("weeks")
    if not isinstance(weeks, list):
        raise ParseFailure("GitHub contribution weeks are missing")

    contributions: dict[date, int] = {}
    for week in weeks:
        if not isinstance(week, Mapping):
            continue
        contribution_days = week.get("contributionDays")
        if not isinstance(contribution_days, list):
            continue
        for item in contribution_days:
            if not isinstance(item, Mapping):
                continue
            raw_date = item.get("date")
            raw_count = item.get("contributionCount")
            if isinstance(raw_date, str) and isinstance(raw_count, int):
                contributions[parse_calendar_date(raw_date)] = raw_count

    return contributions


def fetch_contributions_page(
    username: str,
    url_template: str,
    user_agent: str,
    timeout: float = 20.0,
) -> str:
    """Fetch the public contributions calendar markup for a user."""

    url = url_template.format(username=username)
    try:
        response = httpx.get(
            url,
            headers={"User-Agent": user_agent, "Accept": "text/html"},
            follow_redirects=True,
            timeout=timeout,
        )
    except httpx.HTTPError as exc:
        raise TransportFailure(f"Network error: {exc}") from exc
    _check_status(response)

    return response.text
