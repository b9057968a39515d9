from collections.abc import Mapping
from datetime import date

from ghheat.schemas.heatmap import ContributionSummary


def summarize(contributions: Mapping[date, int]) -> ContributionSummary:
    """Compute totals over every fetched day, not only the rendered grid."""

    total = sum(contributions.values())
    active_days = sum(1 for count in contributions.values() if count > 0)
    peak = max(contributions.values(), default=0)
    average = total / active_days if active_days else 0.0

    return ContributionSummary(
        total=total,
        active_days=active_days,
        peak=peak,
        average=average,
    )
