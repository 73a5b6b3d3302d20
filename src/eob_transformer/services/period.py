"""
Period Validation.

Start/end consistency for billable periods and sub-periods such as the
hospice stay or a DME line's expense dates.
"""

from datetime import date
from typing import Optional

from eob_transformer.schemas.eob import Period
from eob_transformer.utils.errors import InvalidPeriodError


def validate_period_dates(
    start: Optional[date],
    end: Optional[date],
    field: Optional[str] = None,
) -> None:
    """
    Ensure a period's start is not after its end.

    Open bounds are allowed; the check only applies when both are present.

    Raises:
        InvalidPeriodError: If ``start`` is after ``end``
    """
    if start is not None and end is not None and start > end:
        raise InvalidPeriodError(
            f"Period start {start.isoformat()} is after end {end.isoformat()}",
            field=field,
        )


def build_period(
    start: Optional[date],
    end: Optional[date],
    field: Optional[str] = None,
) -> Period:
    """Validate and build a Period from optional bounds."""
    validate_period_dates(start, end, field)
    return Period(start=start, end=end)
