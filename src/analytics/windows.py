"""
Time-window selection over feedback records.
"""

from typing import Callable, List, Sequence
from datetime import datetime, time

from src.models.errors import InvalidArgumentError
from src.models.schemas import FeedbackRecord, WindowMode, WindowSpec


def same_day(a: datetime, b: datetime) -> bool:
    return a.date() == b.date()


def same_month(a: datetime, b: datetime) -> bool:
    return a.year == b.year and a.month == b.month


def window_predicate(spec: WindowSpec, reference_now: datetime) -> Callable[[datetime], bool]:
    """
    Build the timestamp predicate for a window.

    Args:
        spec: Window to select
        reference_now: The caller's "now", used by daily and default monthly windows

    Returns:
        A function returning True for timestamps inside the window
    """
    if spec.mode == WindowMode.DAILY:
        return lambda ts: same_day(ts, reference_now)

    if spec.mode == WindowMode.MONTHLY:
        reference = spec.date or reference_now
        return lambda ts: same_month(ts, reference)

    if spec.mode == WindowMode.SPECIFIC:
        return lambda ts: same_day(ts, spec.date)

    if spec.mode == WindowMode.RANGE:
        lo = datetime.combine(spec.start_date, time.min)
        hi = datetime.combine(spec.end_date, time.max)
        return lambda ts: lo <= ts <= hi

    if spec.mode == WindowMode.FULL:
        return lambda ts: True

    raise InvalidArgumentError(f"Unsupported window mode: {spec.mode!r}")


def filter_records(
    records: Sequence[FeedbackRecord],
    spec: WindowSpec,
    reference_now: datetime
) -> List[FeedbackRecord]:
    """Keep the records whose timestamp falls inside the window, in input order."""
    predicate = window_predicate(spec, reference_now)
    return [record for record in records if predicate(record.timestamp)]
