"""
Aggregate statistics and time series over feedback records.

Point windows get a single AggregateSummary. Range windows get a sparse
per-day series (only days that have feedback), full-history windows get a
dense 12-month series where empty months report 0.
"""

from typing import Dict, List, Sequence
from collections import defaultdict
from datetime import date

from src.models.schemas import AggregateSummary, FeedbackRecord, TimeSeries


# Fixed English labels so output does not depend on the process locale
MONTH_LABELS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"
)


def round2(value: float) -> float:
    return round(value, 2)


def _averages(records: Sequence[FeedbackRecord]) -> tuple:
    count = len(records)
    understanding = sum(r.understanding for r in records) / count
    instructor = sum(r.instructor_rating for r in records) / count
    return round2(understanding), round2(instructor)


def summarize_records(records: Sequence[FeedbackRecord]) -> AggregateSummary:
    """
    Count records and average both ratings.

    Averages are None when there are no records.
    """
    if not records:
        return AggregateSummary(total_feedbacks=0)

    avg_understanding, avg_instructor = _averages(records)
    return AggregateSummary(
        total_feedbacks=len(records),
        avg_understanding=avg_understanding,
        avg_instructor=avg_instructor
    )


def day_label(day: date) -> str:
    """Short label such as 'Jun 5'."""
    return f"{MONTH_LABELS[day.month - 1]} {day.day}"


def series_by_day(records: Sequence[FeedbackRecord]) -> TimeSeries:
    """
    Average ratings per calendar day, ascending.

    Days without records are omitted rather than zero-filled.
    """
    buckets: Dict[date, List[FeedbackRecord]] = defaultdict(list)
    for record in records:
        buckets[record.timestamp.date()].append(record)

    series = TimeSeries()
    for day in sorted(buckets):
        avg_understanding, avg_instructor = _averages(buckets[day])
        series.labels.append(day_label(day))
        series.understanding.append(avg_understanding)
        series.instructor.append(avg_instructor)

    return series


def series_by_month(records: Sequence[FeedbackRecord]) -> TimeSeries:
    """
    Average ratings per month of year across all years.

    Always returns 12 buckets (Jan..Dec); months with no records report 0.
    """
    buckets: List[List[FeedbackRecord]] = [[] for _ in MONTH_LABELS]
    for record in records:
        buckets[record.timestamp.month - 1].append(record)

    series = TimeSeries(labels=list(MONTH_LABELS))
    for bucket in buckets:
        if bucket:
            avg_understanding, avg_instructor = _averages(bucket)
        else:
            avg_understanding, avg_instructor = 0, 0
        series.understanding.append(avg_understanding)
        series.instructor.append(avg_instructor)

    return series
