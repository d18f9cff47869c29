"""
Parse raw feedback sheet rows into typed FeedbackRecord objects.

The sheet has four columns: a form timestamp written as ``M/d/yyyy H:mm:ss``,
the understanding rating, the instructor rating and a free-text comment.
"""

from typing import Any, List, Optional, Sequence
from datetime import datetime
import logging
import math
import re

from src.models.schemas import FeedbackRecord


logger = logging.getLogger(__name__)

_DATE_RE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")
_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2}):(\d{2})$")


def parse_sheet_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse a ``M/d/yyyy H:mm:ss`` timestamp.

    Returns None for anything that is not exactly a date token and a time
    token, or that does not name a real calendar moment.
    """
    if not isinstance(value, str):
        return None

    parts = value.split()
    if len(parts) != 2:
        return None

    date_match = _DATE_RE.match(parts[0])
    time_match = _TIME_RE.match(parts[1])
    if not date_match or not time_match:
        return None

    month, day, year = (int(p) for p in date_match.groups())
    hour, minute, second = (int(p) for p in time_match.groups())
    try:
        return datetime(year, month, day, hour, minute, second)
    except ValueError:
        return None


def parse_rating(value: Any) -> float:
    """Coerce a rating cell to a number; anything unusable counts as 0."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        if "_" in value:
            return 0
        try:
            number = float(value.strip())
        except ValueError:
            return 0
    else:
        return 0

    if math.isnan(number) or math.isinf(number):
        return 0
    return number


def _cell(row: Sequence[Any], index: int) -> Any:
    return row[index] if len(row) > index else None


def parse_rows(raw_rows: Sequence[Sequence[Any]]) -> List[FeedbackRecord]:
    """
    Turn sheet rows (header first) into feedback records.

    Rows with a missing or malformed timestamp are dropped; bad rating cells
    become 0 and a missing comment becomes an empty string.
    """
    records = []
    dropped = 0

    for row in raw_rows[1:]:
        if not row:
            dropped += 1
            continue

        timestamp = parse_sheet_timestamp(_cell(row, 0))
        if timestamp is None:
            dropped += 1
            continue

        comment = _cell(row, 3)
        records.append(
            FeedbackRecord(
                timestamp=timestamp,
                understanding=parse_rating(_cell(row, 1)),
                instructor_rating=parse_rating(_cell(row, 2)),
                comment=str(comment).strip() if comment is not None else ""
            )
        )

    if dropped:
        logger.debug(f"Dropped {dropped} rows with missing or unparseable timestamps")

    return records
