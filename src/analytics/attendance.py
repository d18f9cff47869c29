from typing import Sequence

from src.models.schemas import AttendanceRecord


PRESENT = "Present"


def attendance_streak(records: Sequence[AttendanceRecord]) -> int:
    """
    Count consecutive days of standup attendance.

    Args:
        records: Attendance entries ordered newest first

    Returns:
        Number of back-to-back "Present" days ending at the most recent entry.
        A non-present entry or a gap other than exactly one day ends the streak.
    """
    streak = 0
    for i, record in enumerate(records):
        if record.status != PRESENT:
            break

        if i > 0:
            newer = records[i - 1].scheduled_at.date()
            gap = (newer - record.scheduled_at.date()).days
            if gap != 1:
                break

        streak += 1

    return streak
