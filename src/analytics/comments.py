from typing import List, Sequence

from src.models.schemas import FeedbackRecord


# Placeholder answers people type when they have nothing to say
COMMENT_STOPLIST = frozenset({"na", "n/a", "none", "ntg", "nil", ""})


def is_meaningful_comment(comment: str) -> bool:
    return comment.strip().lower() not in COMMENT_STOPLIST


def select_comments(records: Sequence[FeedbackRecord]) -> List[str]:
    """Comments worth summarizing, in record order, without deduplication."""
    return [
        record.comment.strip()
        for record in records
        if is_meaningful_comment(record.comment)
    ]
