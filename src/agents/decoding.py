"""
Best-effort decoding of the JSON object embedded in an LLM reply.

LLM output is free-form text that is expected, but not guaranteed, to contain
a single JSON object. ``decode_summary`` never raises: it returns a
DecodeResult holding either the parsed SummaryResult or the reason it failed,
leaving the recovery policy to the caller.
"""

from typing import Any, List, Optional
from dataclasses import dataclass
import json

from src.models.schemas import ImprovementArea, PositiveFeedback, SummaryResult


MAX_ENTRIES = 3
MAX_KEYWORDS = 3


class DecodeError(ValueError):
    """The LLM reply did not contain a usable JSON object."""


@dataclass
class DecodeResult:
    value: Optional[SummaryResult] = None
    error: Optional[DecodeError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def extract_json_object(text: str) -> Any:
    """
    Decode the substring between the first '{' and the last '}'.

    Raises:
        DecodeError: If there are no braces or the substring is not valid JSON
    """
    if not text:
        raise DecodeError("empty response")

    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end < start:
        raise DecodeError("no JSON object found in response")

    try:
        return json.loads(text[start:end + 1])
    except json.JSONDecodeError as e:
        raise DecodeError(f"malformed JSON object: {e}") from e


def _strings(value: Any) -> List[str]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        return []
    return [str(item).strip() for item in value if isinstance(item, (str, int, float)) and str(item).strip()]


def _positive_entries(items: Any) -> List[PositiveFeedback]:
    entries = []
    if not isinstance(items, list):
        return entries

    for item in items:
        # Older prompts asked for bare quotes
        if isinstance(item, str) and item.strip():
            entries.append(PositiveFeedback(quote=item))
        elif isinstance(item, dict) and isinstance(item.get("quote"), str):
            entries.append(PositiveFeedback(
                quote=item["quote"],
                keywords=_strings(item.get("keywords"))[:MAX_KEYWORDS]
            ))
        if len(entries) == MAX_ENTRIES:
            break

    return entries


def _improvement_entries(items: Any) -> List[ImprovementArea]:
    entries = []
    if not isinstance(items, list):
        return entries

    for item in items:
        if isinstance(item, str) and item.strip():
            entries.append(ImprovementArea(theme=item, suggestion=""))
        elif isinstance(item, dict) and isinstance(item.get("theme"), str):
            suggestion = item.get("suggestion")
            entries.append(ImprovementArea(
                theme=item["theme"],
                suggestion=suggestion if isinstance(suggestion, str) else ""
            ))
        if len(entries) == MAX_ENTRIES:
            break

    return entries


def decode_summary(text: str) -> DecodeResult:
    """
    Parse a SummaryResult out of raw LLM text.

    Missing keys default to empty lists; entries with the wrong shape are
    skipped and each list is capped at three entries.
    """
    try:
        payload = extract_json_object(text)
    except DecodeError as e:
        return DecodeResult(error=e)

    if not isinstance(payload, dict):
        return DecodeResult(error=DecodeError(f"expected a JSON object, got {type(payload).__name__}"))

    return DecodeResult(value=SummaryResult(
        positive_feedback=_positive_entries(payload.get("positiveFeedback")),
        improvement_areas=_improvement_entries(payload.get("improvementAreas"))
    ))
