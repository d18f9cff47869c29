"""Unit tests for data schemas."""
import pytest
from datetime import date, datetime
from pydantic import ValidationError
from src.models.schemas import (
    FeedbackDigest, FeedbackRecord, FeedbackRequest, PositiveFeedback,
    SummaryResult, TimeSeries, WindowMode
)


class TestFeedbackRecord:
    """Test FeedbackRecord schema."""

    def test_feedback_record_defaults(self):
        """Test ratings and comment have neutral defaults."""
        record = FeedbackRecord(timestamp=datetime(2024, 6, 1, 9))

        assert record.understanding == 0
        assert record.instructor_rating == 0
        assert record.comment == ""

    def test_feedback_record_is_immutable(self):
        """Test records cannot be modified after construction."""
        record = FeedbackRecord(timestamp=datetime(2024, 6, 1, 9), comment="Great")

        with pytest.raises(ValidationError):
            record.comment = "Changed"


class TestFeedbackRequest:
    """Test FeedbackRequest schema."""

    def test_camel_case_keys(self):
        """Test requests accept the camelCase wire keys."""
        request = FeedbackRequest.model_validate({
            "employeeRef": "emp-1",
            "windowMode": "range",
            "startDate": "2024-06-01",
            "endDate": "2024-06-07",
        })

        spec = request.window_spec()
        assert spec.mode == WindowMode.RANGE
        assert spec.start_date == date(2024, 6, 1)
        assert spec.end_date == date(2024, 6, 7)

    def test_offset_date_keeps_caller_calendar_day(self):
        """Test dates with an offset keep their own date and time."""
        request = FeedbackRequest.model_validate({
            "employeeRef": "emp-1",
            "windowMode": "monthly",
            "date": "2024-06-01T02:00:00+05:30",
        })

        assert request.date == datetime(2024, 6, 1, 2, 0)
        assert request.date.tzinfo is None

    def test_utc_marker_is_read_as_utc(self):
        """Test a trailing Z date reads as the same naive UTC time."""
        request = FeedbackRequest.model_validate({"windowMode": "monthly", "date": "2024-01-01T00:00:00.000Z"})

        assert request.date == datetime(2024, 1, 1)


class TestFeedbackDigest:
    """Test FeedbackDigest schema."""

    def test_empty_digest_shape(self):
        """Test the empty digest serializes with every key present."""
        payload = FeedbackDigest.empty().model_dump(by_alias=True)

        assert payload == {
            "positiveFeedback": [],
            "improvementAreas": [],
            "totalFeedbacks": 0,
            "graphData": None,
            "graphTimeseries": None,
        }

    def test_timeseries_serialization(self):
        """Test time series keep their plain keys."""
        digest = FeedbackDigest(
            total_feedbacks=1,
            graph_timeseries=TimeSeries(labels=["Jun 1"], understanding=[4.0], instructor=[5.0])
        )

        assert digest.model_dump(by_alias=True)["graphTimeseries"] == {
            "labels": ["Jun 1"], "understanding": [4.0], "instructor": [5.0]
        }


class TestSummaryResult:
    """Test SummaryResult schema."""

    def test_at_most_three_entries(self):
        """Test more than three positive entries are rejected."""
        with pytest.raises(ValidationError):
            SummaryResult(positive_feedback=[PositiveFeedback(quote=str(i)) for i in range(4)])

    def test_keywords_limit(self):
        """Test more than three keywords are rejected."""
        with pytest.raises(ValidationError):
            PositiveFeedback(quote="Great", keywords=["a", "b", "c", "d"])
