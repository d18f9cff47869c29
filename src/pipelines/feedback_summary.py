"""
Feedback summary pipeline for a single employee.
Resolves the employee's feedback sheet, selects rows for a time window (daily,
monthly, specific day, date range or full history), aggregates ratings and
summarizes the comments with an LLM.
"""

from typing import Any, Dict, Optional, Protocol, Tuple, Union, List
from datetime import datetime
import asyncio
import argparse
import json
import logging
import sys

from pydantic import ValidationError

from src.config.settings import Settings
from src.data_access.sql_client import SQLClient
from src.data_access.sheets_client import SheetsClient, extract_spreadsheet_id
from src.agents.llm_agent import ChatAgent, FeedbackSummarizer
from src.analytics.rows import parse_rows
from src.analytics.windows import filter_records
from src.analytics.aggregation import summarize_records, series_by_day, series_by_month
from src.analytics.comments import select_comments
from src.analytics.attendance import attendance_streak
from src.models.errors import FeedbackServiceError, InternalError, InvalidArgumentError, NotFoundError
from src.models.schemas import FeedbackDigest, FeedbackRequest, WindowMode, WindowSpec, POINT_MODES


logger = logging.getLogger(__name__)


class EmployeeDirectory(Protocol):
    def get_feedback_sheet_url(self, employee_id: str) -> Optional[str]: ...


class RowSource(Protocol):
    def get_rows(self, spreadsheet_id: str, cell_range: Optional[str] = None) -> List[List[Any]]: ...


class FeedbackPipeline:
    """Pipeline producing a feedback digest for one employee and one time window."""

    def __init__(
        self,
        employee_directory: EmployeeDirectory,
        sheets_client: RowSource,
        summarizer: FeedbackSummarizer,
        sheet_range: Optional[str] = None
    ):
        """
        Initialize the feedback pipeline.

        Args:
            employee_directory: Looks up the feedback sheet URL for an employee
            sheets_client: Fetches raw rows from a spreadsheet
            summarizer: Summarizes selected comments
            sheet_range: A1 range to read; None uses the sheets client default
        """
        self.employee_directory = employee_directory
        self.sheets_client = sheets_client
        self.summarizer = summarizer
        self.sheet_range = sheet_range

    async def run(
        self,
        request: Union[FeedbackRequest, Dict[str, Any]],
        now: Optional[datetime] = None
    ) -> FeedbackDigest:
        """
        Execute the feedback summary pipeline.

        Args:
            request: FeedbackRequest or its camelCase dict form
            now: Reference moment for daily/monthly windows (default: local now)

        Returns:
            FeedbackDigest; the empty digest when the sheet or window has no feedback

        Raises:
            InvalidArgumentError: Missing employee reference or invalid window
            NotFoundError: Employee or feedback sheet not found
            InternalError: Any other failure (details are logged)
        """
        request, spec = self._validate(request)
        now = now or datetime.now()

        logger.info(f"Building {spec.mode.value} feedback digest for employee {request.employee_ref}")

        try:
            return await self._run(request, spec, now)
        except FeedbackServiceError:
            raise
        except Exception as e:
            logger.exception(f"Error in feedback summary pipeline for employee {request.employee_ref}")
            raise InternalError() from e

    def _validate(self, request: Union[FeedbackRequest, Dict[str, Any]]) -> Tuple[FeedbackRequest, WindowSpec]:
        try:
            if not isinstance(request, FeedbackRequest):
                request = FeedbackRequest.model_validate(request)
            if not request.employee_ref.strip():
                raise InvalidArgumentError("An employee reference is required.")
            return request, request.window_spec()
        except ValidationError as e:
            raise InvalidArgumentError(f"Invalid feedback request: {e.errors()[0]['msg']}") from e

    async def _run(self, request: FeedbackRequest, spec: WindowSpec, now: datetime) -> FeedbackDigest:
        sheet_url = await asyncio.to_thread(
            self.employee_directory.get_feedback_sheet_url, request.employee_ref
        )
        if not sheet_url:
            raise NotFoundError("Feedback sheet URL not configured for this employee.")
        spreadsheet_id = extract_spreadsheet_id(sheet_url)

        rows = await asyncio.to_thread(self.sheets_client.get_rows, spreadsheet_id, self.sheet_range)
        if not rows or len(rows) < 2:
            logger.info("Feedback sheet has no data rows")
            return FeedbackDigest.empty()

        records = parse_rows(rows)
        matched = filter_records(records, spec, now)
        logger.info(f"Parsed {len(records)} of {len(rows) - 1} rows, {len(matched)} in window")

        if not matched:
            return FeedbackDigest.empty()

        graph_data = None
        graph_timeseries = None
        if spec.mode in POINT_MODES:
            graph_data = summarize_records(matched)
        elif spec.mode == WindowMode.RANGE:
            graph_timeseries = series_by_day(matched)
        else:
            graph_timeseries = series_by_month(matched)

        comments = select_comments(matched)
        summary = await self.summarizer.summarize(comments)

        return FeedbackDigest(
            positive_feedback=summary.positive_feedback,
            improvement_areas=summary.improvement_areas,
            total_feedbacks=len(matched),
            graph_data=graph_data,
            graph_timeseries=graph_timeseries
        )


def build_pipeline(config: Settings, sql_client: Optional[SQLClient] = None) -> FeedbackPipeline:
    """Wire the production clients into a FeedbackPipeline."""
    return FeedbackPipeline(
        employee_directory=sql_client or SQLClient(config),
        sheets_client=SheetsClient(config),
        summarizer=FeedbackSummarizer(ChatAgent(config)),
        sheet_range=config.feedback_sheet_range
    )


def main():
    """Main entry point for producing a feedback digest from the command line."""
    parser = argparse.ArgumentParser(
        description='Summarize standup feedback for an employee over a time window.'
    )
    parser.add_argument(
        '--employee-id',
        required=True,
        help='Employee identifier in the employee directory'
    )
    parser.add_argument(
        '--mode',
        choices=[mode.value for mode in WindowMode],
        default=WindowMode.MONTHLY.value,
        help='Time window to summarize'
    )
    parser.add_argument(
        '--date',
        type=str,
        help='ISO-8601 date for monthly or specific windows (e.g. 2024-06-01T00:00:00Z)'
    )
    parser.add_argument(
        '--start-date',
        type=str,
        help='Start date for range windows in YYYY-MM-DD format'
    )
    parser.add_argument(
        '--end-date',
        type=str,
        help='End date for range windows in YYYY-MM-DD format'
    )
    parser.add_argument(
        '--attendance-streak',
        action='store_true',
        help='Also print the employee\'s current attendance streak'
    )

    args = parser.parse_args()

    if args.mode == WindowMode.RANGE.value and not (args.start_date and args.end_date):
        parser.error("--mode range requires both --start-date and --end-date")

    # Load configuration
    config = Settings()

    # Configure logging
    logging.basicConfig(
        level=config.log_level.upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("googleapiclient.discovery_cache").setLevel(logging.WARNING)

    request = {
        "employeeRef": args.employee_id,
        "windowMode": args.mode,
        "date": args.date,
        "startDate": args.start_date,
        "endDate": args.end_date,
    }

    sql_client = SQLClient(config)
    try:
        pipeline = build_pipeline(config, sql_client=sql_client)
        digest = asyncio.run(pipeline.run(request))

        # Print results
        print(json.dumps(digest.model_dump(by_alias=True), indent=2))

        if args.attendance_streak:
            streak = attendance_streak(sql_client.get_attendance_records(args.employee_id))
            print(f"Attendance streak: {streak} day(s)")

    except FeedbackServiceError as e:
        print(f"Error [{e.code}]: {e.message}", file=sys.stderr)
        sys.exit(1)

    finally:
        sql_client.close()


if __name__ == "__main__":
    main()
