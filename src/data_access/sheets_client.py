"""
Read-only Google Sheets client for employee feedback sheets.
"""

import re
import logging
from typing import Any, List, Optional

import google.auth
from google.oauth2 import service_account
from googleapiclient.discovery import build

from src.config.settings import Settings
from src.models.errors import InvalidArgumentError


logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets.readonly"]

_SPREADSHEET_ID_RE = re.compile(r"/d/([a-zA-Z0-9-_]+)")


def extract_spreadsheet_id(sheet_url: str) -> str:
    """
    Pull the spreadsheet id out of a Google Sheets URL.

    Raises:
        InvalidArgumentError: If the URL has no /d/<id> segment
    """
    match = _SPREADSHEET_ID_RE.search(sheet_url or "")
    if not match:
        raise InvalidArgumentError("Invalid Google Sheet URL format.")
    return match.group(1)


class SheetsClient:
    """Google Sheets v4 client."""

    def __init__(self, config: Settings):
        self.config = config
        self.service = None

    def _credentials(self):
        if self.config.google_service_account_file:
            return service_account.Credentials.from_service_account_file(
                self.config.google_service_account_file,
                scopes=SCOPES
            )
        credentials, _ = google.auth.default(scopes=SCOPES)
        return credentials

    def connect(self) -> None:
        """Build the Sheets service with read-only credentials."""
        self.service = build(
            "sheets", "v4",
            credentials=self._credentials(),
            cache_discovery=False
        )

    def get_rows(self, spreadsheet_id: str, cell_range: Optional[str] = None) -> List[List[Any]]:
        """
        Fetch the values of a fixed range in one request.

        Args:
            spreadsheet_id: Id of the spreadsheet
            cell_range: A1 range, defaults to the configured feedback range

        Returns:
            Rows as lists of cell values (trailing empty cells are omitted by the API)
        """
        if not self.service:
            self.connect()

        cell_range = cell_range or self.config.feedback_sheet_range
        logger.info(f"Fetching range {cell_range} from spreadsheet {spreadsheet_id}")

        response = self.service.spreadsheets().values().get(
            spreadsheetId=spreadsheet_id,
            range=cell_range
        ).execute()

        return response.get("values", [])
