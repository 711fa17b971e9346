import logging
from typing import Any, Dict, List, Protocol

from googleapiclient.discovery import build

from constants.inventory import SPREADSHEET_MIME_TYPE
from utils.credentials import GoogleCredentialsConfig, get_credentials

logger = logging.getLogger(__name__)


class SpreadsheetGateway(Protocol):
    """The two read-only calls the inventory reader needs from Google."""

    def find_spreadsheet_by_name(self, name: str) -> List[Dict[str, str]]:
        ...

    def get_range(self, spreadsheet_id: str, range_name: str) -> List[List[Any]]:
        ...


def quote_worksheet_range(worksheet_name: str) -> str:
    """Whole-sheet A1 reference, e.g. 'Stock Summary'."""
    return "'" + worksheet_name.replace("'", "''") + "'"


def _escape_drive_query_value(value: str) -> str:
    return value.replace("\\", "\\\\").replace("'", "\\'")


class GoogleSpreadsheetGateway:
    """Sheets v4 and Drive v3 access using service account credentials."""

    def __init__(self, config: GoogleCredentialsConfig):
        self._config = config
        self._credentials = None
        self._sheets_service = None
        self._drive_service = None

    @property
    def credentials(self):
        if self._credentials is None:
            self._credentials = get_credentials(self._config)
        return self._credentials

    @property
    def sheets_service(self):
        """Lazy-load the Google Sheets service"""
        if self._sheets_service is None:
            self._sheets_service = build(
                "sheets", "v4", credentials=self.credentials, cache_discovery=False
            )
        return self._sheets_service

    @property
    def drive_service(self):
        """Lazy-load the Google Drive service"""
        if self._drive_service is None:
            self._drive_service = build(
                "drive", "v3", credentials=self.credentials, cache_discovery=False
            )
        return self._drive_service

    def find_spreadsheet_by_name(self, name: str) -> List[Dict[str, str]]:
        """Search the Drive file index for spreadsheets with exactly this name.

        Results are ordered most recently modified first.
        """
        query = (
            f"name='{_escape_drive_query_value(name)}' "
            f"and mimeType='{SPREADSHEET_MIME_TYPE}' "
            f"and trashed=false"
        )
        logger.info(f"Searching Drive for spreadsheet '{name}'")
        results = (
            self.drive_service.files()
            .list(q=query, fields="files(id, name)", orderBy="modifiedTime desc")
            .execute()
        )
        return results.get("files", [])

    def get_range(self, spreadsheet_id: str, range_name: str) -> List[List[Any]]:
        """Gets all values in a range of the given spreadsheet."""
        result = (
            self.sheets_service.spreadsheets()
            .values()
            .get(spreadsheetId=spreadsheet_id, range=range_name)
            .execute()
        )
        values = result.get("values", [])
        if not values:
            logger.warning(f"No data found in range {range_name}")
        return values
