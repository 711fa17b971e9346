"""
Reads the Stock Summary worksheet of the Inventory tracker spreadsheet and
reshapes its rows into inventory items keyed by the recognized columns.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from constants.inventory import (
    DATA_START_ROW,
    GOOGLE_SHEET_NAME,
    REQUIRED_COLUMNS,
    WORKSHEET_NAME,
)
from utils.credentials import GoogleCredentialsConfig
from utils.google_sheets import (
    GoogleSpreadsheetGateway,
    SpreadsheetGateway,
    quote_worksheet_range,
)

logger = logging.getLogger(__name__)


class InventoryError(Exception):
    """Base error for inventory reads. Carries the HTTP status to answer with."""

    status_code = 500

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> Dict[str, str]:
        body = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class ConfigurationError(InventoryError):
    status_code = 500


class SpreadsheetNotFoundError(InventoryError):
    status_code = 404


class InventoryFetchError(InventoryError):
    status_code = 500


@dataclass
class InventoryResponse:
    """Items read from the worksheet plus the columns that were found."""

    data: List[Dict[str, str]] = field(default_factory=list)
    headers: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"data": self.data, "headers": self.headers}


def _normalize_header(value: Any) -> str:
    return str(value).strip().lower() if value is not None else ""


def _cell_value(row: List[Any], index: int) -> str:
    if index >= len(row) or row[index] is None:
        return ""
    return str(row[index])


def find_column_indices(header_row: List[Any]) -> Dict[str, int]:
    """Map each required column to its index in the header row.

    Matching ignores case and surrounding whitespace; on duplicates the
    leftmost header wins. Columns not present are left out.
    """
    normalized = [_normalize_header(h) for h in header_row]
    indices = {}
    for column in REQUIRED_COLUMNS:
        target = column.strip().lower()
        if target in normalized:
            indices[column] = normalized.index(target)
    return indices


def shape_rows(rows: List[List[Any]]) -> InventoryResponse:
    """Turn raw worksheet values into an InventoryResponse.

    An empty or header-only worksheet gives an empty response, headers
    included. Otherwise the headers are the recognized columns found, even
    when no data row survives.
    """
    if len(rows) <= 1:
        return InventoryResponse()

    column_indices = find_column_indices(rows[0])
    headers = [col for col in REQUIRED_COLUMNS if col in column_indices]

    items = []
    for row in rows[DATA_START_ROW:]:
        row = row or []
        item = {col: _cell_value(row, column_indices[col]) for col in headers}
        # Drop rows where every recognized cell is blank
        if any(value.strip() for value in item.values()):
            items.append(item)

    return InventoryResponse(data=items, headers=headers)


class InventoryReader:
    """
    Fetches the inventory from Google Sheets.

    The reader discovers the spreadsheet by name through Drive, reads the
    whole worksheet through Sheets and shapes the rows. Credentials are passed
    in explicitly; the gateway factory can be swapped for a test double.
    """

    def __init__(
        self,
        config: GoogleCredentialsConfig,
        gateway_factory: Callable[[GoogleCredentialsConfig], SpreadsheetGateway] = GoogleSpreadsheetGateway,
        sheet_name: str = GOOGLE_SHEET_NAME,
        worksheet_name: str = WORKSHEET_NAME,
    ):
        self.config = config
        self.gateway_factory = gateway_factory
        self.sheet_name = sheet_name
        self.worksheet_name = worksheet_name

    def _find_spreadsheet_id(self, gateway: SpreadsheetGateway) -> str:
        files = gateway.find_spreadsheet_by_name(self.sheet_name)
        if not files:
            raise SpreadsheetNotFoundError(
                f'Spreadsheet "{self.sheet_name}" not found. '
                f"Make sure the sheet is shared with the service account."
            )

        spreadsheet_id = files[0]["id"]
        if len(files) > 1:
            logger.warning(
                f"⚠️ Found {len(files)} spreadsheets named '{self.sheet_name}', "
                f"using the most recently modified one ({spreadsheet_id})"
            )
        return spreadsheet_id

    def fetch_inventory(self) -> InventoryResponse:
        """
        Read the inventory worksheet.

        Returns:
            InventoryResponse with the non-blank items and the found columns

        Raises:
            ConfigurationError: private key or client email is missing
            SpreadsheetNotFoundError: no spreadsheet with the configured name
            InventoryFetchError: any auth, network or API failure
        """
        if not self.config.is_configured:
            logger.error("❌ Google credentials are missing, not contacting Google")
            raise ConfigurationError(
                "Google credentials not configured. Please set environment variables."
            )

        logger.info(f"🚀 Fetching inventory from '{self.sheet_name}' / '{self.worksheet_name}'...")
        try:
            gateway = self.gateway_factory(self.config)
            spreadsheet_id = self._find_spreadsheet_id(gateway)
            rows = gateway.get_range(spreadsheet_id, quote_worksheet_range(self.worksheet_name))
        except InventoryError:
            raise
        except Exception as e:
            logger.error(f"❌ Error fetching sheet data: {str(e)}")
            raise InventoryFetchError("Failed to fetch inventory data", details=str(e)) from e

        response = shape_rows(rows)
        logger.info(
            f"✅ Read {len(rows)} rows, returning {len(response.data)} items "
            f"with columns {response.headers}"
        )
        return response
