import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import requests

from constants.inventory import DEFAULT_INVENTORY_API_URL

logger = logging.getLogger(__name__)

FALLBACK_ERROR_MESSAGE = "Failed to load inventory"


@dataclass
class FetchResult:
    """Outcome of one call to the inventory endpoint: data or an error message."""

    data: List[Dict[str, str]] = field(default_factory=list)
    headers: List[str] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, data, headers) -> "FetchResult":
        return cls(data=list(data or []), headers=list(headers or []))

    @classmethod
    def failure(cls, message: Optional[str]) -> "FetchResult":
        return cls(error=message or FALLBACK_ERROR_MESSAGE)


def get_api_url() -> str:
    return os.getenv("INVENTORY_API_URL", DEFAULT_INVENTORY_API_URL)


def get_api_timeout() -> Optional[float]:
    """Request timeout in seconds, None (no timeout) unless INVENTORY_API_TIMEOUT is set"""
    value = os.getenv("INVENTORY_API_TIMEOUT")
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        logger.warning(f"Ignoring invalid INVENTORY_API_TIMEOUT value: {value}")
        return None


def fetch_inventory(url: Optional[str] = None, timeout: Optional[float] = None) -> FetchResult:
    """
    Fetch inventory from the Stock Tracker API.

    Network failures and unreadable responses are reported as a failed
    FetchResult rather than raised.
    """
    url = url or get_api_url()
    if timeout is None:
        timeout = get_api_timeout()

    try:
        response = requests.get(url, timeout=timeout)
        payload: Dict[str, Any] = response.json()
    except (requests.exceptions.RequestException, ValueError) as e:
        logger.error(f"❌ Could not reach inventory API at {url}: {str(e)}")
        return FetchResult.failure(str(e))

    if not isinstance(payload, dict):
        logger.error(f"❌ Unexpected response from inventory API: {type(payload).__name__}")
        return FetchResult.failure(None)

    if payload.get("error"):
        logger.warning(f"⚠️ Inventory API returned an error ({response.status_code}): {payload['error']}")
        return FetchResult.failure(payload["error"])

    result = FetchResult.success(payload.get("data"), payload.get("headers"))
    logger.info(f"✅ Loaded {len(result.data)} inventory items")
    return result
