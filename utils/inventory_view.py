import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

import pandas as pd

from constants.inventory import SEARCHABLE_COLUMNS
from utils.inventory_api import FALLBACK_ERROR_MESSAGE, FetchResult, fetch_inventory

logger = logging.getLogger(__name__)


@dataclass
class ViewerState:
    """Presentation state of the inventory viewer for one browser session."""

    inventory: List[Dict[str, str]] = field(default_factory=list)
    loading: bool = True
    error: Optional[str] = None
    search_term: str = ""
    refreshing: bool = False

    @property
    def status(self) -> str:
        if self.loading:
            return "loading"
        if self.error:
            return "error"
        return "ready"

    def begin_load(self, show_refreshing: bool = False):
        if show_refreshing:
            self.refreshing = True

    def apply_result(self, result: FetchResult):
        # A failed load keeps the previous inventory in memory
        if result.ok:
            self.inventory = result.data
            self.error = None
        else:
            self.error = result.error
        self.finish_load()

    def finish_load(self):
        self.loading = False
        self.refreshing = False


def load(
    state: ViewerState,
    show_refreshing: bool = False,
    fetch: Callable[[], FetchResult] = fetch_inventory,
) -> ViewerState:
    """Fetch the inventory and move the state to ready or error."""
    state.begin_load(show_refreshing)
    try:
        result = fetch()
    except Exception as e:
        logger.error(f"❌ Error loading inventory: {str(e)}")
        result = FetchResult.failure(str(e) or FALLBACK_ERROR_MESSAGE)
    state.apply_result(result)
    return state


def retry(state: ViewerState, fetch: Callable[[], FetchResult] = fetch_inventory) -> ViewerState:
    """Try Again: show the spinner and reload without the refreshing indicator"""
    state.loading = True
    return load(state, show_refreshing=False, fetch=fetch)


def filter_inventory(items: List[Dict[str, str]], term: str) -> List[Dict[str, str]]:
    """
    Items whose name, color, size or length contains the term, ignoring case.

    Total Stock is not searched. An empty term keeps every item.
    """
    if not term or not items:
        return list(items)

    df = pd.DataFrame(items)
    mask = pd.Series(False, index=df.index)
    for col in SEARCHABLE_COLUMNS:
        if col in df.columns:
            mask |= df[col].fillna("").astype(str).str.contains(term, case=False, regex=False)

    return [item for item, keep in zip(items, mask.tolist()) if keep]


def card_fields(item: Dict[str, str]) -> Dict[str, str]:
    """Display values for one inventory card with placeholders for blanks"""

    def value_or(key, placeholder):
        value = item.get(key) or ""
        return value if value.strip() else placeholder

    return {
        "name": value_or("Item Name", "Unnamed Item"),
        "color": value_or("color", "-"),
        "size": value_or("size", "-"),
        "length": value_or("length", "-"),
        "stock": value_or("Total Stock", "0"),
    }
