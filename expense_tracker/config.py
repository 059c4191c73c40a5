"""Configuration management for the expense tracker.

This module centralizes paths, storage keys and environment variable
overrides, and sets up logging for the app.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

# Base project root - assumes this file is in expense_tracker/
_PROJECT_ROOT = Path(__file__).parent.parent.resolve()

# Data directory
DATA_DIR = Path(os.getenv("EXPENSE_TRACKER_DATA_DIR", _PROJECT_ROOT / "data"))

# Local key-value cache standing in for browser storage
CACHE_PATH = Path(
    os.getenv("EXPENSE_TRACKER_CACHE_PATH", DATA_DIR / "expense_cache.json")
).resolve()

# Keys of the two independently persisted aggregates
BUDGET_KEY = "studentBudget"
EXPENSES_KEY = "studentExpenses"

LOG_LEVEL = os.getenv("EXPENSE_TRACKER_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def ensure_data_directories() -> None:
    """Create the data directory if it doesn't exist."""
    DATA_DIR.mkdir(parents=True, exist_ok=True)


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for the app.

    Unknown level names fall back to INFO.
    """
    resolved = logging.getLevelName((level or LOG_LEVEL).upper())
    if not isinstance(resolved, int):
        resolved = logging.INFO
    logging.basicConfig(format=LOG_FORMAT, level=resolved)
