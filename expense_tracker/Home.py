"""Main entry point for the Streamlit app."""

from __future__ import annotations

import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent.resolve()
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from expense_tracker.app import main
from expense_tracker.config import configure_logging, ensure_data_directories

if __name__ == "__main__":
    configure_logging()
    ensure_data_directories()
    main()
