#!/usr/bin/env python3
"""Direct launcher for the Student Expense Tracker.

Runs Streamlit on ``expense_tracker/Home.py`` from the project root.
"""

import subprocess
import sys
from pathlib import Path

project_root = Path(__file__).parent.resolve()

if __name__ == "__main__":
    sys.exit(subprocess.run([
        sys.executable, "-m", "streamlit", "run",
        str(project_root / "expense_tracker" / "Home.py"),
    ], cwd=project_root).returncode)
