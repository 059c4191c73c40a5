"""Top-level package for the Student Expense Tracker.

The primary modules are:

* ``ledger`` – the budget and expense store, persisted on every mutation
* ``metrics`` – pure functions deriving totals, percentages and alerts
* ``visualization`` – Plotly charts of spending by category
* ``app`` – the Streamlit app that ties everything together

To run the app from the command line you can execute:

```bash
streamlit run expense_tracker/Home.py
```
"""

from . import ledger  # noqa: F401  # re-exported for convenience
from . import metrics  # noqa: F401  # re-exported for convenience
from .ledger import Expense, InvalidInput, LedgerSnapshot, LedgerStore  # noqa: F401
from .persistent_cache import MemoryCache, PersistentCache  # noqa: F401

__all__ = [
    "ledger",
    "metrics",
    "Expense",
    "InvalidInput",
    "LedgerSnapshot",
    "LedgerStore",
    "MemoryCache",
    "PersistentCache",
]
