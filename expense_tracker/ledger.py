"""Ledger store: the monthly budget and the ordered expense collection.

The store owns the canonical state for one session. Every successful
mutation re-serializes the affected aggregate to the persistent cache and
then calls the registered on-mutation hooks. Invalid input never raises
out of a store operation; the operation is rejected and state is left as
it was.
"""

from __future__ import annotations

import json
import logging
import math
import time
from dataclasses import asdict, dataclass, replace
from datetime import date
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

try:
    from .categories import is_valid_category
    from .config import BUDGET_KEY, EXPENSES_KEY
    from .persistent_cache import PersistentCache
except ImportError:
    from categories import is_valid_category
    from config import BUDGET_KEY, EXPENSES_KEY
    from persistent_cache import PersistentCache

logger = logging.getLogger(__name__)

EXPENSE_FIELDS = ('description', 'amount', 'category', 'date')

MutationHook = Callable[['LedgerStore', str], None]


class InvalidInput(ValueError):
    """Raised by the validators when a budget or expense value is rejected."""


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Expense:
    id: str
    description: str
    amount: float
    category: str
    date: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> 'Expense':
        """Rebuild a persisted record, validating every field."""
        expense_id = payload.get('id')
        if expense_id is None or str(expense_id) == '':
            raise InvalidInput("Expense record is missing an id")
        return cls(
            id=str(expense_id),
            description=validate_description(payload.get('description')),
            amount=validate_amount(payload.get('amount')),
            category=validate_category(payload.get('category')),
            date=validate_date(payload.get('date')),
        )


@dataclass(frozen=True)
class LedgerSnapshot:
    budget: float
    expenses: Tuple[Expense, ...]


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def _positive_number(value: Any, label: str) -> float:
    if isinstance(value, bool):
        raise InvalidInput(f"{label} must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidInput(f"{label} must be a number, got {value!r}") from None
    if not math.isfinite(number) or number <= 0:
        raise InvalidInput(f"{label} must be greater than 0, got {value!r}")
    return number


def validate_budget(value: Any) -> float:
    return _positive_number(value, "Budget")


def validate_amount(value: Any) -> float:
    return _positive_number(value, "Amount")


def validate_description(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidInput("Description cannot be empty")
    return value.strip()


def validate_category(value: Any) -> str:
    if not is_valid_category(value):
        raise InvalidInput(f"Invalid category: {value!r}")
    return value


def validate_date(value: Any) -> str:
    """Normalise a ``date`` or ISO string to ``YYYY-MM-DD``."""
    if isinstance(value, date):
        return value.isoformat()[:10]
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()).isoformat()
        except ValueError:
            pass
    raise InvalidInput(f"Invalid date: {value!r}")


def today_iso() -> str:
    return date.today().isoformat()


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


class LedgerStore:
    """Budget and expense collection for one session.

    Args:
        cache: Key-value cache the two aggregates are persisted to.
        on_mutation: Optional hooks called as ``hook(store, aggregate)``
            after each successful mutation, where ``aggregate`` is
            ``"budget"`` or ``"expenses"``.
        clock: Returns the current time in seconds; used for expense ids.
    """

    def __init__(
        self,
        cache: PersistentCache,
        on_mutation: Optional[List[MutationHook]] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.cache = cache
        self._hooks: List[MutationHook] = list(on_mutation or [])
        self._clock = clock
        self._budget = 0.0
        self._expenses: List[Expense] = []
        self._configured = False

    # -- state accessors ---------------------------------------------------

    @property
    def budget(self) -> float:
        return self._budget

    @property
    def expenses(self) -> Tuple[Expense, ...]:
        return tuple(self._expenses)

    @property
    def configured(self) -> bool:
        """Whether the budget setup step has been completed."""
        return self._configured

    def get_expense(self, expense_id: str) -> Optional[Expense]:
        index = self._index_of(expense_id)
        return self._expenses[index] if index is not None else None

    def snapshot(self) -> LedgerSnapshot:
        return LedgerSnapshot(budget=self._budget, expenses=tuple(self._expenses))

    def add_listener(self, hook: MutationHook) -> None:
        self._hooks.append(hook)

    # -- lifecycle ---------------------------------------------------------

    def initialize(self) -> 'LedgerStore':
        """Load the persisted budget and expenses.

        A stored budget greater than zero marks the session as configured.
        Missing or unreadable expenses yield an empty collection.
        """
        raw_budget = self.cache.get(BUDGET_KEY)
        self._budget = 0.0
        self._configured = False
        if raw_budget:
            try:
                self._budget = validate_budget(raw_budget)
                self._configured = True
            except InvalidInput as exc:
                logger.warning("Ignoring stored budget: %s", exc)

        self._expenses = self._load_expenses(self.cache.get(EXPENSES_KEY))
        logger.info(
            "Ledger loaded: budget=%.2f, %d expenses, configured=%s",
            self._budget, len(self._expenses), self._configured,
        )
        return self

    def _load_expenses(self, raw: Optional[str]) -> List[Expense]:
        if not raw:
            return []
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.warning("Stored expenses are not valid JSON: %s", exc)
            return []
        if not isinstance(payload, list):
            logger.warning("Stored expenses are not a list; starting empty")
            return []

        expenses: List[Expense] = []
        seen = set()
        for item in payload:
            if not isinstance(item, dict):
                logger.warning("Skipping malformed expense record: %r", item)
                continue
            try:
                expense = Expense.from_dict(item)
            except InvalidInput as exc:
                logger.warning("Skipping invalid expense record: %s", exc)
                continue
            if expense.id in seen:
                logger.warning("Skipping duplicate expense id %s", expense.id)
                continue
            seen.add(expense.id)
            expenses.append(expense)
        return expenses

    # -- mutations ---------------------------------------------------------

    def set_budget(self, amount: Any) -> bool:
        """Replace the budget. Only values greater than zero are accepted."""
        try:
            value = validate_budget(amount)
        except InvalidInput as exc:
            logger.debug("Rejected budget: %s", exc)
            return False
        self._budget = value
        self._configured = True
        self._persist_budget()
        self._notify('budget')
        return True

    def request_budget_update(self) -> None:
        """Send the session back to the budget setup step.

        The stored budget is kept until a new one is set.
        """
        self._configured = False

    def add_expense(
        self,
        description: Any,
        amount: Any,
        category: Any,
        date: Any = None,
    ) -> Optional[Expense]:
        """Append a new expense. Returns it, or ``None`` if rejected."""
        try:
            expense = Expense(
                id=self._next_id(),
                description=validate_description(description),
                amount=validate_amount(amount),
                category=validate_category(category),
                date=validate_date(date if date is not None else today_iso()),
            )
        except InvalidInput as exc:
            logger.debug("Rejected expense: %s", exc)
            return None
        self._expenses.append(expense)
        self._persist_expenses()
        self._notify('expenses')
        return expense

    def update_expense(self, expense_id: str, fields: Mapping[str, Any]) -> bool:
        """Replace the mutable fields of an expense in place.

        Keys missing from ``fields`` keep their current value; ``id`` and
        any unknown keys are ignored.
        """
        index = self._index_of(expense_id)
        if index is None:
            logger.debug("Update ignored: no expense with id %s", expense_id)
            return False

        if not isinstance(fields, Mapping):
            logger.debug("Rejected update of %s: fields must be a mapping", expense_id)
            return False

        current = self._expenses[index]
        merged = {name: fields.get(name, getattr(current, name)) for name in EXPENSE_FIELDS}
        try:
            updated = replace(
                current,
                description=validate_description(merged['description']),
                amount=validate_amount(merged['amount']),
                category=validate_category(merged['category']),
                date=validate_date(merged['date']),
            )
        except InvalidInput as exc:
            logger.debug("Rejected update of %s: %s", expense_id, exc)
            return False

        self._expenses[index] = updated
        self._persist_expenses()
        self._notify('expenses')
        return True

    def delete_expense(self, expense_id: str) -> bool:
        index = self._index_of(expense_id)
        if index is None:
            return False
        del self._expenses[index]
        self._persist_expenses()
        self._notify('expenses')
        return True

    # -- internals ---------------------------------------------------------

    def _index_of(self, expense_id: Any) -> Optional[int]:
        key = str(expense_id)
        for index, expense in enumerate(self._expenses):
            if expense.id == key:
                return index
        return None

    def _next_id(self) -> str:
        candidate = int(self._clock() * 1000)
        taken = {expense.id for expense in self._expenses}
        while str(candidate) in taken:
            candidate += 1
        return str(candidate)

    def _persist_budget(self) -> None:
        self._write(BUDGET_KEY, repr(self._budget))

    def _persist_expenses(self) -> None:
        payload = json.dumps([expense.to_dict() for expense in self._expenses])
        self._write(EXPENSES_KEY, payload)

    def _write(self, key: str, value: str) -> None:
        try:
            self.cache.set(key, value)
        except OSError as exc:
            logger.warning("Could not persist %s: %s", key, exc)

    def _notify(self, aggregate: str) -> None:
        for hook in list(self._hooks):
            hook(self, aggregate)
