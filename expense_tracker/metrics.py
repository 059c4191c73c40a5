"""Derived spending metrics.

Everything here is a pure function of a budget value and a sequence of
expenses (or a :class:`~expense_tracker.ledger.LedgerSnapshot`), so the
results can be recomputed on every rerun without hidden state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

try:
    from .categories import category_color
    from .ledger import Expense, LedgerSnapshot
except ImportError:
    from categories import category_color
    from ledger import Expense, LedgerSnapshot

EXCEEDED = 'exceeded'
HIGH = 'high'
MEDIUM = 'medium'
LOW = 'low'

# Lower bound of each alert tier, checked from the top down.
ALERT_THRESHOLDS = (
    (100.0, EXCEEDED),
    (75.0, HIGH),
    (50.0, MEDIUM),
)


@dataclass(frozen=True)
class Alert:
    level: str
    title: str
    message: str
    severity: str  # 'error' or 'warning'


def total_spent(expenses: Sequence[Expense]) -> float:
    return float(sum(expense.amount for expense in expenses))


def remaining_balance(budget: float, expenses: Sequence[Expense]) -> float:
    """Budget minus total spent. Negative once the budget is exceeded."""
    return budget - total_spent(expenses)


def spent_percentage(budget: float, expenses: Sequence[Expense]) -> float:
    if budget <= 0:
        return 0.0
    return total_spent(expenses) / budget * 100


def category_totals(expenses: Sequence[Expense]) -> Dict[str, float]:
    """Sum amounts per category.

    Only categories that have expenses appear, in order of first occurrence.
    """
    totals: Dict[str, float] = {}
    for expense in expenses:
        totals[expense.category] = totals.get(expense.category, 0.0) + expense.amount
    return totals


def alert_level(percentage: float) -> str:
    for threshold, level in ALERT_THRESHOLDS:
        if percentage >= threshold:
            return level
    return LOW


def average_per_transaction(expenses: Sequence[Expense]) -> float:
    if not expenses:
        return 0.0
    return total_spent(expenses) / len(expenses)


def alert_message(level: str, spent: float, budget: float) -> Optional[Alert]:
    """Build the advisory shown for ``level``; ``None`` for ``low``."""
    spent_text = f"${spent:.2f}"
    budget_text = f"${budget:.2f}"
    if level == EXCEEDED:
        return Alert(
            level=level,
            title="Hey there! 📢",
            message=(
                f"You've spent {spent_text} out of your {budget_text} budget this month. "
                "No worries - it happens! Consider reviewing your expenses and maybe "
                "adjusting your budget for next month. You've got this! 💪"
            ),
            severity='error',
        )
    if level == HIGH:
        return Alert(
            level=level,
            title="Heads up! ⚠️",
            message=(
                f"You've used 75% of your budget ({spent_text} out of {budget_text}). "
                "You're doing great at tracking your expenses! Maybe consider slowing "
                "down on non-essential purchases for the rest of the month. 🎯"
            ),
            severity='error',
        )
    if level == MEDIUM:
        return Alert(
            level=level,
            title="Good progress! 👍",
            message=(
                f"You've spent half of your monthly budget ({spent_text} out of {budget_text}). "
                "You're staying on track! Keep monitoring your spending to finish the "
                "month strong. 🌟"
            ),
            severity='warning',
        )
    return None


def money_tip(percentage: float) -> str:
    if percentage < 25:
        return (
            "Great start! You're being mindful with your spending. "
            "Keep tracking every expense to build good habits! 🎓"
        )
    if percentage < 50:
        return (
            "You're doing well! Consider setting aside a small emergency fund "
            "from your remaining budget. 💰"
        )
    if percentage < 75:
        return (
            "Halfway through your budget! Try the 50/30/20 rule: "
            "50% needs, 30% wants, 20% savings. 📊"
        )
    if percentage < 100:
        return (
            "Budget running low! Focus on essentials like food and transport. "
            "Skip the coffee shop for a few days! ☕"
        )
    return (
        "Over budget? It's a learning experience! Review your expenses to see "
        "where you can cut back next month. 📚"
    )


def category_breakdown(expenses: Sequence[Expense]) -> List[Dict[str, Any]]:
    """Chart rows of ``{'name', 'value', 'color'}`` per used category."""
    return [
        {'name': name, 'value': value, 'color': category_color(name)}
        for name, value in category_totals(expenses).items()
    ]


def summarize(snapshot: LedgerSnapshot) -> Dict[str, Any]:
    """Collect every metric the dashboard displays for one snapshot."""
    budget = snapshot.budget
    expenses = snapshot.expenses
    spent = total_spent(expenses)
    percentage = spent_percentage(budget, expenses)
    totals = category_totals(expenses)
    return {
        'budget': budget,
        'total_spent': spent,
        'remaining_balance': budget - spent,
        'spent_percentage': percentage,
        'alert_level': alert_level(percentage),
        'transaction_count': len(expenses),
        'categories_used': len(totals),
        'average_per_transaction': average_per_transaction(expenses),
        'category_totals': totals,
        'category_breakdown': category_breakdown(expenses),
    }
