"""Streamlit app for the Student Expense Tracker.

The ledger store lives in ``st.session_state`` for the whole browser
session; every widget callback goes through one of the store's mutation
operations and then reruns the script so the cards, alert and charts are
recomputed from the new state.

To run the app from the command line::

    streamlit run expense_tracker/Home.py
"""

from __future__ import annotations

import html
import logging
from datetime import date
from typing import Any, Optional

import streamlit as st

try:
    from . import metrics
    from . import visualization as viz
    from .categories import CATEGORIES, badge_colors
    from .formatting import (
        escape_dollar_for_markdown,
        format_currency,
        format_expense_date,
        format_percentage,
    )
    from .ledger import Expense, LedgerStore
    from .persistent_cache import PersistentCache
except ImportError:
    import metrics
    import visualization as viz
    from categories import CATEGORIES, badge_colors
    from formatting import (
        escape_dollar_for_markdown,
        format_currency,
        format_expense_date,
        format_percentage,
    )
    from ledger import Expense, LedgerStore
    from persistent_cache import PersistentCache

logger = logging.getLogger(__name__)

LEDGER_STATE_KEY = 'ledger'
EDITING_STATE_KEY = 'editing_expense_id'
FLASH_STATE_KEY = 'flash_message'

_MUTATION_MESSAGES = {
    'budget': "Budget saved.",
    'expenses': "Expenses updated.",
}


# ---------------------------------------------------------------------------
# Session state
# ---------------------------------------------------------------------------


def _on_ledger_mutation(store: LedgerStore, aggregate: str) -> None:
    logger.info("Ledger %s changed (%d expenses)", aggregate, len(store.expenses))
    st.session_state[FLASH_STATE_KEY] = _MUTATION_MESSAGES.get(aggregate, "Saved.")


def get_ledger(cache: Optional[PersistentCache] = None) -> LedgerStore:
    """Return the session's ledger, loading it from the cache on first use."""
    ledger = st.session_state.get(LEDGER_STATE_KEY)
    if ledger is None:
        ledger = LedgerStore(cache if cache is not None else PersistentCache())
        ledger.add_listener(_on_ledger_mutation)
        ledger.initialize()
        st.session_state[LEDGER_STATE_KEY] = ledger
    return ledger


def _rerun() -> None:
    rerun = getattr(st, 'rerun', None)
    if callable(rerun):
        rerun()
        return
    experimental = getattr(st, 'experimental_rerun', None)
    if callable(experimental):
        experimental()


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------


def submit_budget(ledger: LedgerStore, amount: Any) -> bool:
    if ledger.set_budget(amount):
        return True
    st.warning("Please enter a budget greater than $0.00.")
    return False


def submit_new_expense(
    ledger: LedgerStore,
    description: str,
    amount: Any,
    category: Optional[str],
    expense_date: Optional[date],
) -> Optional[Expense]:
    expense = ledger.add_expense(description, amount, category, expense_date)
    if expense is None:
        st.warning("Please fill in a description, an amount above $0.00 and a category.")
    return expense


def submit_expense_update(ledger: LedgerStore, expense_id: str, fields: dict) -> bool:
    if ledger.update_expense(expense_id, fields):
        st.session_state[EDITING_STATE_KEY] = None
        return True
    st.warning("Could not update the expense. Check the fields and try again.")
    return False


def start_edit(expense_id: str) -> None:
    st.session_state[EDITING_STATE_KEY] = expense_id


def cancel_edit() -> None:
    st.session_state[EDITING_STATE_KEY] = None


def delete_expense(ledger: LedgerStore, expense_id: str) -> None:
    ledger.delete_expense(expense_id)
    if st.session_state.get(EDITING_STATE_KEY) == expense_id:
        st.session_state[EDITING_STATE_KEY] = None


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def render_budget_setup(ledger: LedgerStore) -> None:
    """Welcome screen asking for the monthly budget."""
    _, center, _ = st.columns([1, 2, 1])
    with center:
        st.markdown("## 👛 Welcome to Your Expense Tracker")
        st.caption("Let's start by setting your monthly budget")
        with st.form('budget_form'):
            amount = st.number_input(
                "Monthly Budget ($)",
                min_value=0.0,
                step=0.01,
                format="%.2f",
                value=float(ledger.budget),
                help="Enter your monthly budget",
            )
            if st.form_submit_button("Set Budget & Continue", use_container_width=True):
                if submit_budget(ledger, amount):
                    _rerun()


def render_alert(summary: dict) -> None:
    alert = metrics.alert_message(
        summary['alert_level'], summary['total_spent'], summary['budget']
    )
    if alert is None:
        return
    # Escape dollar signs so markdown does not read them as math delimiters
    message = alert.message.replace("$", "\\$")
    body = f"**{alert.title}**  \n{message}"
    if alert.severity == 'error':
        st.error(body, icon="⚠️")
    else:
        st.warning(body, icon="⚠️")


def render_summary_cards(ledger: LedgerStore, summary: dict) -> None:
    budget_col, spent_col, remaining_col = st.columns(3)

    with budget_col:
        st.metric("Monthly Budget", format_currency(summary['budget']))
        if st.button("Update Budget", key='update_budget'):
            ledger.request_budget_update()
            _rerun()

    with spent_col:
        st.metric("Total Spent", format_currency(summary['total_spent']))
        st.caption(f"{format_percentage(summary['spent_percentage'])} of budget")

    with remaining_col:
        remaining = summary['remaining_balance']
        st.metric("Remaining Balance", format_currency(remaining))
        st.caption("Available to spend" if remaining >= 0 else "Over budget")


def render_money_tip(summary: dict) -> None:
    st.info(f"**Student Money Tip**  \n{metrics.money_tip(summary['spent_percentage'])}", icon="💡")


def render_dashboard_tab(summary: dict) -> None:
    breakdown = summary['category_breakdown']
    pie_col, bar_col = st.columns(2)

    with pie_col:
        st.subheader("Spending by Category")
        st.caption("Visual breakdown of your expenses")
        if breakdown:
            st.plotly_chart(viz.create_category_pie_chart(breakdown, title=" "), use_container_width=True)
        else:
            st.info("No expenses to display. Add some expenses to see your spending breakdown.")

    with bar_col:
        st.subheader("Category Breakdown")
        st.caption("Spending amounts by category")
        if breakdown:
            st.plotly_chart(viz.create_category_bar_chart(breakdown, title=" "), use_container_width=True)
        else:
            st.info("No expenses to display. Add some expenses to see your category breakdown.")

    count_col, used_col, avg_col = st.columns(3)
    count_col.metric("Total Transactions", summary['transaction_count'])
    used_col.metric("Categories Used", summary['categories_used'])
    avg_col.metric("Average per Transaction", format_currency(summary['average_per_transaction']))


def render_add_expense_tab(ledger: LedgerStore) -> None:
    st.subheader("Add New Expense")
    st.caption("Record a new expense to track your spending")
    with st.form('add_expense_form', clear_on_submit=True):
        left, right = st.columns(2)
        description = left.text_input("Description", placeholder="e.g., Lunch at cafeteria")
        amount = right.number_input("Amount ($)", min_value=0.0, step=0.01, format="%.2f")
        left, right = st.columns(2)
        category = left.selectbox(
            "Category", CATEGORIES, index=None, placeholder="Select a category"
        )
        expense_date = right.date_input("Date", value=date.today())
        if st.form_submit_button("➕ Add Expense", use_container_width=True):
            if submit_new_expense(ledger, description, amount, category, expense_date):
                _rerun()


def render_edit_form(ledger: LedgerStore, expense: Expense) -> None:
    with st.form(f'edit_expense_{expense.id}'):
        st.markdown("**Edit Expense**")
        st.caption("Update the details of your expense")
        description = st.text_input("Description", value=expense.description)
        amount = st.number_input(
            "Amount ($)", min_value=0.0, step=0.01, format="%.2f", value=float(expense.amount)
        )
        category = st.selectbox(
            "Category", CATEGORIES,
            index=CATEGORIES.index(expense.category) if expense.category in CATEGORIES else 0,
        )
        expense_date = st.date_input("Date", value=date.fromisoformat(expense.date))
        cancel_col, save_col = st.columns(2)
        cancelled = cancel_col.form_submit_button("Cancel", use_container_width=True)
        saved = save_col.form_submit_button("Update Expense", use_container_width=True)

    if cancelled:
        cancel_edit()
        _rerun()
    elif saved:
        fields = {
            'description': description,
            'amount': amount,
            'category': category,
            'date': expense_date,
        }
        if submit_expense_update(ledger, expense.id, fields):
            _rerun()


def render_expense_row(ledger: LedgerStore, expense: Expense) -> None:
    colors = badge_colors(expense.category)
    info_col, edit_col, delete_col = st.columns([6, 1, 1])
    with info_col:
        st.markdown(
            f"**{html.escape(expense.description)}** "
            f"<span style='background-color:{colors['background']};color:{colors['foreground']};"
            f"padding:2px 8px;border-radius:8px;font-size:0.8em'>{expense.category}</span>",
            unsafe_allow_html=True,
        )
        st.markdown(
            f"<span style='color:#DC2626;font-weight:600'>"
            f"{escape_dollar_for_markdown(expense.amount)}</span>"
            f" &nbsp; {format_expense_date(expense.date)}",
            unsafe_allow_html=True,
        )
    if edit_col.button("✏️", key=f'edit_{expense.id}', help="Edit expense"):
        start_edit(expense.id)
        _rerun()
    if delete_col.button("🗑️", key=f'delete_{expense.id}', help="Delete expense"):
        delete_expense(ledger, expense.id)
        _rerun()

    if st.session_state.get(EDITING_STATE_KEY) == expense.id:
        render_edit_form(ledger, expense)
    st.divider()


def render_expenses_tab(ledger: LedgerStore) -> None:
    st.subheader("All Expenses")
    st.caption("View, edit, and delete your recorded expenses")
    expenses = ledger.expenses
    if not expenses:
        st.info("📅 No expenses recorded yet. Add your first expense to get started!")
        return
    for expense in expenses:
        render_expense_row(ledger, expense)


def main() -> None:
    """Entry point for the Streamlit app."""
    st.set_page_config(
        page_title="Student Expense Tracker",
        page_icon="👛",
        layout="wide",
    )
    ledger = get_ledger()

    if not ledger.configured:
        render_budget_setup(ledger)
        return

    st.title("Student Expense Tracker")
    st.markdown("Manage your budget and track your spending")

    flash = st.session_state.get(FLASH_STATE_KEY)
    if flash:
        st.toast(flash)
        st.session_state[FLASH_STATE_KEY] = None

    summary = metrics.summarize(ledger.snapshot())
    render_alert(summary)
    render_summary_cards(ledger, summary)
    render_money_tip(summary)

    dashboard_tab, add_tab, expenses_tab = st.tabs(["Dashboard", "Add Expense", "All Expenses"])
    with dashboard_tab:
        render_dashboard_tab(summary)
    with add_tab:
        render_add_expense_tab(ledger)
    with expenses_tab:
        render_expenses_tab(ledger)


if __name__ == '__main__':
    main()
