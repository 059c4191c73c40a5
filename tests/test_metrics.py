from expense_tracker import metrics
from expense_tracker.ledger import Expense, LedgerStore
from expense_tracker.persistent_cache import MemoryCache


def _expense(expense_id, amount, category='Other', description='Item'):
    return Expense(id=expense_id, description=description, amount=amount,
                   category=category, date='2024-01-01')


def _scenario_store():
    store = LedgerStore(MemoryCache()).initialize()
    store.set_budget(100.00)
    store.add_expense("Lunch", 30.00, "Food & Dining", "2024-01-01")
    return store


def test_empty_collection_metrics():
    assert metrics.total_spent([]) == 0
    assert metrics.average_per_transaction([]) == 0.0
    assert metrics.category_totals([]) == {}
    assert metrics.spent_percentage(100.0, []) == 0.0
    assert metrics.remaining_balance(100.0, []) == 100.0


def test_spent_percentage_guards_zero_budget():
    assert metrics.spent_percentage(0.0, [_expense('1', 10)]) == 0.0


def test_total_spent_is_order_independent():
    items = [_expense('1', 12.5), _expense('2', 7.25), _expense('3', 0.25)]
    assert metrics.total_spent(items) == metrics.total_spent(list(reversed(items))) == 20.0


def test_remaining_balance_can_go_negative():
    assert metrics.remaining_balance(10.0, [_expense('1', 15)]) == -5.0


def test_alert_level_boundaries_are_inclusive():
    assert metrics.alert_level(0) == 'low'
    assert metrics.alert_level(49.99) == 'low'
    assert metrics.alert_level(50.0) == 'medium'
    assert metrics.alert_level(74.99) == 'medium'
    assert metrics.alert_level(75.0) == 'high'
    assert metrics.alert_level(99.99) == 'high'
    assert metrics.alert_level(100.0) == 'exceeded'
    assert metrics.alert_level(250.0) == 'exceeded'


def test_spending_whole_budget_is_exceeded():
    items = [_expense('1', 60), _expense('2', 40)]
    pct = metrics.spent_percentage(100.0, items)
    assert pct == 100.0
    assert metrics.alert_level(pct) == 'exceeded'


def test_cent_budget_fully_spent_is_exceeded():
    over_budget_tip = metrics.money_tip(100.0)
    for amount in (0.17, 0.34, 0.68, 0.69, 1.37):
        store = LedgerStore(MemoryCache()).initialize()
        assert store.set_budget(amount)
        assert store.add_expense("Snack", amount, "Food & Dining", "2024-01-01")

        summary = metrics.summarize(store.snapshot())
        assert summary['total_spent'] == summary['budget']
        assert summary['spent_percentage'] == 100.0, amount
        assert summary['alert_level'] == 'exceeded', amount
        assert metrics.money_tip(summary['spent_percentage']) == over_budget_tip
        assert 'Over budget' in over_budget_tip


def test_category_totals_follow_first_occurrence():
    items = [
        _expense('1', 5, 'Utilities'),
        _expense('2', 3, 'Food & Dining'),
        _expense('3', 2, 'Utilities'),
    ]
    totals = metrics.category_totals(items)
    assert list(totals) == ['Utilities', 'Food & Dining']
    assert totals == {'Utilities': 7, 'Food & Dining': 3}


def test_single_lunch_scenario():
    store = _scenario_store()
    expenses = store.expenses
    assert metrics.total_spent(expenses) == 30.00
    assert metrics.remaining_balance(store.budget, expenses) == 70.00
    assert metrics.spent_percentage(store.budget, expenses) == 30.0
    assert metrics.alert_level(metrics.spent_percentage(store.budget, expenses)) == 'low'


def test_second_expense_scenario_then_delete():
    store = _scenario_store()
    store.add_expense("Bus pass", 50.00, "Transportation", "2024-01-02")
    expenses = store.expenses
    pct = metrics.spent_percentage(store.budget, expenses)
    assert metrics.total_spent(expenses) == 80.00
    assert pct == 80.0
    assert metrics.alert_level(pct) == 'high'
    assert metrics.category_totals(expenses) == {"Food & Dining": 30.00, "Transportation": 50.00}

    store.delete_expense(expenses[0].id)
    assert metrics.total_spent(store.expenses) == 50.00
    assert metrics.category_totals(store.expenses) == {"Transportation": 50.00}


def test_alert_message_per_level():
    assert metrics.alert_message('low', 10, 100) is None

    exceeded = metrics.alert_message('exceeded', 120, 100)
    assert exceeded.severity == 'error'
    assert '$120.00 out of your $100.00 budget' in exceeded.message

    high = metrics.alert_message('high', 80, 100)
    assert high.title.startswith('Heads up')
    assert '($80.00 out of $100.00)' in high.message

    medium = metrics.alert_message('medium', 55.5, 100)
    assert medium.severity == 'warning'
    assert '($55.50 out of $100.00)' in medium.message


def test_money_tip_tiers():
    tips = [metrics.money_tip(p) for p in (0, 24.9, 25, 49.9, 50, 74.9, 75, 99.9, 100)]
    assert tips[0] == tips[1]
    assert tips[2] == tips[3] != tips[1]
    assert tips[4] == tips[5] != tips[3]
    assert tips[6] == tips[7] != tips[5]
    assert tips[8] != tips[7]
    assert 'Over budget' in tips[8]


def test_category_breakdown_includes_colors():
    rows = metrics.category_breakdown([_expense('1', 5, 'Clothing')])
    assert rows == [{'name': 'Clothing', 'value': 5, 'color': '#FFEAA7'}]


def test_summarize_collects_dashboard_figures():
    store = _scenario_store()
    store.add_expense("Bus pass", 50.00, "Transportation", "2024-01-02")
    summary = metrics.summarize(store.snapshot())
    assert summary['budget'] == 100.0
    assert summary['total_spent'] == 80.0
    assert summary['remaining_balance'] == 20.0
    assert summary['alert_level'] == 'high'
    assert summary['transaction_count'] == 2
    assert summary['categories_used'] == 2
    assert summary['average_per_transaction'] == 40.0
