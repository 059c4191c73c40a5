from expense_tracker import metrics
from expense_tracker.ledger import Expense
from expense_tracker.visualization import create_category_bar_chart, create_category_pie_chart


def _breakdown():
    return metrics.category_breakdown([
        Expense('1', 'Lunch', 30.0, 'Food & Dining', '2024-01-01'),
        Expense('2', 'Bus pass', 50.0, 'Transportation', '2024-01-02'),
    ])


def test_empty_breakdown_gives_placeholder_figures():
    for build in (create_category_pie_chart, create_category_bar_chart):
        fig = build([])
        assert len(fig.data) == 0
        assert fig.layout.title.text == "No expenses to display"


def test_pie_chart_uses_category_colors():
    fig = create_category_pie_chart(_breakdown())
    trace = fig.data[0]
    assert list(trace.labels) == ['Food & Dining', 'Transportation']
    assert list(trace.values) == [30.0, 50.0]
    assert list(trace.marker.colors) == ['#FF6B6B', '#4ECDC4']
    assert trace.hole == 0.4


def test_bar_chart_has_one_colored_bar_per_category():
    fig = create_category_bar_chart(_breakdown(), title="Totals")
    assert fig.layout.title.text == "Totals"
    colors = {trace.name: trace.marker.color for trace in fig.data}
    assert colors == {'Food & Dining': '#FF6B6B', 'Transportation': '#4ECDC4'}
