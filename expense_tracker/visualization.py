"""Plotly visualisation helpers for the expense tracker.

Both charts take the rows produced by
:func:`expense_tracker.metrics.category_breakdown` (dicts with ``name``,
``value`` and ``color`` keys) and return a `plotly.graph_objects.Figure`
that Streamlit renders via ``st.plotly_chart``.
"""

from __future__ import annotations

from typing import Any, Dict, Sequence

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

Breakdown = Sequence[Dict[str, Any]]


def _breakdown_frame(breakdown: Breakdown) -> pd.DataFrame:
    df = pd.DataFrame(list(breakdown), columns=["name", "value", "color"])
    return df.rename(columns={"name": "Category", "value": "Amount"})


def _empty_figure() -> go.Figure:
    fig = go.Figure()
    fig.update_layout(title="No expenses to display")
    return fig


def create_category_pie_chart(breakdown: Breakdown, title: str | None = None) -> go.Figure:
    """Generate a donut chart of spending by category.

    Parameters
    ----------
    breakdown : sequence of dict
        One row per used category with ``name``, ``value`` and ``color``.
    title : str, optional
        Title for the chart.

    Returns
    -------
    plotly.graph_objects.Figure
        Donut chart labelled ``name: pct%``, or an empty figure titled
        "No expenses to display" when ``breakdown`` is empty.
    """
    if not breakdown:
        return _empty_figure()
    df = _breakdown_frame(breakdown)
    fig = px.pie(
        df,
        names="Category",
        values="Amount",
        color="Category",
        color_discrete_map=dict(zip(df["Category"], df["color"])),
        hole=0.4,
    )
    fig.update_traces(
        texttemplate="%{label}: %{percent:.0%}",
        hovertemplate="%{label}<br>Amount: $%{value:.2f}<extra></extra>",
    )
    fig.update_layout(title=title or "Spending by Category", showlegend=False)
    return fig


def create_category_bar_chart(breakdown: Breakdown, title: str | None = None) -> go.Figure:
    """Generate a bar chart of spending amounts by category.

    Parameters
    ----------
    breakdown : sequence of dict
        One row per used category with ``name``, ``value`` and ``color``.
    title : str, optional
        Title for the chart.

    Returns
    -------
    plotly.graph_objects.Figure
        Bar chart of categories vs amounts.
    """
    if not breakdown:
        return _empty_figure()
    df = _breakdown_frame(breakdown)
    fig = px.bar(
        df,
        x="Category",
        y="Amount",
        color="Category",
        color_discrete_map=dict(zip(df["Category"], df["color"])),
    )
    fig.update_traces(hovertemplate="%{x}<br>Amount: $%{y:.2f}<extra></extra>")
    fig.update_layout(
        title=title or "Category Breakdown",
        xaxis_title="Category",
        yaxis_title="Amount",
        xaxis_tickangle=-45,
        yaxis_tickprefix="$",
        showlegend=False,
    )
    return fig
