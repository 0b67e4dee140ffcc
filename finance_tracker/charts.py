# charts.py: plotly figures for the dashboard, built from aggregation output

from typing import List

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go


def expense_donut(breakdown: List[dict]) -> go.Figure:
    """
    Donut chart of spending by category.
    """
    by_cat = pd.DataFrame(breakdown, columns=["category", "amount"])

    fig = px.pie(by_cat, values="amount", names="category", hole=0.4, title="Spending by Category")
    fig.update_traces(textposition="inside", textinfo="percent+label")
    return fig


def income_vs_expense_bars(series: List[dict]) -> go.Figure:
    """
    Bar chart of Income vs Expenses per month.
    """
    monthly = pd.DataFrame(series, columns=["month", "income", "expenses"])

    fig = go.Figure()
    fig.add_trace(go.Bar(x=monthly["month"], y=monthly["income"], name="Income", marker_color="#4CAF50"))
    fig.add_trace(go.Bar(x=monthly["month"], y=monthly["expenses"], name="Expenses", marker_color="#FF5252"))

    fig.update_layout(barmode="group", title="Income vs Expenses Trend", height=400)
    return fig


def budget_progress_bars(progress: List[dict]) -> go.Figure:
    """
    Horizontal bars of percent used per budget; over-budget rows turn red.
    """
    df = pd.DataFrame(progress, columns=["category", "budget_amount", "spent", "percent_used", "remaining"])
    colors = ["#FF5252" if remaining < 0 else "#4CAF50" for remaining in df["remaining"]]

    fig = go.Figure(
        go.Bar(
            x=df["percent_used"],
            y=df["category"],
            orientation="h",
            marker_color=colors,
            text=[f"{p:.1f}%" for p in df["percent_used"]],
        )
    )
    fig.add_vline(x=100, line_dash="dash", line_color="#9ca3af")
    fig.update_layout(title="Budget Progress", xaxis_title="% of budget used", height=350)
    return fig


CHARTS = {
    "expense-breakdown": expense_donut,
    "income-expense": income_vs_expense_bars,
    "budget-progress": budget_progress_bars,
}
