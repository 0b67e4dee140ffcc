from finance_tracker import charts


def test_expense_donut():
    fig = charts.expense_donut([{"category": "Groceries", "amount": 200.0}, {"category": "Dining Out", "amount": 50.0}])

    assert fig.data[0].type == "pie"
    assert list(fig.data[0].labels) == ["Groceries", "Dining Out"]
    assert fig.data[0].hole == 0.4


def test_income_vs_expense_bars():
    series = [{"month": m, "income": 100.0, "expenses": 40.0} for m in ["May", "Jun", "Jul", "Aug", "Sep", "Oct"]]

    fig = charts.income_vs_expense_bars(series)

    assert [trace.name for trace in fig.data] == ["Income", "Expenses"]
    assert list(fig.data[0].x) == ["May", "Jun", "Jul", "Aug", "Sep", "Oct"]
    assert fig.layout.barmode == "group"


def test_budget_progress_bars_flags_over_budget():
    progress = [
        {"category": "Groceries", "budget_amount": 150.0, "spent": 200.0, "percent_used": 133.3, "remaining": -50.0},
        {"category": "Housing", "budget_amount": 1000.0, "spent": 500.0, "percent_used": 50.0, "remaining": 500.0},
    ]

    fig = charts.budget_progress_bars(progress)

    assert list(fig.data[0].marker.color) == ["#FF5252", "#4CAF50"]
    assert list(fig.data[0].text) == ["133.3%", "50.0%"]


def test_charts_accept_empty_data():
    assert len(charts.income_vs_expense_bars([]).data) == 2
    assert len(charts.budget_progress_bars([]).data) == 1
