# dashboard.py: read-side projections behind the dashboard endpoints

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, List, Optional

import pandas as pd

from finance_tracker.schemas import BudgetRead, TransactionRead

COLUMNS = ["date", "amount", "category", "type"]
WINDOW_MONTHS = 6


def _round1(value: float) -> float:
    # Half-up to one decimal: 0.25 -> 0.3
    return float(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def _prep(transactions: Iterable[TransactionRead]) -> pd.DataFrame:
    """
    Flattens transaction records into a dataframe for grouping.
    """
    rows = [
        {"date": t.date, "amount": t.amount, "category": t.category, "type": t.type}
        for t in transactions
    ]
    if not rows:
        return pd.DataFrame(columns=COLUMNS)

    df = pd.DataFrame(rows, columns=COLUMNS)
    df["date"] = pd.to_datetime(df["date"])
    df["amount"] = pd.to_numeric(df["amount"], errors="coerce").fillna(0.0).astype(float)
    df["Month"] = df["date"].dt.strftime("%Y-%m")
    return df


def _expenses_by_category(df: pd.DataFrame) -> pd.Series:
    # sort=False keeps categories in order of first occurrence
    expenses = df[df["type"] == "expense"]
    return expenses.groupby("category", sort=False)["amount"].sum()


def summary(transactions: Iterable[TransactionRead]) -> dict:
    df = _prep(transactions)

    income = float(df.loc[df["type"] == "income", "amount"].sum()) if not df.empty else 0.0
    expenses = float(df.loc[df["type"] == "expense", "amount"].sum()) if not df.empty else 0.0
    balance = income - expenses

    # Savings Rate (guard against division by zero)
    savings_rate = ((income - expenses) / income * 100) if income > 0 else 0.0

    return {
        "balance": balance,
        "income": income,
        "expenses": expenses,
        "savings_rate": _round1(savings_rate),
    }


def expense_breakdown(transactions: Iterable[TransactionRead]) -> List[dict]:
    """
    Expense totals per category, omitting categories with no expenses.
    """
    df = _prep(transactions)
    if df.empty:
        return []

    by_cat = _expenses_by_category(df)
    return [{"category": category, "amount": float(amount)} for category, amount in by_cat.items()]


def income_vs_expense(transactions: Iterable[TransactionRead], today: Optional[date] = None) -> List[dict]:
    """
    Income and expenses for the six calendar months ending at ``today``.

    Transactions are matched on year and month, so the same month of another
    year never lands in the window.
    """
    today = today or date.today()
    window = pd.period_range(
        end=pd.Period(year=today.year, month=today.month, freq="M"),
        periods=WINDOW_MONTHS,
        freq="M",
    )

    df = _prep(transactions)
    totals = {}
    if not df.empty:
        totals = df.groupby(["Month", "type"])["amount"].sum().to_dict()

    data = []
    for period in window:
        key = period.strftime("%Y-%m")
        data.append(
            {
                "month": period.strftime("%b"),
                "income": float(totals.get((key, "income"), 0.0)),
                "expenses": float(totals.get((key, "expense"), 0.0)),
            }
        )
    return data


def budget_progress(budgets: Iterable[BudgetRead], transactions: Iterable[TransactionRead]) -> List[dict]:
    df = _prep(transactions)
    spent_by_cat = _expenses_by_category(df).to_dict() if not df.empty else {}

    result = []
    for budget in budgets:
        budget_amount = float(budget.amount)
        spent = float(spent_by_cat.get(budget.category, 0.0))
        percent_used = (spent / budget_amount * 100) if budget_amount > 0 else 0.0
        result.append(
            {
                "category": budget.category,
                "budget_amount": budget_amount,
                "spent": spent,
                "percent_used": _round1(percent_used),
                "remaining": budget_amount - spent,
            }
        )
    return result
