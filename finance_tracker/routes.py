"""Transaction, budget and dashboard endpoints for the signed-in user."""

import logging
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, Response, status

from finance_tracker import charts
from finance_tracker.auth import current_user, get_storage
from finance_tracker.schemas import (
    TRANSACTION_CATEGORIES,
    BudgetCreate,
    BudgetProgressItem,
    BudgetRead,
    CategoriesResponse,
    Category,
    DashboardSummary,
    ExpenseBreakdownItem,
    MonthlyIncomeExpense,
    TransactionCreate,
    TransactionRead,
    TransactionType,
    UserRead,
)
from finance_tracker.storage import Storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["finance"])


@router.get("/categories", response_model=CategoriesResponse)
def categories():
    return CategoriesResponse(categories=TRANSACTION_CATEGORIES)


# --- Transactions ---

@router.get("/transactions", response_model=List[TransactionRead])
def list_transactions(
    type: Optional[TransactionType] = None,
    category: Optional[Category] = None,
    user: UserRead = Depends(current_user),
    storage: Storage = Depends(get_storage),
):
    return storage.list_transactions(user.id, type=type, category=category)


@router.post("/transactions", response_model=TransactionRead, status_code=status.HTTP_201_CREATED)
def create_transaction(
    req: TransactionCreate,
    user: UserRead = Depends(current_user),
    storage: Storage = Depends(get_storage),
):
    txn = storage.create_transaction(user.id, req)
    logger.info("Created %s transaction id=%s for user id=%s", txn.type, txn.id, user.id)
    return txn


# --- Budgets ---

@router.get("/budgets", response_model=List[BudgetRead])
def list_budgets(user: UserRead = Depends(current_user), storage: Storage = Depends(get_storage)):
    return storage.list_budgets(user.id)


@router.post("/budgets", response_model=BudgetRead, status_code=status.HTTP_201_CREATED)
def create_budget(
    req: BudgetCreate,
    user: UserRead = Depends(current_user),
    storage: Storage = Depends(get_storage),
):
    budget = storage.create_budget(user.id, req)
    logger.info("Created %s budget for %s (id=%s) for user id=%s", budget.period, budget.category, budget.id, user.id)
    return budget


# --- Dashboard ---

@router.get("/dashboard/summary", response_model=DashboardSummary)
def dashboard_summary(user: UserRead = Depends(current_user), storage: Storage = Depends(get_storage)):
    return storage.get_dashboard_summary(user.id)


@router.get("/dashboard/expense-breakdown", response_model=List[ExpenseBreakdownItem])
def expense_breakdown(user: UserRead = Depends(current_user), storage: Storage = Depends(get_storage)):
    return storage.get_expense_breakdown(user.id)


@router.get("/dashboard/income-expense", response_model=List[MonthlyIncomeExpense])
def income_expense(user: UserRead = Depends(current_user), storage: Storage = Depends(get_storage)):
    return storage.get_income_vs_expense(user.id)


@router.get("/budget-progress", response_model=List[BudgetProgressItem])
def budget_progress(user: UserRead = Depends(current_user), storage: Storage = Depends(get_storage)):
    return storage.get_budget_progress(user.id)


@router.get("/dashboard/charts/{name}")
def dashboard_chart(
    name: Literal["expense-breakdown", "income-expense", "budget-progress"],
    user: UserRead = Depends(current_user),
    storage: Storage = Depends(get_storage),
):
    """Plotly figure JSON for one of the dashboard charts."""
    if name == "expense-breakdown":
        data = storage.get_expense_breakdown(user.id)
    elif name == "income-expense":
        data = storage.get_income_vs_expense(user.id)
    else:
        data = storage.get_budget_progress(user.id)

    fig = charts.CHARTS[name](data)
    return Response(content=fig.to_json(), media_type="application/json")
