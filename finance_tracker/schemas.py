"""Validated request bodies and response records for the finance API.

Request models forbid unknown fields so malformed payloads are rejected before
they reach storage. All models serialise with camelCase keys (``userId``,
``savingsRate``) and accept either camelCase or snake_case on input.
"""

from datetime import datetime, timezone
from typing import List, Literal, Optional, get_args

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

Category = Literal[
    "Groceries",
    "Dining Out",
    "Entertainment",
    "Transportation",
    "Shopping",
    "Housing",
    "Utilities",
    "Income",
    "Others",
]
TransactionType = Literal["income", "expense"]
BudgetPeriod = Literal["weekly", "monthly", "yearly"]

TRANSACTION_CATEGORIES = list(get_args(Category))

# NUMERIC(10, 2) columns hold at most 99999999.99
MAX_AMOUNT = 10**8


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StrictInput(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")


# --- Users ---

class UserCreate(StrictInput):
    username: str = Field(..., min_length=3, max_length=20, pattern=r"^[a-zA-Z0-9_]+$")
    password: str = Field(..., min_length=6, max_length=50)
    full_name: Optional[str] = Field(None, min_length=1, max_length=50)


class LoginRequest(StrictInput):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class ProfileUpdate(StrictInput):
    full_name: str = Field(..., min_length=1, max_length=50)


class PasswordChange(StrictInput):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=8, max_length=50)


class UserRead(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int
    username: str
    full_name: Optional[str] = None
    password_hash: str = Field("", exclude=True)


# --- Transactions ---

class TransactionCreate(StrictInput):
    description: str = Field(..., min_length=1)
    amount: float = Field(0, ge=0, lt=MAX_AMOUNT, allow_inf_nan=False)
    category: Category
    type: TransactionType
    date: datetime

    @field_validator("date")
    @classmethod
    def naive_utc(cls, value: datetime) -> datetime:
        # Rows are stored without tz info; keep aware inputs comparable.
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value


class TransactionRead(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int
    user_id: int
    description: str
    amount: float
    category: str
    type: str
    date: datetime


# --- Budgets ---

class BudgetCreate(StrictInput):
    category: Category
    amount: float = Field(..., ge=0, lt=MAX_AMOUNT, allow_inf_nan=False)
    period: BudgetPeriod = "monthly"


class BudgetRead(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int
    user_id: int
    category: str
    amount: float
    period: str


# --- Dashboard ---

class DashboardSummary(CamelModel):
    balance: float
    income: float
    expenses: float
    savings_rate: float


class ExpenseBreakdownItem(CamelModel):
    category: str
    amount: float


class MonthlyIncomeExpense(CamelModel):
    month: str
    income: float
    expenses: float


class BudgetProgressItem(CamelModel):
    category: str
    budget_amount: float
    spent: float
    percent_used: float
    remaining: float


class CategoriesResponse(BaseModel):
    categories: List[str]


class MessageResponse(BaseModel):
    message: str
