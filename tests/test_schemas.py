import datetime

import pytest
from pydantic import ValidationError

from finance_tracker.schemas import (
    TRANSACTION_CATEGORIES,
    BudgetCreate,
    DashboardSummary,
    PasswordChange,
    TransactionCreate,
    UserCreate,
    UserRead,
)


def _payload(**overrides):
    body = {
        "description": "Groceries run",
        "amount": 42.5,
        "category": "Groceries",
        "type": "expense",
        "date": "2024-05-10",
    }
    body.update(overrides)
    return body


def test_transaction_coerces_date_string():
    txn = TransactionCreate.model_validate(_payload())

    assert txn.date == datetime.datetime(2024, 5, 10)


def test_transaction_converts_aware_date_to_naive_utc():
    txn = TransactionCreate.model_validate(_payload(date="2024-05-10T12:00:00+02:00"))

    assert txn.date == datetime.datetime(2024, 5, 10, 10, 0)
    assert txn.date.tzinfo is None


def test_transaction_amount_defaults_to_zero():
    body = _payload()
    del body["amount"]

    assert TransactionCreate.model_validate(body).amount == 0


@pytest.mark.parametrize(
    "overrides,field",
    [
        ({"amount": -1}, "amount"),
        ({"category": "Pets"}, "category"),
        ({"type": "transfer"}, "type"),
        ({"date": "not a date"}, "date"),
        ({"description": ""}, "description"),
        ({"userId": 7}, "userId"),
    ],
)
def test_transaction_rejects_bad_fields(overrides, field):
    with pytest.raises(ValidationError) as excinfo:
        TransactionCreate.model_validate(_payload(**overrides))

    assert field in {err["loc"][0] for err in excinfo.value.errors()}


def test_budget_defaults_to_monthly():
    budget = BudgetCreate.model_validate({"category": "Housing", "amount": "1200.50"})

    assert budget.period == "monthly"
    assert budget.amount == 1200.50


def test_budget_rejects_negative_amount_and_unknown_period():
    with pytest.raises(ValidationError):
        BudgetCreate.model_validate({"category": "Housing", "amount": -5})
    with pytest.raises(ValidationError):
        BudgetCreate.model_validate({"category": "Housing", "amount": 5, "period": "daily"})


@pytest.mark.parametrize("username", ["ab", "way_too_long_username_x", "bad name", "dash-ed"])
def test_user_create_username_rules(username):
    with pytest.raises(ValidationError):
        UserCreate(username=username, password="secret123")


def test_user_create_accepts_camel_case_full_name():
    user = UserCreate.model_validate({"username": "dana_99", "password": "secret123", "fullName": "Dana"})

    assert user.full_name == "Dana"


def test_password_change_requires_eight_characters():
    with pytest.raises(ValidationError):
        PasswordChange.model_validate({"currentPassword": "secret123", "newPassword": "short"})


def test_user_read_hides_password_hash():
    user = UserRead(id=1, username="dana_99", full_name="Dana", password_hash="$2b$12$abc")

    assert user.model_dump(by_alias=True) == {"id": 1, "username": "dana_99", "fullName": "Dana"}


def test_summary_serialises_camel_case():
    summary = DashboardSummary.model_validate({"balance": 1, "income": 2, "expenses": 1, "savings_rate": 50.0})

    assert summary.model_dump(by_alias=True)["savingsRate"] == 50.0


@pytest.mark.parametrize("amount", [float("inf"), float("nan"), 1e8, 123456789012.345])
def test_amount_must_fit_the_column(amount):
    with pytest.raises(ValidationError):
        TransactionCreate.model_validate(_payload(amount=amount))
    with pytest.raises(ValidationError):
        BudgetCreate.model_validate({"category": "Housing", "amount": amount})


def test_categories_list_matches_literal():
    assert TRANSACTION_CATEGORIES == [
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
    assert TransactionCreate.model_validate(_payload(category="Others")).category == "Others"
