"""
seed_db.py
----------
Create the tables and a demo account, optionally with a few sample
transactions and budgets for the current month.
"""

import argparse
from datetime import datetime
from typing import Optional

from finance_tracker import database
from finance_tracker.auth import hash_password
from finance_tracker.schemas import BudgetCreate, TransactionCreate, UserCreate
from finance_tracker.storage import DatabaseStorage, Storage

SAMPLE_TRANSACTIONS = [
    ("Salary", 3200.00, "Income", "income"),
    ("Weekly groceries", 184.35, "Groceries", "expense"),
    ("Pizza night", 42.50, "Dining Out", "expense"),
    ("Rent", 1150.00, "Housing", "expense"),
    ("Electricity bill", 76.20, "Utilities", "expense"),
    ("Metro card", 55.00, "Transportation", "expense"),
]

SAMPLE_BUDGETS = [
    ("Groceries", 600.00),
    ("Dining Out", 150.00),
    ("Entertainment", 100.00),
]


def seed_users(
    storage: Storage,
    username: str,
    password: str,
    full_name: Optional[str] = None,
    sample_data: bool = False,
):
    # Check if user exists
    if storage.get_user_by_username(username):
        print(f"User '{username}' already exists. Skipping seed.")
        return None

    user = storage.create_user(
        UserCreate(username=username, password=password, full_name=full_name),
        hash_password(password),
    )

    if sample_data:
        today = datetime.now().replace(hour=12, minute=0, second=0, microsecond=0)
        for day, (description, amount, category, kind) in enumerate(SAMPLE_TRANSACTIONS, start=1):
            storage.create_transaction(
                user.id,
                TransactionCreate(
                    description=description,
                    amount=amount,
                    category=category,
                    type=kind,
                    date=today.replace(day=min(day, today.day)),
                ),
            )
        for category, amount in SAMPLE_BUDGETS:
            storage.create_budget(user.id, BudgetCreate(category=category, amount=amount))

    print(f"Database initialized with user '{username}'.")
    return user


def main(argv=None):
    parser = argparse.ArgumentParser(description="Create tables and a demo user")
    parser.add_argument("--username", default="demo")
    parser.add_argument("--password", default="demo1234")
    parser.add_argument("--full-name", default="Demo User")
    parser.add_argument("--sample-data", action="store_true", help="Add sample transactions and budgets")
    args = parser.parse_args(argv)

    database.init_db()
    seed_users(DatabaseStorage(), args.username, args.password, args.full_name, args.sample_data)


if __name__ == "__main__":
    main()
