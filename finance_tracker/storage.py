"""Repository layer: users, transactions and budgets, plus dashboard queries.

``Storage`` is the interface the HTTP layer depends on. ``MemStorage`` keeps
everything in dictionaries; ``DatabaseStorage`` persists through SQLAlchemy.
Both return the pydantic records from ``schemas`` so the aggregation
functions in ``dashboard`` never see ORM rows.
"""

import itertools
import logging
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from datetime import date
from typing import Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from finance_tracker import dashboard, database
from finance_tracker.config import Settings
from finance_tracker.schemas import (
    BudgetCreate,
    BudgetRead,
    TransactionCreate,
    TransactionRead,
    UserCreate,
    UserRead,
)

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when the backing store fails; the message is safe to return to clients."""


class Storage(ABC):
    # User operations
    @abstractmethod
    def get_user(self, user_id: int) -> Optional[UserRead]: ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[UserRead]: ...

    @abstractmethod
    def create_user(self, data: UserCreate, password_hash: str) -> UserRead: ...

    @abstractmethod
    def update_user(self, user_id: int, **changes) -> Optional[UserRead]: ...

    # Transaction operations
    @abstractmethod
    def list_transactions(
        self, user_id: int, type: Optional[str] = None, category: Optional[str] = None
    ) -> List[TransactionRead]: ...

    @abstractmethod
    def create_transaction(self, user_id: int, data: TransactionCreate) -> TransactionRead: ...

    # Budget operations
    @abstractmethod
    def list_budgets(self, user_id: int) -> List[BudgetRead]: ...

    @abstractmethod
    def create_budget(self, user_id: int, data: BudgetCreate) -> BudgetRead: ...

    # Dashboard operations
    @contextmanager
    def _reported_as(self, failure_message: str):
        try:
            yield
        except StorageError as exc:
            raise StorageError(failure_message) from exc

    def get_dashboard_summary(self, user_id: int) -> dict:
        with self._reported_as("Failed to fetch dashboard summary"):
            return dashboard.summary(self.list_transactions(user_id))

    def get_expense_breakdown(self, user_id: int) -> List[dict]:
        with self._reported_as("Failed to fetch expense breakdown"):
            return dashboard.expense_breakdown(self.list_transactions(user_id))

    def get_income_vs_expense(self, user_id: int, today: Optional[date] = None) -> List[dict]:
        with self._reported_as("Failed to fetch income vs expense data"):
            return dashboard.income_vs_expense(self.list_transactions(user_id), today=today)

    def get_budget_progress(self, user_id: int) -> List[dict]:
        with self._reported_as("Failed to fetch budget progress"):
            return dashboard.budget_progress(self.list_budgets(user_id), self.list_transactions(user_id))


class MemStorage(Storage):
    def __init__(self):
        self.users: Dict[int, UserRead] = {}
        self.transactions: Dict[int, TransactionRead] = {}
        self.budgets: Dict[int, BudgetRead] = {}
        self._lock = threading.Lock()
        self._user_ids = itertools.count(1)
        self._transaction_ids = itertools.count(1)
        self._budget_ids = itertools.count(1)

    def get_user(self, user_id):
        with self._lock:
            return self.users.get(user_id)

    def get_user_by_username(self, username):
        with self._lock:
            return next((u for u in self.users.values() if u.username == username), None)

    def create_user(self, data, password_hash):
        with self._lock:
            user = UserRead(
                id=next(self._user_ids),
                username=data.username,
                full_name=data.full_name,
                password_hash=password_hash,
            )
            self.users[user.id] = user
        return user

    def update_user(self, user_id, **changes):
        with self._lock:
            user = self.users.get(user_id)
            if user is None:
                return None
            updated = user.model_copy(update=changes)
            self.users[user_id] = updated
        return updated

    def list_transactions(self, user_id, type=None, category=None):
        with self._lock:
            return [
                t
                for t in self.transactions.values()
                if t.user_id == user_id
                and (type is None or t.type == type)
                and (category is None or t.category == category)
            ]

    def create_transaction(self, user_id, data):
        with self._lock:
            txn = TransactionRead(id=next(self._transaction_ids), user_id=user_id, **data.model_dump())
            self.transactions[txn.id] = txn
        return txn

    def list_budgets(self, user_id):
        with self._lock:
            return [b for b in self.budgets.values() if b.user_id == user_id]

    def create_budget(self, user_id, data):
        with self._lock:
            budget = BudgetRead(id=next(self._budget_ids), user_id=user_id, **data.model_dump())
            self.budgets[budget.id] = budget
        return budget


class DatabaseStorage(Storage):
    def __init__(self, session_factory=None):
        self.SessionLocal = session_factory or database.SessionLocal

    @contextmanager
    def _session(self, failure_message: str):
        db = self.SessionLocal()
        try:
            yield db
        except SQLAlchemyError as exc:
            db.rollback()
            logger.exception("%s", failure_message)
            raise StorageError(failure_message) from exc
        finally:
            db.close()

    def get_user(self, user_id):
        with self._session("Failed to fetch user") as db:
            row = db.get(database.User, user_id)
            return UserRead.model_validate(row) if row else None

    def get_user_by_username(self, username):
        with self._session("Failed to fetch user") as db:
            row = db.query(database.User).filter(database.User.username == username).first()
            return UserRead.model_validate(row) if row else None

    def create_user(self, data, password_hash):
        with self._session("Failed to create user") as db:
            row = database.User(username=data.username, password_hash=password_hash, full_name=data.full_name)
            db.add(row)
            db.commit()
            db.refresh(row)
            return UserRead.model_validate(row)

    def update_user(self, user_id, **changes):
        with self._session("Failed to update user") as db:
            row = db.get(database.User, user_id)
            if row is None:
                return None
            for field, value in changes.items():
                setattr(row, field, value)
            db.commit()
            db.refresh(row)
            return UserRead.model_validate(row)

    def list_transactions(self, user_id, type=None, category=None):
        with self._session("Failed to fetch transactions") as db:
            query = db.query(database.Transaction).filter(database.Transaction.user_id == user_id)
            if type is not None:
                query = query.filter(database.Transaction.type == type)
            if category is not None:
                query = query.filter(database.Transaction.category == category)
            return [TransactionRead.model_validate(row) for row in query.order_by(database.Transaction.id)]

    def create_transaction(self, user_id, data):
        with self._session("Failed to create transaction") as db:
            row = database.Transaction(user_id=user_id, **data.model_dump())
            db.add(row)
            db.commit()
            db.refresh(row)
            return TransactionRead.model_validate(row)

    def list_budgets(self, user_id):
        with self._session("Failed to fetch budgets") as db:
            query = db.query(database.Budget).filter(database.Budget.user_id == user_id)
            return [BudgetRead.model_validate(row) for row in query.order_by(database.Budget.id)]

    def create_budget(self, user_id, data):
        with self._session("Failed to create budget") as db:
            row = database.Budget(user_id=user_id, **data.model_dump())
            db.add(row)
            db.commit()
            db.refresh(row)
            return BudgetRead.model_validate(row)


def build_storage(settings: Settings) -> Storage:
    if settings.storage_backend == "memory":
        logger.info("Using in-memory storage")
        return MemStorage()

    engine = database.make_engine(settings.database_url)
    database.init_db(engine)
    logger.info("Using database storage at %s", engine.url.render_as_string(hide_password=True))
    return DatabaseStorage(database.make_session_factory(engine))
