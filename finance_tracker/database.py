from sqlalchemy import create_engine, Column, Integer, String, Numeric, DateTime, ForeignKey
from sqlalchemy.orm import sessionmaker, declarative_base

from finance_tracker.config import get_settings

Base = declarative_base()

# --- Models ---

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False) # Store bcrypt hash, not plain text
    full_name = Column(String, nullable=True)

class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    description = Column(String, nullable=False)
    amount = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    category = Column(String, nullable=False)
    type = Column(String, nullable=False) # 'income' or 'expense'
    date = Column(DateTime, nullable=False)

class Budget(Base):
    __tablename__ = "budgets"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    category = Column(String, nullable=False)
    amount = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    period = Column(String, nullable=False, default="monthly") # 'weekly', 'monthly', 'yearly'

# --- Engine / Session ---

def make_engine(db_url: str):
    return create_engine(db_url, connect_args={"check_same_thread": False} if "sqlite" in db_url else {})

def make_session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)

engine = make_engine(get_settings().database_url)
SessionLocal = make_session_factory(engine)

# --- Init DB ---
def init_db(bind=None):
    Base.metadata.create_all(bind=bind or engine)
