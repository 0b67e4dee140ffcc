"""Personal Finance Tracker package.

A small REST service for recording income and expenses, setting
per-category budgets and reading dashboard aggregates.  See
``server.py`` for the application factory and ``seed_db.py`` for
creating a demo account.
"""
