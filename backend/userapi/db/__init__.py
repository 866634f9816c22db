"""Database Declarations — the SQLAlchemy declarative Base.

Invariants:
    - Every ORM model inherits from db.base.Base

Design Decisions:
    - Engine and sessions live in infrastructure/database.py, not here
"""
