"""Core Layer — domain types, error hierarchy, field validation, password rules.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - No async and no database access: the store contract is a Protocol only

Design Decisions:
    - Pure rules separated from the IO shell so services can be tested against any store
"""
