"""API Layer — FastAPI routes, request dependencies, and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Every response body is JSON, errors included ({"Error"} or {"FieldErrors"})

Design Decisions:
    - Thin routes delegate to services; the store arrives through deps.py
"""
