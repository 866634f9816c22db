"""Services Layer — user registration, account management, and authentication.

Invariants:
    - The UserStore is always an explicit argument, never a module global
    - Rule violations are collected per field and raised together

Design Decisions:
    - Plain async functions, one module per resource
"""
