"""Field Validator — accumulates per-field validation failures for one request.

Invariants:
    - First failure per field wins; later messages for the same field are ignored
    - A field that never failed is absent from field_errors
    - No removal operation: errors only accumulate
    - One instance per request (never shared)

Design Decisions:
    - Plain dataclass over pydantic validators: handlers need every rule evaluated
      and reported together, including rules that depend on a store lookup
"""

import re
from dataclasses import dataclass, field

EMAIL_RX = re.compile(
    r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*$"
)


@dataclass
class Validator:
    """Field name → first error message recorded for it."""
    field_errors: dict[str, str] = field(default_factory=dict)

    @property
    def has_errors(self) -> bool:
        return bool(self.field_errors)

    def add_field_error(self, key: str, message: str) -> None:
        self.field_errors.setdefault(key, message)

    def check_field(self, ok: bool, key: str, message: str) -> None:
        if not ok:
            self.add_field_error(key, message)


def matches(value: str, rx: re.Pattern) -> bool:
    return rx.match(value) is not None


def not_in(value: str, *items: str) -> bool:
    return value not in items
