"""Exceptions raised by the analysis core and its record loaders."""
from __future__ import annotations

from typing import Optional


class ValidationError(ValueError):
    """Raised when a raw vendor, proposal or line item record is malformed."""

    def __init__(self, message: str, *, field: Optional[str] = None, record_id: Optional[str] = None) -> None:
        self.field = field
        self.record_id = record_id
        prefix = ""
        if record_id:
            prefix = f"[{record_id}] "
        if field:
            prefix = f"{prefix}{field}: "
        super().__init__(f"{prefix}{message}")


class DivisionError(ZeroDivisionError):
    """Raised when an average unit price is requested over zero total quantity."""


__all__ = ["DivisionError", "ValidationError"]
