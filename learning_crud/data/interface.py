# learning_crud/data/interface.py
from __future__ import annotations

from typing import Protocol, runtime_checkable


# ---- Data source protocol ----

@runtime_checkable
class DataSource(Protocol):
    """
    Backend-agnostic contract consumed by the entry point.

    Implementations are stateless: ``get_data`` returns a non-empty string,
    has no side effects and returns the same value on every call.
    """

    def get_data(self) -> str:
        """Return the datum served by this backend."""
        ...
