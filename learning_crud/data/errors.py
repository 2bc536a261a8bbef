"""Exceptions raised by the data source selector."""

from typing import Iterable, Optional

from learning_crud.config import MODE_KEY


class MissingBindingError(RuntimeError):
    """Raised when the DataSource is used but the selector bound none.

    This happens when the mode key is unset or holds a value that matches
    no registered data source.
    """

    def __init__(
        self,
        key: str = MODE_KEY,
        value: Optional[str] = None,
        expected: Iterable[str] = (),
    ) -> None:
        self.key = key
        self.value = value
        self.expected = tuple(expected)
        if value is None:
            reason = f"configuration key '{key}' is not set"
        else:
            reason = f"'{key}={value}' does not match any data source"
        message = f"No DataSource bound: {reason}"
        if self.expected:
            message += f" (expected one of: {', '.join(self.expected)})"
        super().__init__(message)
