from __future__ import annotations

from ..interface import DataSource


class DevSource(DataSource):
    """Development backend. Serves a fixed marker so the active binding is visible."""

    DATA = "Dev Data"

    def get_data(self) -> str:
        return self.DATA
