from __future__ import annotations

from ..interface import DataSource


class ProdSource(DataSource):
    """Production backend."""

    DATA = "Prod Data"

    def get_data(self) -> str:
        return self.DATA
