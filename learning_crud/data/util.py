from __future__ import annotations

from typing import Callable, Dict, Optional

from learning_crud.config import MODE_KEY, AppConfig, get_config
from learning_crud.logging import get_logger

from .backends.dev_backend import DevSource
from .backends.prod_backend import ProdSource
from .errors import MissingBindingError
from .interface import DataSource

# mode value -> constructor; values are matched case-insensitively
DATA_SOURCES: Dict[str, Callable[[], DataSource]] = {
    "development": DevSource,
    "production": ProdSource,
}


class DataSourceBinding:
    """The DataSource chosen at startup, held for the process lifetime.

    ``source`` is None when the mode matched no registered backend; the
    failure is deferred to the first ``get()``.
    """

    def __init__(self, source: Optional[DataSource], mode: Optional[str] = None) -> None:
        self.source = source
        self.mode = mode

    @property
    def is_bound(self) -> bool:
        return self.source is not None

    def get(self) -> DataSource:
        if self.source is None:
            raise MissingBindingError(MODE_KEY, self.mode, expected=DATA_SOURCES)
        return self.source


_binding: Optional[DataSourceBinding] = None


def get_data_source_for_mode(mode: Optional[str]) -> Optional[DataSource]:
    """Instantiate the backend registered for ``mode``, or return None."""
    if mode is None:
        return None
    factory = DATA_SOURCES.get(mode.lower())
    if factory is None:
        return None
    return factory()


def bind_data_source(config: Optional[AppConfig] = None) -> DataSourceBinding:
    """Resolve the process-wide DataSource from ``project.mode``.

    Runs once per process; later calls return the existing binding untouched.
    """
    global _binding
    logger = get_logger(__name__)
    if _binding is not None:
        logger.debug(f"DataSource already resolved for {MODE_KEY}={_binding.mode}")
        return _binding

    if config is None:
        config = get_config()
    mode = config.get(MODE_KEY)
    source = get_data_source_for_mode(mode)
    if source is None:
        logger.warning(f"No DataSource registered for {MODE_KEY}={mode!r}")
    else:
        logger.info(f"Bound {type(source).__name__} for {MODE_KEY}={mode}")
    _binding = DataSourceBinding(source, mode=mode)
    return _binding


def get_data_source() -> DataSource:
    """Return the bound DataSource.

    Raises:
        MissingBindingError: If nothing was bound, including when
            ``bind_data_source`` never ran.
    """
    if _binding is None:
        raise MissingBindingError(MODE_KEY, expected=DATA_SOURCES)
    return _binding.get()


def reset_binding_for_test() -> None:
    """For testing only: forget the process-wide binding."""
    global _binding
    _binding = None
