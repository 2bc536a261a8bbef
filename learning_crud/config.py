import os
from pathlib import Path
from typing import Any, Dict, Iterable, List, Literal, Optional, Tuple, Type

from pydantic import field_validator
from pydantic.fields import FieldInfo
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from learning_crud.properties import load_properties, normalize_key

MODE_KEY = "project.mode"
PROPERTIES_FILE_ENV = "APP_PROPERTIES_FILE"
DEFAULT_PROPERTIES_FILE = Path(__file__).parent / "application.properties"

_OVERRIDE_PREFIXES = ("--", "-D")


def get_properties_file() -> Path:
    """Return the properties file to read: ``$APP_PROPERTIES_FILE`` or the packaged default."""
    configured = os.environ.get(PROPERTIES_FILE_ENV)
    if configured:
        return Path(configured)
    return DEFAULT_PROPERTIES_FILE


class PropertiesFileSettingsSource(PydanticBaseSettingsSource):
    """Settings source backed by a ``.properties`` file.

    Keys are normalized (``project.mode`` -> ``project_mode``) before they are
    matched against the settings fields.
    """

    def __init__(self, settings_cls: Type[BaseSettings], properties_file: Optional[Path] = None) -> None:
        super().__init__(settings_cls)
        self.properties_file = properties_file if properties_file is not None else get_properties_file()
        self._properties = load_properties(self.properties_file)

    def get_field_value(self, field: FieldInfo, field_name: str) -> Tuple[Any, str, bool]:
        return self._properties.get(field_name), field_name, False

    def __call__(self) -> Dict[str, Any]:
        values: Dict[str, Any] = {}
        for field_name, field in self.settings_cls.model_fields.items():
            value, key, _ = self.get_field_value(field, field_name)
            if value is not None:
                values[key] = value
        return values


class AppConfig(BaseSettings):
    """Application configuration using Pydantic BaseSettings.

    Values are resolved once at startup, highest precedence first, from
    command-line overrides (init kwargs), environment variables, a ``.env``
    file and the properties file. The instance is frozen afterwards.
    """
    # Backend selection
    project_mode: Optional[str] = None

    # Application
    log_level: Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: Any) -> Any:
        # loguru level names are upper-case; unknown names fail the Literal check
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            PropertiesFileSettingsSource(settings_cls),
            file_secret_settings,
        )

    def get(self, key: str) -> Optional[str]:
        """Look a value up by its dotted key, e.g. ``config.get("project.mode")``."""
        return getattr(self, normalize_key(key), None)


def split_overrides(args: Iterable[str]) -> Tuple[Dict[str, str], List[str]]:
    """Split command-line tokens into configuration overrides and leftovers.

    ``--project.mode=production`` and ``-Dproject.mode=production`` both yield
    ``{"project_mode": "production"}``. Tokens of any other shape are returned
    in the second element, in order.
    """
    overrides: Dict[str, str] = {}
    ignored: List[str] = []
    for arg in args:
        prefix = next((p for p in _OVERRIDE_PREFIXES if arg.startswith(p)), None)
        key, sep, value = arg[len(prefix):].partition("=") if prefix else ("", "", "")
        if not sep or not key.strip():
            ignored.append(arg)
            continue
        overrides[normalize_key(key)] = value
    return overrides, ignored


_config: Optional[AppConfig] = None

def get_config() -> AppConfig:
    """Return the AppConfig instance (singleton pattern)."""
    global _config
    if _config is None:
        _config = AppConfig()
    return _config

def load_config(**overrides: str) -> AppConfig:
    """Build the process configuration at startup with command-line overrides applied.

    Overrides that name no configuration field are dropped.
    """
    global _config
    known = {key: value for key, value in overrides.items() if key in AppConfig.model_fields}
    _config = AppConfig(**known)
    return _config

def set_config_for_test(**kwargs):
    """For testing only: override the AppConfig instance with new values."""
    global _config
    _config = AppConfig(**kwargs)
