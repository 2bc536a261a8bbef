import pytest

from learning_crud.data.util import reset_binding_for_test


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    for var in ["PROJECT_MODE", "LOG_LEVEL", "APP_PROPERTIES_FILE"]:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture(autouse=True)
def reset_state(monkeypatch):
    monkeypatch.setattr("learning_crud.config._config", None)
    reset_binding_for_test()
    yield
    reset_binding_for_test()


@pytest.fixture
def properties_file(tmp_path, monkeypatch):
    """Point the settings at a fresh, empty properties file and return its path."""
    path = tmp_path / "application.properties"
    path.write_text("", encoding="utf-8")
    monkeypatch.setenv("APP_PROPERTIES_FILE", str(path))
    return path
