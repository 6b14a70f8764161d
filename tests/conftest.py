import pytest


@pytest.fixture
def home(tmp_path, monkeypatch):
    monkeypatch.setenv('HOME', str(tmp_path))
    monkeypatch.delenv('XDG_DATA_DIR', raising=False)
    monkeypatch.delenv('LOG_LEVEL', raising=False)
    return tmp_path
