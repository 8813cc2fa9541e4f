import os

import pytest

from helperkit.env import get_env, load_env_file

DOTENV_KEY = "HELPERKIT_TEST_DOTENV"


@pytest.fixture
def dotenv_file(tmp_path):
    os.environ.pop(DOTENV_KEY, None)
    env_file = tmp_path / ".env"
    env_file.write_text(f"{DOTENV_KEY}=from-file\n")
    yield str(env_file)
    os.environ.pop(DOTENV_KEY, None)


def test_get_env_unset(monkeypatch):
    monkeypatch.delenv("UNSET_VAR_xyz", raising=False)
    assert get_env("UNSET_VAR_xyz", "fallback") == "fallback"


def test_get_env_empty_falls_back(monkeypatch):
    monkeypatch.setenv("UNSET_VAR_xyz", "")
    assert get_env("UNSET_VAR_xyz", "fallback") == "fallback"


def test_get_env_set(monkeypatch):
    monkeypatch.setenv("UNSET_VAR_xyz", "value")
    assert get_env("UNSET_VAR_xyz", "fallback") == "value"


def test_load_env_file(dotenv_file):
    assert load_env_file(dotenv_file) is True
    assert get_env(DOTENV_KEY, "fallback") == "from-file"


def test_load_env_file_does_not_override(dotenv_file):
    os.environ[DOTENV_KEY] = "from-process"

    load_env_file(dotenv_file)
    assert get_env(DOTENV_KEY, "fallback") == "from-process"


def test_load_env_file_override(dotenv_file):
    os.environ[DOTENV_KEY] = "from-process"

    load_env_file(dotenv_file, override=True)
    assert get_env(DOTENV_KEY, "fallback") == "from-file"
