import os
from pathlib import Path

import pytest

from quickspace.errors import ConfigurationError
from quickspace.settings import (
    Settings,
    config_path,
    load_settings,
    resolve_settings,
    save_settings,
)


def test_missing_config_file_gives_defaults(tmp_path: Path):
    settings = load_settings(tmp_path)
    assert settings == Settings()
    assert settings.editor == "cursor"
    assert settings.show_hidden_directories is False


def test_root_expands_home_shorthand(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("HOME", str(tmp_path))
    settings = Settings(repository_directory="~/code")
    assert settings.root() == os.path.join(str(tmp_path), "code")


@pytest.mark.parametrize("root", ["", "   "])
def test_unset_root_is_a_configuration_error(root):
    with pytest.raises(ConfigurationError) as exc:
        Settings(repository_directory=root).root()
    assert "not configured" in str(exc.value)


def test_save_then_load(tmp_path: Path):
    saved = Settings(repository_directory="/srv/repos", show_hidden_directories=True, editor="code -n")
    path = save_settings(tmp_path / "home", saved)
    assert path == config_path(tmp_path / "home")
    assert load_settings(tmp_path / "home") == saved


@pytest.mark.parametrize("content", ["{not json", "{\"show_hidden_directories\": \"sometimes\"}"])
def test_invalid_config_file_is_a_configuration_error(tmp_path: Path, content):
    config_path(tmp_path).write_text(content, encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_settings(tmp_path)


def test_overrides_apply_only_given_values(tmp_path: Path):
    save_settings(tmp_path, Settings(repository_directory="/stored", editor="zed"))

    settings = resolve_settings(tmp_path, root="/override", show_hidden=None, editor=None)

    assert settings.repository_directory == "/override"
    assert settings.editor == "zed"
    assert settings.show_hidden_directories is False
