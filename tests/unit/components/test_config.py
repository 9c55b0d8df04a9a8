"""
Unit tests for configuration loading.
"""

import os

import pytest

from pageview.config import (
    Config,
    get_config,
    get_config_path,
    load_config,
    reset_config,
)


@pytest.fixture
def config_home(tmp_path, monkeypatch):
    """Point XDG_CONFIG_HOME at an empty directory and clear PAGEVIEW_* vars."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    for key in list(os.environ):
        if key.startswith("PAGEVIEW_"):
            monkeypatch.delenv(key)
    reset_config()
    yield tmp_path
    reset_config()


def write_config(home, text: str) -> None:
    path = home / "pageview" / "config.toml"
    path.parent.mkdir(parents=True)
    path.write_text(text)


class TestDefaults:
    def test_without_file(self, config_home):
        assert load_config() == Config()

    def test_path_respects_xdg(self, config_home):
        assert get_config_path() == config_home / "pageview" / "config.toml"


class TestFile:
    def test_values_applied(self, config_home):
        write_config(config_home, """
[layout]
list_indent = 4
bullet = "*"

[navigation]
debug_renderers = true
top_anchor = "Content_Top"

[theme]
link = "bold green"
""")
        config = load_config()
        assert config.layout.list_indent == 4
        assert config.layout.bullet == "*"
        assert config.navigation.debug_renderers is True
        assert config.navigation.top_anchor == "Content_Top"
        assert config.theme.link == "bold green"
        assert config.cache.max_entries == 0

    def test_unknown_keys_ignored(self, config_home):
        write_config(config_home, "[layout]\nwrap = true\n[extra]\nx = 1\n")
        assert load_config() == Config()

    def test_bad_value_keeps_default(self, config_home):
        write_config(config_home, '[layout]\nlist_indent = "wide"\n')
        assert load_config().layout.list_indent == 2

    def test_invalid_toml_falls_back(self, config_home):
        write_config(config_home, "[layout\nlist_indent = 4\n")
        assert load_config() == Config()


class TestEnv:
    def test_env_overrides_file(self, config_home, monkeypatch):
        write_config(config_home, "[layout]\nlist_indent = 4\n")
        monkeypatch.setenv("PAGEVIEW_LIST_INDENT", "6")
        assert load_config().layout.list_indent == 6

    def test_bool_env(self, config_home, monkeypatch):
        monkeypatch.setenv("PAGEVIEW_DEBUG_RENDERERS", "yes")
        assert load_config().navigation.debug_renderers is True

    def test_invalid_env_ignored(self, config_home, monkeypatch):
        monkeypatch.setenv("PAGEVIEW_LIST_INDENT", "lots")
        assert load_config().layout.list_indent == 2


def test_get_config_cached(config_home):
    assert get_config() is get_config()
    reset_config()
    first = get_config()
    reset_config()
    assert get_config() is not first
