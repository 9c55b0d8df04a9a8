"""
Configuration for pageview.

All tunable parameters in one place. Loaded from:
1. Defaults (this file)
2. Config file (~/.config/pageview/config.toml) if exists
3. Environment variables (PAGEVIEW_*) override file
4. CLI flags override everything

Only the session and the CLI read the global config. The layout engine gets
theme and layout values passed in, so rendering stays a pure function of its
arguments.
"""

from __future__ import annotations

import contextlib
import logging
import os
import tomllib  # stdlib in 3.11+
from dataclasses import dataclass, field, fields
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass
class ThemeConfig:
    """Style slots as rich style definitions (e.g. "bold white on blue")."""
    text: str = "default"
    header: str = "bold red"
    link: str = "blue"
    link_external: str = "cyan"
    link_missing: str = "red"
    link_unsupported: str = "dim blue"
    bullet: str = "default"
    debug: str = "dim"
    selected: str = "underline"


@dataclass
class LayoutConfig:
    """Layout engine settings."""
    list_indent: int = 2  # cells per list nesting level
    bullet: str = "-"


@dataclass
class CacheConfig:
    """Render cache settings."""
    max_entries: int = 0  # 0 = unbounded; >0 enables least-recently-used eviction


@dataclass
class NavigationConfig:
    """Scrolling and selection settings."""
    top_anchor: str = "top"
    scroll_amount: int = 1
    debug_renderers: bool = False  # allow cycling into the diagnostic renderers
    include_top_section: bool = True  # prepend "(Top)" to the contents


@dataclass
class Config:
    """Root config with all settings."""
    theme: ThemeConfig = field(default_factory=ThemeConfig)
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    navigation: NavigationConfig = field(default_factory=NavigationConfig)


def get_config_path() -> Path:
    """Get config file path, respecting XDG."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "pageview" / "config.toml"
    return Path.home() / ".config" / "pageview" / "config.toml"


def load_config() -> Config:
    """Load config from file if exists, else return defaults."""
    config = Config()
    path = get_config_path()

    if path.exists():
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.warning("ignoring unreadable config file %s: %s", path, e)
        else:
            config = _apply_toml(config, data)

    # env var overrides
    config = _apply_env(config)

    return config


def _convert(value: object, conv: type) -> object:
    if conv is bool:
        if isinstance(value, str):
            return value.lower() in ("true", "1", "yes")
        return bool(value)
    return conv(value)


def _apply_toml(config: Config, data: dict) -> Config:
    """Apply toml data to config, section by section."""
    for section_field in fields(config):
        table = data.get(section_field.name)
        if not isinstance(table, dict):
            continue
        section = getattr(config, section_field.name)
        for attr in fields(section):
            if attr.name not in table:
                continue
            conv = type(getattr(section, attr.name))
            try:
                setattr(section, attr.name, _convert(table[attr.name], conv))
            except (TypeError, ValueError):
                logger.warning(
                    "invalid value for %s.%s: %r", section_field.name, attr.name, table[attr.name]
                )
    return config


def _apply_env(config: Config) -> Config:
    """Apply environment variable overrides."""
    env_map: dict[str, tuple[str, str, type]] = {
        "PAGEVIEW_THEME_TEXT": ("theme", "text", str),
        "PAGEVIEW_THEME_HEADER": ("theme", "header", str),
        "PAGEVIEW_THEME_LINK": ("theme", "link", str),
        "PAGEVIEW_THEME_SELECTED": ("theme", "selected", str),
        "PAGEVIEW_LIST_INDENT": ("layout", "list_indent", int),
        "PAGEVIEW_BULLET": ("layout", "bullet", str),
        "PAGEVIEW_CACHE_MAX_ENTRIES": ("cache", "max_entries", int),
        "PAGEVIEW_TOP_ANCHOR": ("navigation", "top_anchor", str),
        "PAGEVIEW_SCROLL_AMOUNT": ("navigation", "scroll_amount", int),
        "PAGEVIEW_DEBUG_RENDERERS": ("navigation", "debug_renderers", bool),
        "PAGEVIEW_INCLUDE_TOP_SECTION": ("navigation", "include_top_section", bool),
    }

    for env_key, (section, attr, conv) in env_map.items():
        val = os.environ.get(env_key)
        if val is not None:
            with contextlib.suppress(ValueError, AttributeError):
                setattr(getattr(config, section), attr, _convert(val, conv))

    return config


# Module-level config instance, loaded once on first use
_config: Config | None = None


def get_config() -> Config:
    """Get the global config instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Forget the cached config so the next get_config() reloads it."""
    global _config
    _config = None
