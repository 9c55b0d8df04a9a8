"""
Theme: named style slots resolved to rich styles.

The layout engine treats the theme as an opaque lookup table; it never reads
the global config itself.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields

from rich.errors import StyleSyntaxError
from rich.style import Style

from .config import ThemeConfig
from .document import (
    AnchorLink,
    Effect,
    ExternalLink,
    InternalLink,
    InterwikiLink,
    LinkTarget,
    MediaLink,
    RedLink,
)

logger = logging.getLogger(__name__)

EFFECT_STYLES: dict[Effect, Style] = {
    Effect.BOLD: Style(bold=True),
    Effect.ITALIC: Style(italic=True),
    Effect.UNDERLINE: Style(underline=True),
    Effect.STRIKETHROUGH: Style(strike=True),
}


@dataclass(frozen=True)
class Theme:
    text: Style = Style()
    header: Style = Style(color="red", bold=True)
    link: Style = Style(color="blue")
    link_external: Style = Style(color="cyan")
    link_missing: Style = Style(color="red")
    link_unsupported: Style = Style(color="blue", dim=True)
    bullet: Style = Style()
    debug: Style = Style(dim=True)
    selected: Style = Style(underline=True)

    @classmethod
    def from_config(cls, config: ThemeConfig) -> Theme:
        """Parse every style definition; bad definitions fall back to the default."""
        styles = {}
        for slot in fields(config):
            definition = getattr(config, slot.name)
            try:
                styles[slot.name] = Style.parse(definition)
            except StyleSyntaxError as e:
                logger.warning("invalid style %r for %s: %s", definition, slot.name, e)
        return cls(**styles)

    def link_style(self, target: LinkTarget) -> Style:
        """Base style of a link, by link kind."""
        match target:
            case InternalLink() | AnchorLink():
                return self.link
            case ExternalLink():
                return self.link_external
            case RedLink():
                return self.link_missing
            case MediaLink() | InterwikiLink():
                return self.link_unsupported
            case _:
                raise TypeError(f"unknown link target {target!r}")
