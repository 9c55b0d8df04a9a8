"""
CLI interface for pageview.

Loads a pre-parsed document tree, drives a navigation session with the given
commands and prints what the viewport shows, selection highlighted.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.text import Text

from .config import get_config
from .layout import Line
from .loader import DocumentError, load_file
from .renderers import RenderMode
from .session import PageSession

logger = logging.getLogger(__name__)


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="pageview",
        description="Lay out a document tree for a terminal and navigate its links",
    )

    parser.add_argument(
        "file",
        help="Document tree as JSON",
    )

    parser.add_argument(
        "--shape",
        "-s",
        type=str,
        default="80:24",
        help="Viewport shape as WIDTH:HEIGHT (e.g., 80:24 for 80 cells × 24 lines)",
    )

    parser.add_argument(
        "--renderer",
        "-r",
        choices=[mode.value for mode in RenderMode],
        default=RenderMode.DEFAULT.value,
        help="Rendering mode (the non-default modes dump the tree for debugging)",
    )

    parser.add_argument(
        "--scroll",
        type=int,
        help="Scroll so this line is at the top",
    )

    parser.add_argument(
        "--anchor",
        "-a",
        type=str,
        help="Jump to the section with this anchor",
    )

    parser.add_argument(
        "--next",
        "-n",
        type=int,
        default=0,
        dest="next_links",
        help="Select the next link this many times",
    )

    parser.add_argument(
        "--toc",
        action="store_true",
        help="Print the table of contents after the page",
    )

    parser.add_argument(
        "--activate",
        action="store_true",
        help="Report what opening the selected link would do",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="count",
        default=0,
        help="Log navigation decisions (-vv for debug output)",
    )

    return parser.parse_args(args)


def parse_shape(shape_str: str) -> tuple[int, int]:
    """
    Parse shape string like '80:24' into (width, height).
    Returns (cells_per_line, num_lines).
    """
    parts = shape_str.split(":")
    if len(parts) != 2:
        raise ValueError(
            f"Invalid shape format: {shape_str}. Use WIDTH:HEIGHT (e.g., 80:24)"
        )

    try:
        width = int(parts[0])
        height = int(parts[1])
    except ValueError as e:
        raise ValueError(
            f"Invalid shape format: {shape_str}. Both WIDTH and HEIGHT must be integers"
        ) from e

    if width < 1:
        raise ValueError(f"Width must be >= 1, got {width}")
    if height < 1:
        raise ValueError(f"Height must be >= 1, got {height}")

    return width, height


def setup_logging(verbosity: int) -> None:
    """Route log records to stderr through rich."""
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = os.environ.get("PAGEVIEW_LOG_LEVEL", "WARNING").upper()

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_time=False, show_path=False)],
    )


def format_line(session: PageSession, line: Line) -> Text:
    """Styled text of one rendered line, with the selection highlight applied."""
    text = Text()
    for i, word in enumerate(line):
        style = word.style
        if word.content and session.is_selected(word.node_index):
            style = style + session.theme.selected
        text.append(word.content, style=style)
        if i < len(line) - 1:
            text.append(" " * word.whitespace_width)
    return text


def format_contents(session: PageSession) -> Text:
    text = Text()
    for position, label in enumerate(session.contents.labels()):
        marker = ">" if position == session.contents_cursor.position else " "
        text.append(f"{marker} {label}\n")
    return text


def main(args: list[str] | None = None) -> int:
    """Main entry point."""
    parsed = parse_args(args)
    setup_logging(parsed.verbose)

    try:
        width, height = parse_shape(parsed.shape)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        document = load_file(parsed.file)
    except FileNotFoundError:
        print(f"Error: File not found: {parsed.file}", file=sys.stderr)
        return 1
    except (DocumentError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    session = PageSession(document, get_config())
    session.resize(width, height)

    mode = RenderMode(parsed.renderer)
    if mode is not RenderMode.DEFAULT:
        session.switch_renderer(mode)

    if parsed.scroll is not None:
        session.scroll_to_line(parsed.scroll)
    if parsed.anchor:
        session.select_by_anchor(parsed.anchor)
    for _ in range(parsed.next_links):
        session.select_next()

    console = Console(highlight=False, soft_wrap=True)
    for line in session.visible_lines():
        console.print(format_line(session, line))

    state = session.scroll_state()
    logger.info("showing lines %d-%d of %d", state.y, state.y + state.height, state.total_lines)

    if parsed.toc:
        console.print(Panel(format_contents(session), title="Contents"))

    if parsed.activate:
        activation = session.activate()
        console.print(f"[{activation.kind.value}] {activation.message}".rstrip(), markup=False)

    return 0


if __name__ == "__main__":
    sys.exit(main())
