"""
Load a pre-parsed document tree from JSON.

The parser that turns markup into a tree lives upstream; this module only
reads the tree it hands over. Each node is an object with a "type" key, the
fields of its payload and an optional "children" list. A bare string in a
children list is shorthand for a text node.

    {"type": "root", "children": [
        {"type": "header", "text": "History", "anchor": "History", "level": 2},
        {"type": "paragraph", "children": [
            "See ",
            {"type": "link", "target": {"kind": "internal", "page": "Rome", "title": "Rome"},
             "children": ["Rome"]}
        ]}
    ]}
"""

from __future__ import annotations

import json
from pathlib import Path

from .document import (
    AnchorLink,
    Data,
    Division,
    Document,
    Effect,
    Emphasis,
    ExternalLink,
    Header,
    InternalLink,
    InterwikiLink,
    Link,
    LinkTarget,
    ListBlock,
    ListItem,
    MediaLink,
    Newline,
    Node,
    Paragraph,
    RedLink,
    Root,
    Text,
)


class DocumentError(ValueError):
    """The input is not a valid document tree."""


LINK_KINDS: dict[str, type] = {
    "internal": InternalLink,
    "anchor": AnchorLink,
    "external": ExternalLink,
    "red": RedLink,
    "media": MediaLink,
    "interwiki": InterwikiLink,
}


def _string(value: object, what: str) -> str:
    if not isinstance(value, str):
        raise DocumentError(f"{what} must be a string, got {value!r}")
    return value


def _link_target(raw: object) -> LinkTarget:
    if not isinstance(raw, dict):
        raise DocumentError(f"link target must be an object, got {raw!r}")
    fields = dict(raw)
    kind = fields.pop("kind", None)
    cls = LINK_KINDS.get(kind)
    if cls is None:
        raise DocumentError(f"unknown link kind {kind!r}")
    for name, value in fields.items():
        # only an internal link's section anchor is optional
        if name == "anchor" and value is None and cls is InternalLink:
            continue
        _string(value, f"{kind} link {name}")
    try:
        return cls(**fields)
    except TypeError as e:
        raise DocumentError(f"invalid {kind} link: {e}") from e


def _data(raw: dict) -> Data:
    kind = raw.get("type")
    try:
        match kind:
            case "root":
                return Root()
            case "header":
                return Header(
                    text=_string(raw.get("text", ""), "header text"),
                    anchor=_string(raw["anchor"], "header anchor"),
                    level=int(raw.get("level", 2)),
                )
            case "paragraph":
                return Paragraph()
            case "text":
                return Text(contents=_string(raw.get("contents", ""), "text contents"))
            case "bold" | "italic" | "underline" | "strikethrough":
                return Emphasis(Effect(kind))
            case "emphasis":
                return Emphasis(Effect(raw["effect"]))
            case "link":
                return Link(_link_target(raw.get("target")))
            case "list":
                return ListBlock(ordered=bool(raw.get("ordered", False)))
            case "item":
                return ListItem()
            case "division":
                return Division()
            case "newline":
                return Newline()
    except KeyError as e:
        raise DocumentError(f"{kind} node is missing {e}") from e
    except ValueError as e:
        raise DocumentError(f"invalid {kind} node: {e}") from e
    raise DocumentError(f"unknown node type {kind!r}")


def node_from_dict(raw: object) -> Node:
    """
    Build a Node tree from parsed JSON.

    Iterative: each stack entry pairs a raw child list with the Node its
    children belong to.
    """
    def build(item: object) -> tuple[Node, list]:
        if isinstance(item, str):
            return Node(Text(item)), []
        if not isinstance(item, dict):
            raise DocumentError(f"node must be an object or a string, got {item!r}")
        children = item.get("children", [])
        if not isinstance(children, list):
            raise DocumentError(f"children must be a list, got {children!r}")
        return Node(_data(item)), children

    root, children = build(raw)
    stack: list[tuple[Node, list]] = [(root, children)]
    while stack:
        parent, raw_children = stack.pop()
        for raw_child in raw_children:
            child, grandchildren = build(raw_child)
            parent.add_child(child)
            if grandchildren:
                stack.append((child, grandchildren))
    return root


def load_document(source: str) -> Document:
    """Parse a JSON string into a Document."""
    try:
        raw = json.loads(source)
    except json.JSONDecodeError as e:
        raise DocumentError(f"invalid JSON: {e}") from e
    root = node_from_dict(raw)
    if not isinstance(root.data, Root):
        root = Node(Root(), [root])
    return Document(root)


def load_file(path: str | Path) -> Document:
    with open(path, encoding="utf-8") as f:
        try:
            source = f.read()
        except UnicodeDecodeError as e:
            raise DocumentError(f"{path} is not valid UTF-8: {e}") from e
    return load_document(source)
