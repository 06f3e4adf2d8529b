"""Read-only projection of arbitrary JSON-like values into a display tree.

Dispatch order (first match wins):
  1. None / "null"            -> Placeholder("Not provided")
  2. list                     -> Placeholder("None") when empty,
                                 CardList when the items are objects,
                                 comma-joined Text otherwise
  3. bool                     -> Badge (Yes / No)
  4. dict                     -> EntryGroup of "Label: value" entries
  5. anything else            -> Text (integral floats without ".0")

The tree is drawn by streamlit_ui.components.json_viewer; render_text
flattens it to plain lines.
"""
import json
from dataclasses import dataclass, field
from typing import Any, Optional, Union

import structlog

from streamlit_ui.utils.json_paths import NONE_LABEL, NOT_PROVIDED, format_key, format_number, is_missing

logger = structlog.get_logger(__name__)

DEFAULT_MAX_DEPTH = 64


class UnrenderableValueError(ValueError):
    """Base for values that cannot be projected into a display or control tree."""


class CyclicValueError(UnrenderableValueError):
    """Raised when a value references itself."""


class DepthLimitError(UnrenderableValueError):
    """Raised when an acyclic value nests deeper than the render limit."""


@dataclass(frozen=True)
class Placeholder:
    text: str


@dataclass(frozen=True)
class Text:
    text: str


@dataclass(frozen=True)
class Badge:
    value: bool

    @property
    def label(self) -> str:
        return "Yes" if self.value else "No"


@dataclass(frozen=True)
class Entry:
    label: str
    value: "DisplayNode"


@dataclass(frozen=True)
class EntryGroup:
    entries: tuple[Entry, ...]
    depth: int = 0


@dataclass(frozen=True)
class Card:
    title: str
    entries: tuple[Entry, ...] = ()
    body: Optional["DisplayNode"] = None


@dataclass(frozen=True)
class CardList:
    cards: tuple[Card, ...] = field(default_factory=tuple)


DisplayNode = Union[Placeholder, Text, Badge, EntryGroup, CardList]


def render_value(value: Any, max_depth: int = DEFAULT_MAX_DEPTH) -> DisplayNode:
    """Project value into a display tree.

    Raises CyclicValueError on self-referencing input and DepthLimitError
    past max_depth.
    """
    return _render(value, depth=0, ancestors=(), max_depth=max_depth)


def _render(value: Any, depth: int, ancestors: tuple[int, ...], max_depth: int) -> DisplayNode:
    if is_missing(value):
        return Placeholder(NOT_PROVIDED)

    if isinstance(value, (dict, list)):
        if id(value) in ancestors:
            logger.warning("render_cycle_detected", depth=depth, kind=type(value).__name__)
            raise CyclicValueError(f"Value references itself at depth {depth}")
        if depth >= max_depth:
            raise DepthLimitError(f"Value nests deeper than {max_depth} levels")
        ancestors = ancestors + (id(value),)

    if isinstance(value, list):
        if not value:
            return Placeholder(NONE_LABEL)
        if isinstance(value[0], dict):
            cards = []
            for index, item in enumerate(value):
                title = f"Item {index + 1}"
                if isinstance(item, dict):
                    entries = _entries(item, depth + 1, ancestors, max_depth)
                    cards.append(Card(title=title, entries=entries))
                else:
                    cards.append(Card(title=title, body=_render(item, depth + 1, ancestors, max_depth)))
            return CardList(cards=tuple(cards))
        return Text(", ".join(_item_text(item) for item in value))

    if isinstance(value, bool):
        return Badge(value)

    if isinstance(value, dict):
        return EntryGroup(entries=_entries(value, depth + 1, ancestors, max_depth), depth=depth)

    if isinstance(value, (int, float)):
        return Text(format_number(value))
    return Text(str(value))


def _entries(mapping: dict, depth: int, ancestors: tuple[int, ...], max_depth: int) -> tuple[Entry, ...]:
    return tuple(
        Entry(label=format_key(key), value=_render(val, depth, ancestors, max_depth))
        for key, val in mapping.items()
    )


def _item_text(item: Any) -> str:
    # Array.join semantics: null items become empty strings, booleans lower-case
    if item is None:
        return ""
    if isinstance(item, bool):
        return "true" if item else "false"
    if isinstance(item, (int, float)):
        return format_number(item)
    if isinstance(item, (dict, list)):
        try:
            return json.dumps(item, ensure_ascii=False, default=str)
        except ValueError as e:
            raise CyclicValueError("List item references itself") from e
        except RecursionError as e:
            raise DepthLimitError("List item nests too deeply to display") from e
    return str(item)


def render_text(node: DisplayNode, indent: int = 0) -> list[str]:
    """Flatten a display tree into indented plain-text lines."""
    pad = "  " * indent
    if isinstance(node, (Placeholder, Text)):
        return [pad + node.text]
    if isinstance(node, Badge):
        return [pad + node.label]
    if isinstance(node, EntryGroup):
        return _entry_lines(node.entries, indent)
    if isinstance(node, CardList):
        lines: list[str] = []
        for card in node.cards:
            lines.append(f"{pad}[{card.title}]")
            if card.body is not None:
                lines.extend(render_text(card.body, indent + 1))
            lines.extend(_entry_lines(card.entries, indent + 1))
        return lines
    raise TypeError(f"Unknown display node: {node!r}")


def _entry_lines(entries: tuple[Entry, ...], indent: int) -> list[str]:
    pad = "  " * indent
    lines: list[str] = []
    for entry in entries:
        child = entry.value
        if isinstance(child, (Placeholder, Text, Badge)):
            lines.append(f"{pad}{entry.label}: {render_text(child)[0]}")
        else:
            lines.append(f"{pad}{entry.label}:")
            lines.extend(render_text(child, indent + 1))
    return lines


def contains_placeholder(node: DisplayNode, text: str = NOT_PROVIDED) -> bool:
    """True when any Placeholder with the given text appears in the tree."""
    if isinstance(node, Placeholder):
        return node.text == text
    if isinstance(node, EntryGroup):
        return any(contains_placeholder(e.value, text) for e in node.entries)
    if isinstance(node, CardList):
        for card in node.cards:
            if card.body is not None and contains_placeholder(card.body, text):
                return True
            if any(contains_placeholder(e.value, text) for e in card.entries):
                return True
    return False
