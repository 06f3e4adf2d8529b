"""Streamlit drawing of read-only JSON values (tree renderer output) and raw JSON."""
import json
import streamlit as st
from typing import Any

from streamlit_ui.components.tree_renderer import (
    Badge,
    CardList,
    DisplayNode,
    Entry,
    EntryGroup,
    Placeholder,
    Text,
    render_value,
)

_MD_SPECIAL = "\\`*_{}[]<>()#+-.!|$~:"


def _escape_md(text: str) -> str:
    return "".join("\\" + ch if ch in _MD_SPECIAL else ch for ch in text)


def _inline(node: DisplayNode) -> str:
    """Markdown for a scalar node."""
    if isinstance(node, Placeholder):
        return f":gray[*{_escape_md(node.text)}*]"
    if isinstance(node, Badge):
        return ":green-background[Yes]" if node.value else ":gray-background[No]"
    return _escape_md(node.text)


def _draw_entries(entries: tuple[Entry, ...]) -> None:
    for entry in entries:
        child = entry.value
        if isinstance(child, (Placeholder, Text, Badge)):
            st.markdown(f"**{_escape_md(entry.label)}:** {_inline(child)}")
        else:
            st.markdown(f"**{_escape_md(entry.label)}:**")
            draw_node(child)


def draw_node(node: DisplayNode) -> None:
    """Draw a display tree. Nested objects and cards get a bordered container."""
    if isinstance(node, (Placeholder, Text, Badge)):
        st.markdown(_inline(node))
    elif isinstance(node, EntryGroup):
        if node.depth == 0:
            _draw_entries(node.entries)
        else:
            with st.container(border=True):
                _draw_entries(node.entries)
    elif isinstance(node, CardList):
        for card in node.cards:
            with st.container(border=True):
                st.caption(card.title)
                if card.body is not None:
                    draw_node(card.body)
                _draw_entries(card.entries)


def render_data(value: Any) -> None:
    """Render any JSON-like value read-only."""
    draw_node(render_value(value))


def render_json(data: Any, label: str = "View as JSON", expanded: bool = False) -> None:
    """
    Render dict/list as JSON in an expander (st.json + copyable code block).
    Use for "View as JSON" next to formatted views.
    """
    if data is None:
        st.caption("No data")
        return
    try:
        json_str = json.dumps(data, indent=2, default=str)
    except (TypeError, ValueError):
        json_str = str(data)
    with st.expander(label, expanded=expanded):
        st.json(data if isinstance(data, (dict, list)) else {"raw": json_str})
        st.code(json_str, language="json")
