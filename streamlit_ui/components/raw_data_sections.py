"""Raw extracted data tab: one card per section, with in-place editing.

The SectionController lives in session state per application. Widget
on_change callbacks parse the widget value and push it into the working copy
through controller.update_field(path, value).
"""
from typing import Any, Callable

import streamlit as st

from streamlit_ui.components.json_viewer import render_data
from streamlit_ui.components.section_controller import SectionController
from streamlit_ui.components.tree_editor import (
    ChoiceControl,
    Control,
    FieldGroup,
    ItemListControl,
    NumberControl,
    TextAreaControl,
    TextControl,
    build_control,
)
from streamlit_ui.utils.json_paths import format_key, path_token
from streamlit_ui.utils.notify import Notifier


def get_section_controller(
    application_id: str,
    raw: dict[str, Any],
    on_save: Callable[[dict[str, Any]], Any],
    notify: Notifier,
) -> SectionController:
    """Controller for this application, created once per session.

    Re-fetched data replaces the document even while a section is open, so a
    commit never writes back stale sections.
    """
    state_key = f"raw_sections:{application_id}"
    controller = st.session_state.get(state_key)
    if controller is None:
        controller = SectionController(raw, on_save=on_save, notify=notify)
        st.session_state[state_key] = controller
    elif controller.document != raw:
        controller.replace_document(raw)
    return controller


def _widget_key(application_id: str, control: Control) -> str:
    nonce = st.session_state.get("raw_sections_nonce", 0)
    return f"raw:{application_id}:{nonce}:{path_token(control.path)}"


def _on_change(controller: SectionController, control: Control, widget_key: str) -> None:
    controller.update_field(control.path, control.parse(st.session_state[widget_key]))


def _draw_control(controller: SectionController, application_id: str, control: Control, label: str) -> None:
    if isinstance(control, FieldGroup):
        nested = len(control.path) > 0
        with st.container(border=nested):
            for field in control.fields:
                _draw_control(controller, application_id, field.control, field.label)
        return

    if isinstance(control, ItemListControl):
        if not control.items:
            st.caption(f"{label}: none")
        for item in control.items:
            with st.container(border=True):
                st.markdown(f"**{item.title}**")
                for field in item.fields:
                    _draw_control(controller, application_id, field.control, field.label)
        return

    key = _widget_key(application_id, control)
    callback = dict(on_change=_on_change, args=(controller, control, key), key=key)
    if isinstance(control, TextAreaControl):
        st.text_area(label, value=control.display, height=max(68, 28 * control.rows), help="One entry per line", **callback)
    elif isinstance(control, ChoiceControl):
        st.radio(label, control.options, index=control.index, horizontal=True, **callback)
    elif isinstance(control, NumberControl):
        st.text_input(label, value=control.display, **callback)
    elif isinstance(control, TextControl):
        st.text_input(label, value=control.display, placeholder=control.placeholder, **callback)


def _begin(controller: SectionController, section_key: str) -> None:
    # Fresh widget keys so stale widget state from an earlier session is not reused
    st.session_state["raw_sections_nonce"] = st.session_state.get("raw_sections_nonce", 0) + 1
    controller.begin_edit(section_key)


def render_raw_data_sections(controller: SectionController, application_id: str) -> None:
    """Draw every section read-only, or as a form when it is the section under edit."""
    for section_key, section_value in controller.sections():
        editing = controller.is_editing(section_key)
        with st.container(border=True):
            head, actions = st.columns([4, 2])
            with head:
                st.subheader(format_key(section_key))
                st.caption(f"Raw extracted data for {section_key}")
            with actions:
                if editing:
                    save_col, cancel_col = st.columns(2)
                    save_col.button(
                        "Save", key=f"save_{section_key}", type="primary",
                        on_click=controller.commit_edit,
                    )
                    cancel_col.button("Cancel", key=f"cancel_{section_key}", on_click=controller.cancel_edit)
                else:
                    st.button(
                        "Edit", key=f"edit_{section_key}",
                        disabled=controller.editing_key is not None,
                        on_click=_begin, args=(controller, section_key),
                    )
            if editing:
                _draw_control(
                    controller, application_id,
                    build_control(controller.working_copy, ()),
                    format_key(section_key),
                )
            else:
                render_data(section_value)
