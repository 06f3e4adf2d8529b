"""Filters: create evaluation-weighting presets and choose the active one."""
import streamlit as st

from streamlit_ui.components.notifications import streamlit_notifier
from streamlit_ui.components.session import render_sidebar, require_login
from streamlit_ui.utils.filters import DIMENSIONS, FilterDimensions, FilterFormError, FilterRepository
from streamlit_ui.utils.kv_store import get_store
from streamlit_ui.utils.notify import SUCCESS

st.set_page_config(page_title="Filters | Pitch Deck Review", page_icon="🎚️", layout="wide")

user = require_login()
render_sidebar(user)

st.title("Filters")
st.caption("Custom evaluation filters. Rate each dimension from 0-100 based on importance.")

repo = FilterRepository(get_store())
defaults = FilterDimensions()


def _reset_dimensions() -> None:
    for dimension in DIMENSIONS:
        st.session_state[f"dim_{dimension}"] = getattr(defaults, dimension)


# --- Existing filters ---
st.subheader("Saved filters")
filters = repo.list_filters()
selected_id = repo.selected_id()
if not filters:
    st.caption("No filters yet.")
for f in filters:
    with st.container(border=True):
        c1, c2 = st.columns([5, 1])
        with c1:
            st.markdown(f"**{f.name}**" + ("  :green-background[Active]" if f.id == selected_id else ""))
            st.caption(f.custom_prompt)
            st.caption(" · ".join(f"{d.capitalize()} {getattr(f.dimensions, d)}" for d in DIMENSIONS))
        with c2:
            label = "Deselect" if f.id == selected_id else "Select"
            if st.button(label, key=f"toggle_{f.id}"):
                chosen = repo.toggle(f.id)
                streamlit_notifier(
                    SUCCESS,
                    f'"{chosen.name}" will be used for evaluations' if chosen else "No filter is currently active",
                )
                st.rerun()

# --- Create filter ---
st.divider()
st.subheader("Create New Filter")
st.caption("0 = Not important at all • 50 = Moderately important • 100 = Extremely important")
for dimension in DIMENSIONS:
    st.session_state.setdefault(f"dim_{dimension}", getattr(defaults, dimension))
st.button("Reset to Defaults", on_click=_reset_dimensions)
with st.form("create_filter_form"):
    name = st.text_input("Filter Name *", placeholder="Enter filter name", max_chars=50)
    custom_prompt = st.text_area("Custom Prompt *", placeholder="Enter your custom evaluation prompt...", max_chars=500)
    dimensions = {}
    for dimension in DIMENSIONS:
        dimensions[dimension] = st.slider(
            dimension.capitalize(), 0, 100, step=1,
            key=f"dim_{dimension}",
        )
    submitted = st.form_submit_button("Create Filter", type="primary")

if submitted:
    try:
        created = repo.create(name, custom_prompt, dimensions)
    except FilterFormError as e:
        for message in e.errors.values():
            st.error(message)
    else:
        streamlit_notifier(SUCCESS, f"Filter {created.name} created successfully")
        st.rerun()
