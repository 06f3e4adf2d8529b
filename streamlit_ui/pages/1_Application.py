"""Application detail: scores, enriched data, editable raw data, notes and processing actions."""
from datetime import datetime
from typing import Any

import streamlit as st

from streamlit_ui.components.api_client import (
    ApiError,
    NotFound,
    get_application,
    save_raw_data,
    trigger_action,
    upload_pitch_deck,
)
from streamlit_ui.components.json_viewer import render_data, render_json
from streamlit_ui.components.notifications import streamlit_notifier
from streamlit_ui.components.raw_data_sections import get_section_controller, render_raw_data_sections
from streamlit_ui.components.session import render_sidebar, require_login
from streamlit_ui.utils.applications import (
    ENRICHED_DIMENSIONS,
    SCORE_DIMENSIONS,
    dimension_result,
    normalize_application,
    score_color,
    score_label,
    status_label,
)
from streamlit_ui.utils.json_paths import format_key
from streamlit_ui.utils.notify import ERROR, SUCCESS

st.set_page_config(page_title="Application | Pitch Deck Review", page_icon="📑", layout="wide")

user = require_login()
render_sidebar(user)

ACTION_LABELS = {
    "extract": ("Trigger Data Extract", "Extracting latest data from source..."),
    "enhance": ("Trigger Data Enhancement", "Enhancing data with external sources..."),
    "evaluate": ("Trigger Evaluation", "Running evaluation models..."),
}

application_id = st.query_params.get("id") or st.session_state.get("selected_application_id")
if not application_id:
    st.title("Application")
    typed = st.text_input("Application ID")
    if st.button("Open") and typed.strip():
        st.query_params["id"] = typed.strip()
        st.rerun()
    st.page_link("main.py", label="Back to Dashboard", icon="⬅️")
    st.stop()

st.query_params["id"] = application_id
cache_key = f"app_detail:{application_id}"


def _invalidate() -> None:
    st.session_state.pop(cache_key, None)


def _load() -> dict[str, Any]:
    if cache_key not in st.session_state:
        st.session_state[cache_key] = normalize_application(get_application(application_id))
    return st.session_state[cache_key]


st.page_link("main.py", label="Back to Dashboard", icon="⬅️")

try:
    app = _load()
except NotFound:
    st.error("Application not found")
    st.stop()
except ApiError as e:
    st.error(f"Failed to load application: {e}")
    st.stop()


def _save_raw(updated_raw: dict[str, Any]) -> None:
    """Persistence callback for the section editor."""
    save_raw_data(application_id, updated_raw)
    cached = st.session_state.get(cache_key)
    if cached is not None:
        cached["raw"] = updated_raw
    streamlit_notifier(SUCCESS, "Raw data updated successfully")


def _start_action(action: str) -> None:
    st.session_state["processing_action"] = action


# --- Header ---
st.title(app.get("startup_name") or "Unknown Company")
h1, h2, h3 = st.columns(3)
h1.metric("Status", status_label(app.get("status")))
h2.metric("Score", score_label(app.get("score")))
with h3:
    website = app.get("website_url")
    st.markdown(f"**Website:** {website}" if website else "**Website:** Not provided")
    if app.get("contact_name") or app.get("contact_email"):
        st.caption(f"{app.get('contact_name') or ''} {app.get('contact_email') or ''}".strip())
updated_at = app.get("last_updated_at")
if updated_at:
    try:
        updated_at = datetime.fromisoformat(str(updated_at).replace("Z", "+00:00")).strftime("%Y-%m-%d %H:%M")
    except ValueError:
        pass
    st.caption(f"Last updated: {updated_at}")

# --- Actions ---
processing = st.session_state.get("processing_action")
cols = st.columns(4)
for col, (action, (label, _)) in zip(cols, ACTION_LABELS.items()):
    col.button(label, key=f"action_{action}", disabled=bool(processing), on_click=_start_action, args=(action,))
with cols[3]:
    if st.button("Refresh", disabled=bool(processing)):
        _invalidate()
        st.rerun()

if processing:
    with st.spinner(ACTION_LABELS[processing][1]):
        try:
            trigger_action(application_id, processing)
        except ApiError:
            streamlit_notifier(ERROR, f"Failed to trigger {processing}")
        else:
            streamlit_notifier(SUCCESS, f"The {processing} process has completed. Refreshing data...")
            _invalidate()
        finally:
            st.session_state["processing_action"] = None
    st.rerun()

with st.expander("Upload new pitch deck"):
    st.caption("Upload a new version of the pitch deck (PDF format only)")
    deck = st.file_uploader("Pitch deck", type=["pdf"], key=f"upload_{application_id}", label_visibility="collapsed")
    if st.button("Upload", disabled=deck is None):
        try:
            upload_pitch_deck(application_id, deck.name, deck.getvalue())
        except ApiError:
            streamlit_notifier(ERROR, "Failed to upload pitch deck")
        else:
            streamlit_notifier(SUCCESS, "Pitch deck updated successfully. Refreshing data...")
            _invalidate()
        st.rerun()

issues = app.get("issues") or []
notes_label = f"Notes ({len(issues)})" if issues else "Notes"
overview_tab, enriched_tab, raw_tab, notes_tab = st.tabs(
    ["Overview & Scores", "Enriched Data", "Raw Extracted Data", notes_label]
)

with overview_tab:
    results = app.get("results") or {}
    st.subheader("Summary")
    if results:
        st.write("Evaluation completed with detailed scoring across all dimensions.")
    else:
        st.caption("No summary available. Please trigger an evaluation.")
    grid = st.columns(3)
    for i, dimension in enumerate(SCORE_DIMENSIONS):
        result = dimension_result(results, dimension)
        with grid[i % 3]:
            with st.container(border=True):
                st.markdown(f"**{dimension.capitalize()}**")
                if result is None:
                    st.markdown("### :gray[Pending]")
                    st.caption("Evaluation pending")
                    st.caption("0% confidence")
                    continue
                score = result["score"] or 0
                st.markdown(f"### :{score_color(score)}[{score}]")
                st.progress(min(max(score * 10, 0), 100) / 100)
                st.caption(result["summary"])
                st.caption(f"{result['confidence']}% confidence")

with enriched_tab:
    enriched = app.get("enriched") or {}
    if not enriched:
        st.caption("No enriched data available. Trigger data enhancement to populate this tab.")
    for dimension in ENRICHED_DIMENSIONS:
        data = enriched.get(dimension)
        if not data:
            continue
        with st.container(border=True):
            st.subheader(f"{format_key(dimension)} (Enriched)")
            st.caption(f"AI-enhanced {dimension} intelligence")
            render_data(data)
    if enriched:
        render_json(enriched)

with raw_tab:
    controller = get_section_controller(application_id, app["raw"], on_save=_save_raw, notify=streamlit_notifier)
    render_raw_data_sections(controller, application_id)
    render_json(controller.document)

with notes_tab:
    st.subheader("Issues & Action Items")
    st.caption("Identified issues and manual action items during processing")
    if not issues:
        st.caption("No issues or action items")
    for issue in issues:
        text = issue if isinstance(issue, str) else issue.get("description") or str(issue)
        st.warning(text, icon="⚠️")
