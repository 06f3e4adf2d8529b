"""
Pitch Deck Review: dashboard (application list).

Run from project root: streamlit run streamlit_ui/main.py
Set STREAMLIT_API_URL to use a different proxy API (default: http://localhost:8000)
"""
import sys
from pathlib import Path

# Ensure project root is on path when run as "streamlit run main.py" from streamlit_ui/
_root = Path(__file__).resolve().parent.parent
if str(_root) not in sys.path:
    sys.path.insert(0, str(_root))

import streamlit as st

from app.models.application import ApplicationFormError
from streamlit_ui.components.api_client import ApiError, create_application, get_applications, get_client
from streamlit_ui.components.notifications import streamlit_notifier
from streamlit_ui.components.session import render_sidebar, require_login
from streamlit_ui.utils.applications import STATUS_OPTIONS, score_label, status_label, summarize_application
from streamlit_ui.utils.config import get_api_url
from streamlit_ui.utils.notify import ERROR, SUCCESS

st.set_page_config(
    page_title="Pitch Deck Review",
    page_icon="📑",
    layout="wide",
    initial_sidebar_state="expanded",
)

user = require_login()
render_sidebar(user)

st.title("Dashboard")
st.caption("AI-generated evaluations of submitted pitch decks")


def _open_application(application_id: str) -> None:
    st.session_state["selected_application_id"] = application_id
    st.switch_page("pages/1_Application.py")


def _create_form() -> None:
    with st.form("add_application_form", clear_on_submit=False):
        startup_name = st.text_input("Startup Name *", placeholder="Enter startup name", max_chars=100)
        contact_name = st.text_input("Contact Name *", placeholder="Enter contact person name", max_chars=50)
        contact_email = st.text_input("Contact Email *", placeholder="Enter contact email", max_chars=100)
        website_url = st.text_input("Website URL *", placeholder="Enter website URL", max_chars=200)
        upload = st.file_uploader("Pitch Deck (PDF) *", type=["pdf"])
        col1, col2, _ = st.columns(3)
        with col1:
            submitted = st.form_submit_button("Create Application", type="primary")
        with col2:
            cancel = st.form_submit_button("Cancel")
    if cancel:
        st.session_state["show_add_application"] = False
        st.rerun()
    if not submitted:
        return
    try:
        create_application(
            startup_name=startup_name,
            contact_name=contact_name,
            contact_email=contact_email,
            website_url=website_url,
            filename=upload.name if upload else None,
            content=upload.getvalue() if upload else None,
            content_type=upload.type if upload else None,
        )
    except ApplicationFormError as e:
        for field, message in e.errors.items():
            st.error(f"{field.replace('_', ' ').capitalize()}: {message}")
        return
    except ApiError:
        streamlit_notifier(ERROR, "Failed to create application. Please try again.")
        st.rerun()
    streamlit_notifier(SUCCESS, "Application created successfully")
    st.session_state["show_add_application"] = False
    st.rerun()


if st.button("Add New Application", type="primary"):
    st.session_state["show_add_application"] = True

if st.session_state.get("show_add_application"):
    if hasattr(st, "dialog"):

        def _clear_add_modal():
            st.session_state["show_add_application"] = False

        @st.dialog("Add New Application", dismissible=True, on_dismiss=_clear_add_modal)
        def _add_application_modal():
            st.caption("Create a new pitch deck application")
            _create_form()

        _add_application_modal()
    else:
        with st.expander("Add New Application", expanded=True):
            _create_form()

# --- Filters ---
f1, f2 = st.columns([1, 3])
with f1:
    status_filter = st.selectbox("Status", STATUS_OPTIONS, format_func=lambda s: "All" if s == "all" else s.capitalize())
with f2:
    search = st.text_input("Search", placeholder="Search by company or contact")

client = get_client()
error = None
applications: list[dict] = []
metrics = {"total": 0, "submitted": 0, "completed": 0}
try:
    data = get_applications(client, status=status_filter, search=search.strip() or None)
    applications = [summarize_application(a) for a in data.get("applications") or []]
    metrics = data.get("status") or metrics
except ApiError as e:
    error = f"Failed to load applications. Please check if the API is available. ({e})"
finally:
    client.close()

st.caption("🔴 API Error" if error else "🟢 Live Data")
if error:
    st.error(error)
    st.info(f"API URL: {get_api_url()}")

m1, m2, m3 = st.columns(3)
m1.metric("Total Applications", metrics.get("total", 0))
m2.metric("Submitted", metrics.get("submitted", 0))
m3.metric("Completed", metrics.get("completed", 0))

# --- Recent applications ---
recent = applications[:4]
if recent:
    st.subheader("Recent Applications")
    cols = st.columns(len(recent))
    for col, a in zip(cols, recent):
        with col:
            with st.container(border=True):
                st.markdown(f"**{a['company_name']}**")
                st.caption(f"{status_label(a['status'])} · {a['submitted_at']}")
                if st.button("Open", key=f"recent_{a['id']}"):
                    _open_application(a["id"])

# --- All applications ---
st.subheader("All Applications")
if applications:
    widths = [3, 3, 2, 1, 2, 1]
    header = st.columns(widths)
    for col, title in zip(header, ["Company", "Contact", "Status", "Score", "Submitted", ""]):
        col.markdown(f"**{title}**")
    for a in applications:
        row = st.columns(widths)
        row[0].text(a["company_name"])
        row[1].text(a["contact_name"] or a["contact_email"] or "")
        row[2].text(status_label(a["status"]))
        row[3].text(score_label(a["overall_score"]))
        row[4].text(a["submitted_at"])
        with row[5]:
            if st.button("View", key=f"view_{a['id']}"):
                _open_application(a["id"])
elif not error:
    st.caption("No applications found.")
