"""Logs: recent log lines from the proxy API."""
import streamlit as st

from streamlit_ui.components.api_client import ApiError, get_backend_logs, get_client
from streamlit_ui.components.session import render_sidebar, require_login

st.set_page_config(page_title="Logs | Pitch Deck Review", page_icon="📋", layout="wide")

user = require_login()
render_sidebar(user)

st.title("Logs")
st.caption("Recent application logs from the proxy API. Click Refresh to update.")

# Fetch when Refresh is clicked (no auto-polling)
if st.button("Refresh logs", key="logs_refresh"):
    st.rerun()

client = get_client()
try:
    data = get_backend_logs(client=client)
    lines = data.get("lines") or []
except ApiError:
    lines = ["(Could not fetch logs. Is the API running?)"]
finally:
    client.close()

st.text_area(
    "Log output",
    value="\n".join(lines) if lines else "(no log lines yet)",
    height=480,
    disabled=True,
    label_visibility="collapsed",
    key="log_output",
)
