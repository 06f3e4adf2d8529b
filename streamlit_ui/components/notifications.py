"""Toast notifications that survive st.rerun().

Messages are queued in session state and shown by flush_notifications() at
the top of the next script run.
"""
import streamlit as st

from streamlit_ui.utils.notify import ERROR, SUCCESS, log_notifier

_QUEUE_KEY = "_pending_toasts"
_ICONS = {SUCCESS: "✅", ERROR: "⚠️"}


def streamlit_notifier(severity: str, message: str) -> None:
    """Notifier for the dashboard: log, then queue a toast."""
    log_notifier(severity, message)
    st.session_state.setdefault(_QUEUE_KEY, []).append((severity, message))


def flush_notifications() -> None:
    for severity, message in st.session_state.pop(_QUEUE_KEY, []):
        st.toast(message, icon=_ICONS.get(severity, "ℹ️"))
