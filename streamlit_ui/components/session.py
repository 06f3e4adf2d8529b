"""Login gate and the shared sidebar (reviewer, active evaluation filter)."""
import streamlit as st

from streamlit_ui.components.notifications import flush_notifications, streamlit_notifier
from streamlit_ui.utils.auth import ReviewerSession
from streamlit_ui.utils.filters import FilterRepository
from streamlit_ui.utils.kv_store import get_store
from streamlit_ui.utils.notify import INFO


def require_login() -> str:
    """Return the logged-in reviewer, or show the login form and stop the script."""
    flush_notifications()
    session = ReviewerSession(get_store())
    user = session.current_user()
    if user:
        return user
    st.title("Sign in")
    with st.form("login_form"):
        username = st.text_input("Name", placeholder="Your name")
        submitted = st.form_submit_button("Sign in", type="primary")
    if submitted:
        try:
            session.login(username)
        except ValueError as e:
            st.error(str(e))
        else:
            st.rerun()
    st.stop()


def _toggle_filter(repo: FilterRepository, filter_id: str) -> None:
    chosen = repo.toggle(filter_id)
    if chosen is None:
        streamlit_notifier(INFO, "Filter deselected. No filter is currently active")
    else:
        streamlit_notifier(INFO, f'"{chosen.name}" will be used for evaluations')


def _logout() -> None:
    ReviewerSession(get_store()).logout()


def render_sidebar(user: str) -> None:
    repo = FilterRepository(get_store())
    with st.sidebar:
        st.markdown(f"Signed in as **{user}**")
        st.button("Log out", key="sidebar_logout", on_click=_logout)
        st.divider()
        st.markdown("**Filters**")
        filters = repo.list_filters()
        selected_id = repo.selected_id()
        if not filters:
            st.caption("No filters yet. Create one on the Filters page.")
        for f in filters:
            active = f.id == selected_id
            st.button(
                f"{'✓ ' if active else ''}{f.name}",
                key=f"sidebar_filter_{f.id}",
                type="primary" if active else "secondary",
                on_click=_toggle_filter,
                args=(repo, f.id),
                use_container_width=True,
            )
