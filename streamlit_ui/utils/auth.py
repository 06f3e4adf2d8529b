"""Reviewer session kept in the local store. Any non-empty name logs in."""
import logging
from typing import Optional

from streamlit_ui.utils.kv_store import KeyValueStore

logger = logging.getLogger(__name__)

AUTH_FLAG_KEY = "isAuthenticated"
USERNAME_KEY = "username"


class ReviewerSession:
    def __init__(self, store: KeyValueStore):
        self.store = store

    def current_user(self) -> Optional[str]:
        """Logged-in reviewer name, or None."""
        if self.store.get(AUTH_FLAG_KEY) != "true":
            return None
        return self.store.get(USERNAME_KEY) or None

    def login(self, username: str) -> str:
        name = (username or "").strip()
        if not name:
            raise ValueError("Username is required")
        self.store.set(AUTH_FLAG_KEY, "true")
        self.store.set(USERNAME_KEY, name)
        logger.info(f"Reviewer {name} logged in")
        return name

    def logout(self) -> None:
        user = self.current_user()
        self.store.delete(AUTH_FLAG_KEY)
        self.store.delete(USERNAME_KEY)
        if user:
            logger.info(f"Reviewer {user} logged out")
