"""Section-level edit sessions over an application's raw extracted data.

The controller owns the authoritative document (section name -> value) and
at most one working copy. States:

  VIEWING            no section editable (initial)
  EDITING(section)   working copy = deep clone of document[section]

begin_edit / cancel_edit / commit_edit move between them; update_field
applies path-addressed edits to the working copy. Persistence is delegated
to the on_save callback and failures are reported through the notifier.
"""
import copy
from enum import Enum
from typing import Any, Callable, Iterator, Optional

import structlog

from streamlit_ui.components.tree_editor import apply_update
from streamlit_ui.utils.json_paths import Path, format_path
from streamlit_ui.utils.notify import ERROR, Notifier, log_notifier

logger = structlog.get_logger(__name__)

SaveCallback = Callable[[dict[str, Any]], Any]


class EditState(str, Enum):
    VIEWING = "viewing"
    EDITING = "editing"


class EditSessionError(RuntimeError):
    """Raised on a transition the current edit state does not allow."""


class SectionController:
    """Edit one top-level section of a document at a time."""

    def __init__(
        self,
        document: dict[str, Any],
        on_save: SaveCallback,
        notify: Optional[Notifier] = None,
    ):
        self._document = dict(document)
        self._on_save = on_save
        self._notify = notify or log_notifier
        self._editing: Optional[str] = None
        self._working_copy: Any = None

    @property
    def document(self) -> dict[str, Any]:
        return self._document

    @property
    def state(self) -> EditState:
        return EditState.EDITING if self._editing is not None else EditState.VIEWING

    @property
    def editing_key(self) -> Optional[str]:
        return self._editing

    @property
    def working_copy(self) -> Any:
        if self._editing is None:
            raise EditSessionError("No section is being edited")
        return self._working_copy

    def is_editing(self, section_key: str) -> bool:
        return self._editing == section_key

    def sections(self) -> Iterator[tuple[str, Any]]:
        yield from self._document.items()

    def replace_document(self, document: dict[str, Any]) -> None:
        """Swap in a re-fetched document.

        An open edit session keeps its working copy while its section still
        exists, so a later commit merges into the fresh document; it is
        dropped when the section is gone.
        """
        self._document = dict(document)
        if self._editing is not None and self._editing not in self._document:
            logger.info("edit_session_dropped", section=self._editing, reason="section_removed")
            self._editing = None
            self._working_copy = None

    def begin_edit(self, section_key: str) -> Any:
        """Start editing section_key and return its working copy."""
        if self._editing is not None:
            raise EditSessionError(
                f"Section '{self._editing}' is already being edited; save or cancel it first"
            )
        if section_key not in self._document:
            raise KeyError(section_key)
        self._working_copy = copy.deepcopy(self._document[section_key])
        self._editing = section_key
        logger.info("edit_session_started", section=section_key)
        return self._working_copy

    def update_field(self, path: Path, value: Any) -> Any:
        """Assign value at path inside the working copy (clone-and-replace)."""
        if self._editing is None:
            raise EditSessionError("Cannot update a field while no section is being edited")
        self._working_copy = apply_update(self._working_copy, tuple(path), value)
        logger.debug("working_copy_updated", section=self._editing, path=format_path(tuple(path)))
        return self._working_copy

    def cancel_edit(self) -> None:
        if self._editing is None:
            raise EditSessionError("Cannot cancel: no section is being edited")
        logger.info("edit_session_cancelled", section=self._editing)
        self._editing = None
        self._working_copy = None

    def commit_edit(self) -> bool:
        """Merge the working copy into a new document and hand it to on_save.

        Returns True when on_save completed. The session closes either way; on
        failure the document keeps its pre-commit value and the error goes to
        the notifier.
        """
        if self._editing is None:
            raise EditSessionError("Cannot save: no section is being edited")
        section_key = self._editing
        updated = {**self._document, section_key: self._working_copy}
        self._editing = None
        self._working_copy = None
        try:
            self._on_save(updated)
        except Exception as e:
            logger.warning("edit_session_commit_failed", section=section_key, error=str(e))
            self._notify(ERROR, "Failed to save changes")
            return False
        self._document = updated
        logger.info("edit_session_committed", section=section_key)
        return True
