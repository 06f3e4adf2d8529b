"""Tests for the raw data tab wiring: buttons, widget callbacks and re-fetches."""
import pytest
from streamlit.testing.v1 import AppTest

CONTROLLER_KEY = "raw_sections:app-001"


def raw_sections_page():
    import streamlit as st

    from streamlit_ui.components.raw_data_sections import get_section_controller, render_raw_data_sections

    st.session_state.setdefault("saved", [])
    controller = get_section_controller(
        "app-001",
        st.session_state["raw"],
        on_save=st.session_state["saved"].append,
        notify=lambda level, message: None,
    )
    render_raw_data_sections(controller, "app-001")


def _page(raw):
    at = AppTest.from_function(raw_sections_page, default_timeout=30)
    at.session_state["raw"] = raw
    return at.run()


def _text_input(at, label):
    return next(w for w in at.text_input if w.label == label)


class TestEditFlow:
    """Tests for Edit / Save / Cancel through the widgets."""

    def test_edit_and_save_section(self, sample_raw):
        at = _page(sample_raw)
        at.button(key="edit_market").click().run()
        assert at.session_state[CONTROLLER_KEY].is_editing("market")

        _text_input(at, "Tam").input("$300B").run()
        at.button(key="save_market").click().run()

        assert not at.exception
        saved = at.session_state["saved"]
        assert len(saved) == 1
        assert saved[0]["market"]["tam"] == "$300B"
        assert saved[0]["founders"] == sample_raw["founders"]
        assert at.session_state[CONTROLLER_KEY].editing_key is None

    def test_cancel_discards_typed_value(self, sample_raw):
        at = _page(sample_raw)
        at.button(key="edit_market").click().run()
        _text_input(at, "Tam").input("$1T").run()
        at.button(key="cancel_market").click().run()

        assert not at.exception
        assert at.session_state["saved"] == []
        controller = at.session_state[CONTROLLER_KEY]
        assert controller.editing_key is None
        assert controller.document["market"]["tam"] == "$256B"

    def test_other_sections_locked_while_editing(self, sample_raw):
        at = _page(sample_raw)
        assert at.button(key="edit_product").disabled is False

        at.button(key="edit_market").click().run()
        assert at.button(key="edit_product").disabled is True
        assert at.button(key="edit_founders").disabled is True

        at.button(key="cancel_market").click().run()
        assert at.button(key="edit_product").disabled is False


class TestRefetchDuringEdit:
    """Tests for data re-fetched while a section is open."""

    def test_commit_keeps_refetched_sections(self, sample_raw):
        at = _page(sample_raw)
        at.button(key="edit_market").click().run()

        at.session_state["raw"] = {**sample_raw, "founders": ["NEW extracted"]}
        at.run()
        assert at.session_state[CONTROLLER_KEY].is_editing("market")

        _text_input(at, "Tam").input("$300B").run()
        at.button(key="save_market").click().run()

        assert not at.exception
        saved = at.session_state["saved"][-1]
        assert saved["founders"] == ["NEW extracted"]
        assert saved["market"]["tam"] == "$300B"

    def test_refetch_without_open_section_closes_session(self, sample_raw):
        at = _page(sample_raw)
        at.button(key="edit_market").click().run()

        at.session_state["raw"] = {"product": sample_raw["product"]}
        at.run()

        assert not at.exception
        assert at.session_state[CONTROLLER_KEY].editing_key is None
        assert at.button(key="edit_product").disabled is False


class TestWidgetKeys:
    """Tests for keys of the widgets drawn for a section."""

    @pytest.fixture
    def dotted_raw(self):
        return {"traction": {"a.b": "x", "a": {"b": "y"}}}

    def test_dotted_key_and_nested_key_get_distinct_widgets(self, dotted_raw):
        at = _page(dotted_raw)
        at.button(key="edit_traction").click().run()

        assert not at.exception
        assert sorted(w.value for w in at.text_input) == ["x", "y"]

    def test_dotted_key_edit_lands_on_its_own_path(self, dotted_raw):
        at = _page(dotted_raw)
        at.button(key="edit_traction").click().run()
        _text_input(at, "B").input("z").run()
        at.button(key="save_traction").click().run()

        assert not at.exception
        assert at.session_state["saved"][-1] == {"traction": {"a.b": "x", "a": {"b": "z"}}}
