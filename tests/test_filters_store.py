"""Tests for the local key-value stores, evaluation filters and reviewer session."""
import json
import pytest
import fakeredis

from streamlit_ui.utils.auth import ReviewerSession
from streamlit_ui.utils.filters import (
    FILTERS_KEY,
    SELECTED_FILTER_KEY,
    FilterFormError,
    FilterRepository,
)
from streamlit_ui.utils.kv_store import JsonFileStore, RedisStore


@pytest.fixture(params=["file", "redis"])
def store(request, file_store, redis_store):
    """Both store backends; behaviour must match."""
    return file_store if request.param == "file" else redis_store


class TestKeyValueStores:
    """Tests shared by both store backends."""

    def test_get_missing(self, store):
        assert store.get("nope") is None

    def test_set_then_get(self, store):
        assert store.set("k", "v") is True
        assert store.get("k") == "v"

    def test_delete(self, store):
        store.set("k", "v")
        assert store.delete("k") is True
        assert store.get("k") is None
        assert store.delete("k") is False


class TestJsonFileStore:
    """Tests for the file-backed store."""

    def test_persists_across_instances(self, tmp_path):
        path = tmp_path / "nested" / "store.json"
        JsonFileStore(path).set("username", "ada")
        assert JsonFileStore(path).get("username") == "ada"
        assert json.loads(path.read_text()) == {"username": "ada"}

    def test_corrupt_file_reads_as_empty(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("{not json")
        store = JsonFileStore(path)
        assert store.get("anything") is None
        store.set("k", "v")
        assert store.get("k") == "v"


class TestRedisStore:
    """Tests for the Redis-backed store."""

    def test_keys_are_prefixed(self):
        client = fakeredis.FakeRedis(decode_responses=True)
        RedisStore(client, prefix="review").set("username", "ada")
        assert client.get("review:username") == "ada"

    def test_bytes_are_decoded(self):
        store = RedisStore(fakeredis.FakeRedis())
        store.set("k", "v")
        assert store.get("k") == "v"


class TestFilterRepository:
    """Tests for evaluation filter presets."""

    def test_create_with_defaults(self, store):
        repo = FilterRepository(store)
        created = repo.create("Deep tech", "Favour strong IP")
        assert created.dimensions.founders == 75
        assert created.dimensions.vision == 10
        assert repo.list_filters() == [created]

    def test_stored_with_camel_case_prompt(self, store):
        FilterRepository(store).create("Deep tech", "Favour strong IP", {"market": 90})
        stored = json.loads(store.get(FILTERS_KEY))
        assert stored[0]["customPrompt"] == "Favour strong IP"
        assert stored[0]["dimensions"]["market"] == 90

    def test_ids_are_unique(self, store):
        repo = FilterRepository(store)
        first = repo.create("One", "p")
        second = repo.create("Two", "p")
        assert first.id != second.id

    @pytest.mark.parametrize("name,prompt,field,message", [
        ("", "p", "name", "Filter name is required"),
        ("n" * 51, "p", "name", "Name must be less than 50 characters"),
        ("Name", "  ", "custom_prompt", "Custom prompt is required"),
        ("Name", "p" * 501, "custom_prompt", "Custom prompt must be less than 500 characters"),
    ])
    def test_validation(self, store, name, prompt, field, message):
        with pytest.raises(FilterFormError) as exc_info:
            FilterRepository(store).create(name, prompt)
        assert exc_info.value.errors[field] == message
        assert store.get(FILTERS_KEY) is None

    def test_dimension_out_of_range(self, store):
        with pytest.raises(FilterFormError) as exc_info:
            FilterRepository(store).create("Name", "p", {"founders": 101})
        assert exc_info.value.errors == {"dimensions": "Each dimension must be between 0 and 100"}

    def test_toggle_selects_then_deselects(self, store):
        repo = FilterRepository(store)
        created = repo.create("Deep tech", "p")
        assert repo.toggle(created.id) == created
        assert repo.selected() == created
        assert repo.toggle(created.id) is None
        assert repo.selected_id() is None

    def test_toggle_switches_selection(self, store):
        repo = FilterRepository(store)
        a = repo.create("A", "p")
        b = repo.create("B", "p")
        repo.toggle(a.id)
        repo.toggle(b.id)
        assert store.get(SELECTED_FILTER_KEY) == b.id

    def test_toggle_unknown_raises(self, store):
        with pytest.raises(KeyError):
            FilterRepository(store).toggle("missing")

    def test_malformed_entries_skipped(self, store):
        store.set(FILTERS_KEY, json.dumps([{"id": "1"}, {"id": "2", "name": "ok", "customPrompt": "p"}]))
        assert [f.id for f in FilterRepository(store).list_filters()] == ["2"]

    def test_invalid_json_ignored(self, store):
        store.set(FILTERS_KEY, "[broken")
        assert FilterRepository(store).list_filters() == []


class TestReviewerSession:
    """Tests for login state."""

    def test_login_and_logout(self, store):
        session = ReviewerSession(store)
        assert session.current_user() is None
        assert session.login("  ada  ") == "ada"
        assert session.current_user() == "ada"
        session.logout()
        assert session.current_user() is None

    def test_empty_username_rejected(self, store):
        with pytest.raises(ValueError, match="Username is required"):
            ReviewerSession(store).login("   ")
        assert ReviewerSession(store).current_user() is None
