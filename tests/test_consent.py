"""Unit tests for the consent gate and settings stores."""
import pytest

from foodfinder.chat import CONSENT_KEY, ConsentGate, SendDecision
from foodfinder.settings import SettingsStore, create_settings_store
from foodfinder.settings.in_memory import InMemorySettingsStore
from foodfinder.settings.sqlite import SQLiteSettingsStore


class TestConsentGate:
    """Tests for ConsentGate."""

    async def test_not_acknowledged_by_default(self, gate):
        """Test that a fresh store has no acknowledgement."""
        assert await gate.load() is False
        assert gate.acknowledged is False

    async def test_loads_persisted_flag(self):
        """Test that an earlier acknowledgement is honoured."""
        gate = ConsentGate(InMemorySettingsStore({CONSENT_KEY: True}))

        assert await gate.load() is True
        assert gate.request_send("pasta") is SendDecision.PROCEED
        assert gate.waiting is False

    def test_first_send_is_held(self, gate):
        """Test that a send before consent is held."""
        decision = gate.request_send("pasta")

        assert decision is SendDecision.NEEDS_CONSENT
        assert gate.waiting is True
        assert gate.pending.text == "pasta"

    def test_first_pending_text_wins(self, gate):
        """Test that a second send while waiting does not replace the held text."""
        gate.request_send("pasta")
        gate.request_send("sushi")

        assert gate.pending.text == "pasta"

    async def test_grant_persists_and_flush_releases(self, gate, settings_store):
        """Test granting consent, then flushing the held text."""
        gate.request_send("pasta")

        await gate.grant_consent()

        assert gate.acknowledged is True
        assert await settings_store.get(CONSENT_KEY) is True
        # Granting alone does not release the message
        assert gate.waiting is True
        assert gate.flush_pending() == "pasta"
        assert gate.waiting is False
        assert gate.flush_pending() is None

    def test_flush_without_consent_drops(self, gate):
        """Test that flushing before consent clears the held text and returns None."""
        gate.request_send("pasta")

        assert gate.flush_pending() is None
        assert gate.waiting is False
        assert gate.pending.text is None

    def test_cancel_clears_pending(self, gate):
        """Test that cancelling drops the held text."""
        gate.request_send("pasta")
        gate.cancel_pending()

        assert gate.waiting is False
        assert gate.pending.text is None
        assert gate.acknowledged is False

    async def test_load_never_downgrades(self, gate, settings_store):
        """Test that a grant made this session survives a reload of an empty store."""
        await gate.grant_consent()
        await settings_store.delete(CONSENT_KEY)

        assert await gate.load() is True

    async def test_reset_forgets_acknowledgement(self, gate, settings_store):
        """Test the maintenance reset."""
        await gate.grant_consent()
        await gate.reset()

        assert gate.acknowledged is False
        assert await settings_store.get(CONSENT_KEY) is None

    def test_pending_is_a_copy(self, gate):
        """Test that callers cannot mutate the held state."""
        gate.request_send("pasta")
        gate.pending.clear()

        assert gate.waiting is True


class TestSettingsStores:
    """Tests for settings backends."""

    def test_settings_store_is_abstract(self):
        """Test that SettingsStore cannot be instantiated directly."""
        with pytest.raises(TypeError):
            SettingsStore()  # type: ignore

    def test_factory_backends(self, tmp_path):
        """Test creating each supported backend."""
        assert create_settings_store("memory").backend_type == "memory"
        store = create_settings_store("sqlite", path=tmp_path / "s.db")
        assert isinstance(store, SQLiteSettingsStore)
        assert store.db_path == tmp_path / "s.db"

    def test_factory_unknown_backend(self):
        """Test that an unknown backend raises ValueError."""
        with pytest.raises(ValueError, match="Unsupported settings backend"):
            create_settings_store("redis")

    async def test_in_memory_bool_helpers(self):
        """Test get_bool/set_bool on the in-memory store."""
        store = InMemorySettingsStore()

        assert await store.get_bool("flag") is False
        await store.set_bool("flag", True)
        assert await store.get_bool("flag") is True

    async def test_sqlite_persists_across_instances(self, tmp_path):
        """Test that a grant survives a restart with the SQLite store."""
        path = tmp_path / "nested" / "settings.db"

        async with SQLiteSettingsStore(path) as store:
            await ConsentGate(store).grant_consent()

        async with SQLiteSettingsStore(path) as store:
            gate = ConsentGate(store)
            assert await gate.load() is True

    async def test_sqlite_overwrite_and_delete(self, tmp_path):
        """Test upsert and delete semantics."""
        async with SQLiteSettingsStore(tmp_path / "settings.db") as store:
            await store.set("key", "one")
            await store.set("key", "two")
            assert await store.get("key") == "two"

            await store.delete("key")
            assert await store.get("key", default="gone") == "gone"
