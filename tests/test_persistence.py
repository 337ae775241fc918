"""
Tests for order snapshot persistence and the wizard session cache.
"""
import logging
from decimal import Decimal
from unittest.mock import MagicMock

from thali_club.catering.catalog import ADD_ON_MENU, Catalog
from thali_club.catering.models import WeightKg
from thali_club.catering.persistence import (
    SnapshotStore,
    SnapshotWriter,
    from_snapshot,
    get_snapshot_writer,
    to_snapshot,
)
from thali_club.models import WizardSnapshot
from thali_club.services.wizard_session import (
    WIZARD_CACHE,
    clear_cache,
    discard_wizard_session,
    get_cache_stats,
    get_wizard_session,
    save_wizard_session,
)

MAINS = ADD_ON_MENU["vegetarianChoices"]
SNACKS = ADD_ON_MENU["vegetarianSnacks"]


def _mid_wizard_session(machine):
    """Premium Vegetarian at step 2 with one main picked."""
    session = machine.open_order("Premium Vegetarian")
    for item in SNACKS[:4]:
        session = machine.toggle_choice(session, item)
    session = machine.advance(session)
    return machine.toggle_choice(session, MAINS[0])


class TestSnapshotSerialization:

    def test_round_trip_mid_wizard(self, machine, catalog):
        session = _mid_wizard_session(machine)
        restored = from_snapshot(to_snapshot(session), catalog)
        assert restored.current_step == 2
        assert restored.step_selections == {1: list(SNACKS[:4]), 2: [MAINS[0]]}
        assert restored.model_dump() == session.model_dump()

    def test_package_stored_by_name(self, machine):
        data = to_snapshot(machine.open_order("Vegetarian"))
        assert data["package_name"] == "Vegetarian"
        assert "steps" not in data

    def test_weight_survives(self, machine, catalog):
        session = machine.set_weight(machine.open_order("Curry Tray by Weight"), "2.5")
        restored = from_snapshot(to_snapshot(session), catalog)
        assert isinstance(restored.quantity, WeightKg)
        assert restored.quantity.kg == Decimal("2.5")

    def test_unknown_package_is_inert(self, machine):
        data = to_snapshot(machine.open_order("Vegetarian"))
        assert from_snapshot(data, Catalog([])) is None

    def test_missing_or_garbled_snapshot(self, catalog):
        assert from_snapshot(None, catalog) is None
        assert from_snapshot({"package_name": "Vegetarian", "quantity": "lots"}, catalog) is None

    def test_step_clamped_into_package(self, machine, catalog):
        data = to_snapshot(machine.open_order("Vegetarian"))
        data["current_step"] = 42
        assert from_snapshot(data, catalog).current_step == 3

    def test_quantity_of_wrong_kind_is_inert(self, machine, catalog):
        data = to_snapshot(machine.open_order("Vegetarian"))
        data["package_name"] = "Curry Tray by Weight"
        assert from_snapshot(data, catalog) is None

    def test_selections_trimmed_to_current_package(self, machine, catalog):
        data = to_snapshot(machine.open_order("Vegetarian"))
        data["step_selections"] = {
            "1": list(MAINS[:5]),
            "2": ["Gulab Jamun", "Ras Malai"],
            "7": ["Samosa"],
        }
        restored = from_snapshot(data, catalog)
        assert restored.step_selections == {1: list(MAINS[:3]), 2: ["Gulab Jamun"]}

    def test_bread_step_keeps_one_pick(self, machine, catalog):
        data = to_snapshot(machine.open_order("Snacks & Main Course"))
        data["step_selections"] = {"4": ["Roti", "Tandoori Naan"]}
        assert from_snapshot(data, catalog).step_selections == {4: ["Roti"]}


class TestSnapshotStore:

    def test_save_and_load(self, session_factory, machine):
        store = SnapshotStore(session_factory, "client-1")
        payload = to_snapshot(machine.open_order("Vegetarian"))
        store.save(payload)
        assert store.load()["package_name"] == "Vegetarian"

    def test_save_overwrites(self, session_factory, machine):
        store = SnapshotStore(session_factory, "client-1")
        store.save(to_snapshot(machine.open_order("Vegetarian")))
        store.save(to_snapshot(machine.open_order("Premium Vegetarian")))

        db = session_factory()
        try:
            records = db.query(WizardSnapshot).filter_by(client_id="client-1").all()
        finally:
            db.close()
        assert len(records) == 1
        assert records[0].key == "in-progress"
        assert records[0].payload["package_name"] == "Premium Vegetarian"

    def test_clear(self, session_factory, machine):
        store = SnapshotStore(session_factory, "client-1")
        store.save(to_snapshot(machine.open_order("Vegetarian")))
        store.clear()
        assert store.load() is None

    def test_clients_isolated(self, session_factory, machine):
        SnapshotStore(session_factory, "a").save(to_snapshot(machine.open_order("Vegetarian")))
        assert SnapshotStore(session_factory, "b").load() is None


class TestSnapshotWriter:

    def test_clear_after_save_wins(self, session_factory, machine):
        writer = SnapshotWriter(name="test-writer")
        store = SnapshotStore(session_factory, "client-1")
        writer.save(store, to_snapshot(machine.open_order("Vegetarian")))
        writer.clear(store)
        writer.flush()
        assert store.load() is None

    def test_failures_are_logged_not_raised(self, caplog):
        writer = SnapshotWriter(name="test-writer")
        store = MagicMock()
        store.client_id = "client-1"
        store.save.side_effect = RuntimeError("disk full")

        with caplog.at_level(logging.WARNING):
            writer.save(store, {"package_name": "Vegetarian"})
            writer.flush()

        assert "disk full" in caplog.text

    def test_writer_is_shared(self):
        assert get_snapshot_writer() is get_snapshot_writer()


class TestWizardSessionService:

    def test_open_then_close_leaves_store_empty(self, session_factory, machine):
        save_wizard_session("client-1", machine.open_order("Vegetarian"))
        discard_wizard_session("client-1")
        get_snapshot_writer().flush()
        assert SnapshotStore(session_factory, "client-1").load() is None

    def test_restore_after_cache_cleared(self, session_factory, machine):
        session = _mid_wizard_session(machine)
        save_wizard_session("client-1", session)
        get_snapshot_writer().flush()

        clear_cache()
        restored = get_wizard_session("client-1", machine)
        assert restored.model_dump() == session.model_dump()
        assert restored.current_step == 2

    def test_no_order_is_cached(self, session_factory, machine):
        assert get_wizard_session("nobody", machine) is None
        assert WIZARD_CACHE["nobody"]["data"] is None

    def test_cache_stats(self, session_factory, machine):
        save_wizard_session("client-1", machine.open_order("Vegetarian"))
        get_wizard_session("client-2", machine)
        stats = get_cache_stats()
        assert stats["size"] == 2
        assert stats["open_orders"] == 1
        assert stats["oldest_access"] <= stats["newest_access"]

    def test_empty_cache_stats(self, session_factory):
        stats = get_cache_stats()
        assert stats["size"] == 0
        assert stats["oldest_access"] is None
