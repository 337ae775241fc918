"""
Snapshot persistence for in-progress catering orders.

Three pieces:

1. **Serialization** (``to_snapshot`` / ``from_snapshot``): a WizardSession
   becomes a JSON-safe dict that names its package instead of embedding it.
   A snapshot naming a package the catalog no longer has restores to nothing;
   one for a package that has since changed is fitted to the package as it
   is now.

2. **SnapshotStore**: a single-table key-value store (``wizard_snapshots``),
   one record per browsing client under a fixed key.

3. **SnapshotWriter**: a background worker thread that applies save/clear
   messages in the order they were sent. Callers post a message and move on;
   a failed write is logged and dropped, never raised back to the request
   that caused it.

Usage:
------
    store = SnapshotStore(session_factory, client_id)
    writer = get_snapshot_writer()
    writer.save(store, to_snapshot(session))   # returns immediately
    writer.clear(store)                        # applied after the save
    writer.flush()                             # tests: wait for the worker

    data = store.load()                        # synchronous read
    session = from_snapshot(data, catalog)
"""

import logging
import queue
import threading
from typing import Any, Callable, Dict, Optional

from pydantic import ValidationError
from sqlalchemy.orm import Session
from sqlalchemy.orm.attributes import flag_modified

from ..config import SNAPSHOT_KEY
from ..models import WizardSnapshot
from .catalog import Catalog, Package, PricingModel, StepKind
from .models import WeightKg, WizardSession

logger = logging.getLogger(__name__)

SNAPSHOT_VERSION = 1


# =============================================================================
# Serialization
# =============================================================================

def to_snapshot(session: WizardSession) -> Dict[str, Any]:
    """Serialize a session to a JSON-safe dict."""
    data = session.model_dump(mode="json")
    data["step_selections"] = {
        str(index): items for index, items in session.step_selections.items()
    }
    data["version"] = SNAPSHOT_VERSION
    return data


def from_snapshot(data: Optional[Dict[str, Any]], catalog: Catalog) -> Optional[WizardSession]:
    """
    Rebuild a session from a snapshot.

    Returns None when there is no snapshot, when it names a package the
    catalog doesn't have, when its quantity no longer fits the package's
    pricing model, or when it can't be parsed. None of these are
    errors: the client simply starts without an open order.
    """
    if not data:
        return None

    package = catalog.get(data.get("package_name"))
    if package is None:
        logger.info("Ignoring snapshot for unknown package %r", data.get("package_name"))
        return None

    fields = {k: v for k, v in data.items() if k != "version"}
    try:
        session = WizardSession.model_validate(fields)
    except ValidationError as e:
        logger.warning("Ignoring unreadable snapshot: %s", e)
        return None

    return _fit_to_package(session, package)


def _fit_to_package(session: WizardSession, package: Package) -> Optional[WizardSession]:
    """
    Reconcile a restored session with the package as the catalog has it now.

    The package may have changed since the snapshot was written. A quantity of
    the wrong kind can't be priced, so such a snapshot is dropped. Selections
    are trimmed to the step's current options and cap, and navigation is
    clamped into the package's steps.
    """
    per_weight = package.pricing_model == PricingModel.PER_WEIGHT
    if isinstance(session.quantity, WeightKg) != per_weight:
        logger.info("Ignoring snapshot for '%s': quantity no longer fits its pricing model", package.name)
        return None

    selections = {}
    for index, items in session.step_selections.items():
        step = package.step(index)
        if step is None or step.kind == StepKind.WEIGHT_INPUT:
            continue
        cap = step.max_selections if step.kind == StepKind.CHOICE else 1
        kept = [item for item in dict.fromkeys(items) if item in step.options][:cap]
        if kept:
            selections[index] = kept

    last = package.step_count + 1
    return session.model_copy(update={
        "step_selections": selections,
        "include_add_on": session.include_add_on and not per_weight,
        "current_step": min(max(session.current_step, 1), last),
    })


# =============================================================================
# Store
# =============================================================================

class SnapshotStore:
    """
    Key-value access to one client's snapshot record.

    Args:
        session_factory: Callable returning a new SQLAlchemy Session
        client_id: Identifier of the browsing client
        key: Record key (the configurator uses a single fixed key)
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        client_id: str,
        key: str = SNAPSHOT_KEY,
    ):
        self._session_factory = session_factory
        self.client_id = client_id
        self.key = key

    def _query(self, db: Session):
        return db.query(WizardSnapshot).filter(
            WizardSnapshot.client_id == self.client_id,
            WizardSnapshot.key == self.key,
        )

    def save(self, payload: Dict[str, Any]) -> None:
        """Overwrite the snapshot (upsert)."""
        db = self._session_factory()
        try:
            record = self._query(db).first()
            if record:
                record.payload = payload
                # Force SQLAlchemy to detect the replaced JSON value
                flag_modified(record, "payload")
            else:
                db.add(WizardSnapshot(client_id=self.client_id, key=self.key, payload=payload))
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def load(self) -> Optional[Dict[str, Any]]:
        """Return the last saved snapshot, or None."""
        db = self._session_factory()
        try:
            record = self._query(db).first()
            return dict(record.payload) if record and record.payload else None
        finally:
            db.close()

    def clear(self) -> None:
        """Delete the snapshot if there is one."""
        db = self._session_factory()
        try:
            self._query(db).delete(synchronize_session=False)
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()


# =============================================================================
# Writer
# =============================================================================

class SnapshotWriter:
    """
    Applies snapshot writes on a background thread, in submission order.

    ``save`` and ``clear`` only enqueue a message. Exceptions raised while
    applying a message are logged at WARNING and swallowed.
    """

    def __init__(self, name: str = "snapshot-writer"):
        self._queue: "queue.Queue[tuple]" = queue.Queue()
        self._name = name
        self._thread: Optional[threading.Thread] = None
        self._start_lock = threading.Lock()

    def _ensure_started(self) -> None:
        with self._start_lock:
            if self._thread is None or not self._thread.is_alive():
                self._thread = threading.Thread(target=self._run, name=self._name, daemon=True)
                self._thread.start()

    def _run(self) -> None:
        while True:
            op, store, payload = self._queue.get()
            try:
                if op == "save":
                    store.save(payload)
                elif op == "clear":
                    store.clear()
                logger.debug("Snapshot %s applied for client %s", op, store.client_id)
            except Exception as e:
                logger.warning("Snapshot %s failed for client %s: %s", op, store.client_id, e)
            finally:
                self._queue.task_done()

    def save(self, store: SnapshotStore, payload: Dict[str, Any]) -> None:
        self._ensure_started()
        self._queue.put(("save", store, payload))

    def clear(self, store: SnapshotStore) -> None:
        self._ensure_started()
        self._queue.put(("clear", store, None))

    def flush(self) -> None:
        """Block until every message posted so far has been applied."""
        self._queue.join()


_writer: Optional[SnapshotWriter] = None
_writer_lock = threading.Lock()


def get_snapshot_writer() -> SnapshotWriter:
    """Process-wide snapshot writer."""
    global _writer
    with _writer_lock:
        if _writer is None:
            _writer = SnapshotWriter()
        return _writer
