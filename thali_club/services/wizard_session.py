"""
Wizard Session Service for the Catering Configurator
====================================================

Keeps each browsing client's in-progress order in two places:
1. **In-Memory Cache**: the live session, read on every request
2. **Snapshot Store**: a database record written in the background

Architecture Overview:
----------------------
Write-behind cache:
- Reads check the cache first. On a miss the client's snapshot is loaded
  once and the result, including "no open order", is cached.
- Writes update the cache immediately and post the snapshot to the
  SnapshotWriter. The request never waits for the database.
- Discarding an order removes it from the cache and posts a clear, which the
  writer applies after any save posted before it.

Cache Eviction Strategy:
------------------------
1. **TTL-based**: Entries not accessed within SESSION_TTL_SECONDS are dropped.
   Checked probabilistically (~1% of reads).
2. **LRU-based**: When the cache reaches SESSION_MAX_CACHE_SIZE, the oldest
   10% of entries (by last access) are dropped.

Evicted entries are only gone from memory. The next request from that client
restores the order from its snapshot.

Usage:
------
    from thali_club.services.wizard_session import get_wizard_session, save_wizard_session

    session = get_wizard_session(client_id, machine)
    session = machine.advance(session)
    save_wizard_session(client_id, session)
"""

import logging
import random
import threading
import time
from typing import Any, Dict, Optional

from .. import db
from ..config import SESSION_TTL_SECONDS, SESSION_MAX_CACHE_SIZE
from ..catering.models import WizardSession
from ..catering.persistence import SnapshotStore, from_snapshot, get_snapshot_writer, to_snapshot
from ..catering.wizard import WizardStateMachine


logger = logging.getLogger(__name__)


# =============================================================================
# Wizard Cache
# =============================================================================
# {client_id: {"data": WizardSession | None, "last_access": timestamp}}
# A None entry means the client is known to have no open order.

WIZARD_CACHE: Dict[str, Dict[str, Any]] = {}
_cache_lock = threading.Lock()


# =============================================================================
# Cache Maintenance Functions
# =============================================================================

def _cleanup_expired_sessions() -> int:
    """Drop cache entries not accessed within SESSION_TTL_SECONDS."""
    now = time.time()

    with _cache_lock:
        expired = [
            cid for cid, entry in WIZARD_CACHE.items()
            if now - entry.get("last_access", 0) > SESSION_TTL_SECONDS
        ]
        for cid in expired:
            del WIZARD_CACHE[cid]

    if expired:
        logger.debug("Cleaned up %d expired wizard sessions from cache", len(expired))

    return len(expired)


def _evict_oldest_sessions(count: int) -> None:
    """
    Evict the least recently used entries.

    Must be called with _cache_lock held.
    """
    if len(WIZARD_CACHE) < SESSION_MAX_CACHE_SIZE:
        return

    oldest = sorted(WIZARD_CACHE.items(), key=lambda x: x[1].get("last_access", 0))
    for cid, _ in oldest[:max(count, 1)]:
        del WIZARD_CACHE[cid]

    logger.debug("Evicted %d oldest wizard sessions from cache", max(count, 1))


def _cache_put(client_id: str, session: Optional[WizardSession]) -> None:
    with _cache_lock:
        if client_id not in WIZARD_CACHE:
            _evict_oldest_sessions(SESSION_MAX_CACHE_SIZE // 10)
        WIZARD_CACHE[client_id] = {"data": session, "last_access": time.time()}


def _store_for(client_id: str) -> SnapshotStore:
    return SnapshotStore(db.session_factory, client_id)


# =============================================================================
# Public Session Functions
# =============================================================================

def get_wizard_session(client_id: str, machine: WizardStateMachine) -> Optional[WizardSession]:
    """
    Return the client's open order, or None.

    On a cache miss the client's snapshot is read and restored through the
    catalog; a snapshot for a package that no longer exists restores to None.
    A failed read is logged and treated as "no open order".
    """
    if random.randint(1, 100) == 1:
        _cleanup_expired_sessions()

    with _cache_lock:
        entry = WIZARD_CACHE.get(client_id)
        if entry is not None:
            entry["last_access"] = time.time()
            return entry["data"]

    try:
        data = _store_for(client_id).load()
    except Exception as e:
        logger.warning("Could not load snapshot for client %s: %s", client_id, e)
        data = None

    session = from_snapshot(data, machine.catalog)
    if session is not None:
        logger.info("Restored catering order for package '%s'", session.package_name)

    _cache_put(client_id, session)
    return session


def save_wizard_session(client_id: str, session: WizardSession) -> None:
    """Cache the session and post its snapshot to the background writer."""
    _cache_put(client_id, session)
    get_snapshot_writer().save(_store_for(client_id), to_snapshot(session))


def discard_wizard_session(client_id: str) -> None:
    """Forget the client's open order and post a clear of its snapshot."""
    _cache_put(client_id, None)
    get_snapshot_writer().clear(_store_for(client_id))


def clear_cache() -> int:
    """
    Clear all entries from the in-memory cache. Snapshots are untouched.

    Returns:
        int: Number of entries that were cached
    """
    with _cache_lock:
        count = len(WIZARD_CACHE)
        WIZARD_CACHE.clear()
        logger.info("Cleared %d wizard sessions from cache", count)
        return count


def get_cache_stats() -> Dict[str, Any]:
    """
    Get statistics about the wizard cache.

    Returns:
        Dict with size, max_size, ttl_seconds, open_orders, oldest_access
        and newest_access (None when empty)
    """
    with _cache_lock:
        access_times = [entry["last_access"] for entry in WIZARD_CACHE.values()]
        return {
            "size": len(WIZARD_CACHE),
            "max_size": SESSION_MAX_CACHE_SIZE,
            "ttl_seconds": SESSION_TTL_SECONDS,
            "open_orders": sum(1 for entry in WIZARD_CACHE.values() if entry["data"] is not None),
            "oldest_access": min(access_times) if access_times else None,
            "newest_access": max(access_times) if access_times else None,
        }
