"""Per-item locks for stock read-modify-write cycles.

Two debits of the same item must not interleave between loading the item and
committing it, otherwise one update is lost. Different items never contend.
"""

import threading
from contextlib import contextmanager

_registry_lock = threading.Lock()
_item_locks: dict[str, threading.Lock] = {}


def lock_for(item_id) -> threading.Lock:
    key = str(item_id)
    with _registry_lock:
        lock = _item_locks.get(key)
        if lock is None:
            lock = _item_locks[key] = threading.Lock()
        return lock


@contextmanager
def item_lock(item_id):
    with lock_for(item_id):
        yield
