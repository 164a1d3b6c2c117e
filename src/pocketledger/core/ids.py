"""Client-side record identifiers."""

import threading
import time

_lock = threading.Lock()
_last_ms = 0


def new_id(prefix: str) -> str:
    """
    Generate an opaque, timestamp-derived identifier such as ``tx-1718461800123``.

    Identifiers are unique within this process: when two ids are requested in
    the same millisecond the second one is bumped forward.
    """
    global _last_ms
    with _lock:
        now_ms = int(time.time() * 1000)
        if now_ms <= _last_ms:
            now_ms = _last_ms + 1
        _last_ms = now_ms
    return f"{prefix}-{now_ms}"
