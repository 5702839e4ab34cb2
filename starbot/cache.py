# starbot/cache.py
"""Short-lived in-memory cache for feed results."""

import threading
import time


class TTLCache:
    """Key/value store whose entries expire ``ttl_seconds`` after being set.

    ``clock`` returns seconds; it is injectable so expiry can be tested
    without sleeping. Reads and writes are serialized by a lock because feed
    workers run on a thread pool.
    """

    def __init__(self, ttl_seconds=300.0, clock=time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries = {}
        self._lock = threading.Lock()

    def get(self, key, default=None):
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return default
            stored_at, value = entry
            if self._clock() - stored_at >= self.ttl_seconds:
                del self._entries[key]
                return default
            return value

    def set(self, key, value):
        with self._lock:
            self._entries[key] = (self._clock(), value)

    def clear(self):
        with self._lock:
            self._entries.clear()

    def __len__(self):
        with self._lock:
            return len(self._entries)


def feed_cache_key(feed, observer, bucket_seconds=300.0, precision=4):
    """Cache key from feed name, rounded position and a timestamp bucket.

    Two scans in the same bucket at the same place share feed results.
    """
    bucket = int(observer.when.timestamp() // bucket_seconds) if bucket_seconds else 0
    return (
        feed,
        round(observer.latitude, precision),
        round(observer.longitude, precision),
        round(observer.altitude_m),
        bucket,
    )
