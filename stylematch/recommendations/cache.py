from __future__ import annotations

import hashlib
import json
import threading
import time
from typing import Any

from .config import DEFAULT_RECOMMENDATION_CONFIG

_cache: dict[str, dict[str, Any]] = {}
_hits: int = 0
_misses: int = 0
_generation: int | None = None
_lock = threading.Lock()


def _make_key(request_dict: dict) -> str:
    normalized = json.dumps(request_dict, sort_keys=True, default=str)
    return hashlib.sha256(normalized.encode()).hexdigest()[:16]


def cache_get(request_dict: dict, ttl: float = DEFAULT_RECOMMENDATION_CONFIG.cache_ttl_seconds) -> Any | None:
    global _hits, _misses
    key = _make_key(request_dict)
    with _lock:
        entry = _cache.get(key)
        if entry and time.time() - entry["created_at"] < ttl:
            _hits += 1
            return entry["value"]
        if entry:
            del _cache[key]
        _misses += 1
    return None


def cache_set(
    request_dict: dict,
    value: Any,
    ttl: float = DEFAULT_RECOMMENDATION_CONFIG.cache_ttl_seconds,
) -> None:
    key = _make_key(request_dict)
    now = time.time()
    with _lock:
        for stale in [k for k, e in _cache.items() if now - e["created_at"] >= ttl]:
            del _cache[stale]
        _cache[key] = {"value": value, "created_at": now}


def sync_generation(generation: int) -> None:
    """Drop every entry when the data they were computed from has changed."""
    global _generation
    with _lock:
        if generation != _generation:
            _cache.clear()
            _generation = generation


def get_cache_stats() -> dict:
    with _lock:
        total = _hits + _misses
        return {
            "size": len(_cache),
            "hits": _hits,
            "misses": _misses,
            "hit_rate": round(_hits / total * 100, 1) if total > 0 else 0.0,
        }


def clear_cache() -> None:
    global _hits, _misses, _generation
    with _lock:
        _cache.clear()
        _generation = None
        _hits = 0
        _misses = 0
