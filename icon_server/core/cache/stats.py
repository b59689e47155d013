from __future__ import annotations

from copy import deepcopy
from threading import Lock

# Process-local counters, reset on restart.
# Structure: {namespace: {cache_event: count}}
_COUNTS: dict[str, dict[str, int]] = {}
_LOCK = Lock()


def increment(*, namespace: str, cache_event: str) -> None:
    """Increment a cache event counter."""
    with _LOCK:
        ns = _COUNTS.setdefault(namespace, {})
        ns[cache_event] = ns.get(cache_event, 0) + 1


def snapshot() -> dict[str, dict[str, int]]:
    """Return a deep copy snapshot of current counters."""
    with _LOCK:
        return deepcopy(_COUNTS)


def reset() -> None:
    """Reset all counters (test helper)."""
    with _LOCK:
        _COUNTS.clear()


def diff(
    before: dict[str, dict[str, int]],
    after: dict[str, dict[str, int]],
) -> dict[str, dict[str, int]]:
    """Sparse per-namespace delta (after - before); zero deltas are dropped."""
    out: dict[str, dict[str, int]] = {}
    for ns in sorted(set(before) | set(after)):
        b = before.get(ns, {})
        a = after.get(ns, {})
        delta = {ev: a.get(ev, 0) - b.get(ev, 0) for ev in sorted(set(a) | set(b))}
        delta = {ev: d for ev, d in delta.items() if d}
        if delta:
            out[ns] = delta
    return out
