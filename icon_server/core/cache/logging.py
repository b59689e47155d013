"""Cache event reporting: counts every event and logs it at debug level."""

from __future__ import annotations

from icon_server.logger import get_logger

from . import stats

logger = get_logger(__name__)


def log_cache_event(
    *,
    namespace: str,
    cache_event: str,
    reason: str | None = None,
    size: int | None = None,
) -> None:
    # Keys carry icon names and colors; those are logged by the resolver, not here.
    stats.increment(namespace=namespace, cache_event=cache_event)
    logger.debug("cache", namespace=namespace, cache_event=cache_event, reason=reason, size=size)
