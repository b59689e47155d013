"""Structured logging configuration using structlog.

Lines are rendered in Uvicorn's style with the icon fields up front::

    INFO:     [host:1234] icon_resolved request_id=ab12 icon=github color=FF8800 format=svg source=local fallback=False
"""

import logging
import os
import socket

import structlog
from structlog.processors import CallsiteParameter, CallsiteParameterAdder

# Cache hostname and PID at module load time (they don't change)
_HOSTNAME = socket.gethostname()
_PID = os.getpid()

# Fields every icon/asset event may carry, rendered first and in this order
_LEADING_KEYS = ("request_id", "icon", "color", "format", "source", "fallback", "cache", "asset")

_CALLSITE_PARAMETERS = {
    CallsiteParameter.FILENAME,
    CallsiteParameter.FUNC_NAME,
    CallsiteParameter.LINENO,
}


def _collapse_callsite(
    logger: logging.Logger,
    method_name: str,
    event_dict: dict,
) -> dict:
    """Fold the callsite parameters into a single ``caller`` field."""
    filename = event_dict.pop("filename", None)
    func_name = event_dict.pop("func_name", None)
    lineno = event_dict.pop("lineno", None)
    if filename:
        event_dict["caller"] = f"{filename}:{func_name}:{lineno}"
    return event_dict


def _render_icon_event(
    logger: logging.Logger,
    method_name: str,
    event_dict: dict,
) -> str:
    """
    Render an event as ``LEVEL:     [host:pid] [caller] event key=value ...``.

    Icon fields come first in a fixed order; fields whose value is ``None`` (an
    uncolored request's ``color``, say) are left out.
    """
    level = event_dict.pop("level", "info").upper()
    event = event_dict.pop("event", "")
    caller = event_dict.pop("caller", "")

    ordered = [(key, event_dict.pop(key)) for key in _LEADING_KEYS if key in event_dict]
    ordered.extend(event_dict.items())
    context_str = " ".join(f"{k}={v}" for k, v in ordered if v is not None)

    prefix = f"{level}:     [{_HOSTNAME}:{_PID}]"
    if caller:
        prefix = f"{prefix} [{caller}]"

    if context_str:
        return f"{prefix} {event} {context_str}"
    return f"{prefix} {event}"


def setup_logging(debug: bool = False) -> None:
    """
    Configure structlog for the application.

    Debug mode lowers the level to DEBUG and tags each line with its call site.
    """
    log_level = logging.DEBUG if debug else logging.INFO

    # Our own access log middleware replaces uvicorn's access lines
    uvicorn_access = logging.getLogger("uvicorn.access")
    uvicorn_access.handlers = []
    uvicorn_access.propagate = False
    uvicorn_access.disabled = True

    processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
    ]
    if debug:
        processors += [
            CallsiteParameterAdder(_CALLSITE_PARAMETERS, additional_ignores=[__name__]),
            _collapse_callsite,
        ]
    processors.append(_render_icon_event)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,  # Allow reconfiguration
    )


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    return structlog.get_logger(name)


def log_request_performance(
    *,
    request_id: str,
    method: str,
    path: str,
    status_code: int,
    duration_ms: float,
    cache_status: str | None = None,
    cache_delta: dict | None = None,
) -> None:
    """Emit one ``request_perf`` line per request.

    ``cache_status`` is the response's X-Cache value (HIT/MISS); it is absent for
    custom assets, which bypass the cache, and for error responses.
    """
    get_logger("icon_server.performance").info(
        "request_perf",
        request_id=request_id,
        method=method,
        path=path,
        status=status_code,
        cache=cache_status,
        duration_ms=round(duration_ms, 3),
        cache_delta=cache_delta or None,
    )
