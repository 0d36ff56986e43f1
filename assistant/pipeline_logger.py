"""
Pipeline Logger

Request-level logging for the chat pipeline.

Each incoming message gets a trace_id that follows it through:
1. Chat → 2. Session → 3. Intent / B2B → 4. FAQ or Rank → 5. LLM polish → 6. Mail

Optionally forwards records to Logfire when USE_LOGFIRE=true.
"""

import json
import logging
import os
import re
import sys
import time
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime
from typing import Any, Optional

import logfire

# ============================================================================
# Environment
# ============================================================================


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes", "on")


DEBUG_LOG = _env_bool("DEBUG_LOG", _env_bool("DEBUG", False))
PIPELINE_LOG_LEVEL = os.environ.get(
    "PIPELINE_LOG_LEVEL",
    "DEBUG" if DEBUG_LOG else "INFO",
).upper()
USE_LOGFIRE = _env_bool("USE_LOGFIRE", False)

# Keys whose values never reach the log output
REDACTED_KEYS = {"token", "api_key", "authorization", "password", "secret", "email", "smtp_pass"}
EMAIL_PATTERN = re.compile(r"[\w.+-]+@[\w-]+(?:\.[\w-]+)+")

# ============================================================================
# Formatter / Logger Setup
# ============================================================================


class PipelineFormatter(logging.Formatter):
    """Single-line formatter: time │ trace │ icon STAGE │ message."""

    ICONS = {
        "CHAT": "💬",
        "SESSION": "🗂️",
        "INTENT": "🎯",
        "FAQ": "📖",
        "RANK": "🔍",
        "B2B": "🤝",
        "LLM": "🤖",
        "MAIL": "✉️",
        "CATALOG": "📦",
    }

    def format(self, record):
        stage = getattr(record, "stage", "CHAT")
        icon = self.ICONS.get(stage, "📋")
        timestamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S.%f")[:-3]
        trace_id = getattr(record, "trace_id", "--------")[:8]
        msg = f"{timestamp} │ {trace_id} │ {icon} {stage:8} │ {record.getMessage()}"
        if record.exc_info and DEBUG_LOG:
            msg = f"{msg}\n{self.formatException(record.exc_info)}"
        return msg


def setup_pipeline_logger() -> logging.Logger:
    """Create the dedicated "pipeline" logger once."""
    logger = logging.getLogger("pipeline")
    if logger.handlers:
        return logger

    level = getattr(logging, PIPELINE_LOG_LEVEL, logging.INFO)
    logger.setLevel(level)
    logger.propagate = False

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(PipelineFormatter())
    logger.addHandler(console_handler)

    if USE_LOGFIRE:
        logfire_handler = logfire.LogfireLoggingHandler()
        logfire_handler.setLevel(logging.INFO)
        logger.addHandler(logfire_handler)

    return logger


pipeline_logger = setup_pipeline_logger()

# ============================================================================
# Trace Context
# ============================================================================


class TraceContext:
    """State for one chat message travelling through the pipeline."""

    def __init__(self, query: str, session_id: str = ""):
        self.trace_id = str(uuid.uuid4())
        self.query = query
        self.session_id = session_id
        self.start_time = time.time()
        self.stages: list[dict] = []

    def elapsed_ms(self) -> int:
        return int((time.time() - self.start_time) * 1000)


_current_trace: ContextVar[Optional[TraceContext]] = ContextVar(
    "pipeline_current_trace",
    default=None,
)


def get_current_trace() -> Optional[TraceContext]:
    return _current_trace.get()


# ============================================================================
# Logging Functions
# ============================================================================


def log_pipeline(
    stage: str,
    message: str,
    data: Optional[dict] = None,
    level: int = logging.INFO,
    exc_info: Any = None,
):
    """
    Log a pipeline event.

    Outside debug mode only USER_REQUEST, LATENCY_SUMMARY, warnings and
    errors are emitted.
    """
    if not DEBUG_LOG:
        is_user_request = message.startswith("USER_REQUEST")
        is_latency_summary = message.startswith("LATENCY_SUMMARY")
        if level < logging.WARNING and not is_user_request and not is_latency_summary:
            return

    trace = get_current_trace()
    extra = {
        "stage": stage,
        "trace_id": trace.trace_id if trace else "no-trace",
    }
    if data:
        message = f"{message} | {json.dumps(_truncate_data(data), ensure_ascii=False, default=str)}"

    pipeline_logger.log(level, message, extra=extra, exc_info=exc_info)


def _truncate_data(data: dict, max_len: int = 100) -> dict:
    """Shorten long values, mask sensitive keys and e-mail addresses inside text."""
    result = {}
    for k, v in data.items():
        if isinstance(v, str):
            v = EMAIL_PATTERN.sub("***@***", v)
        if str(k).lower() in REDACTED_KEYS:
            result[k] = "***REDACTED***"
        elif isinstance(v, str) and len(v) > max_len:
            result[k] = v[:max_len] + "..."
        elif isinstance(v, list) and len(v) > 5:
            result[k] = f"[{len(v)} items]"
        elif isinstance(v, dict):
            result[k] = _truncate_data(v, max_len)
        else:
            result[k] = v
    return result


@contextmanager
def trace_query(query: str, session_id: str = ""):
    """
    Trace one chat message through the pipeline.

    Usage:
        with trace_query("chcem kávu", "sess-1") as trace:
            ...
    """
    trace = TraceContext(query, session_id)
    token = _current_trace.set(trace)
    log_pipeline("CHAT", "USER_REQUEST", {"query": query, "session": session_id})
    try:
        yield trace
    finally:
        _current_trace.reset(token)


@contextmanager
def trace_stage(stage: str, description: str = ""):
    """Time a stage and record its outcome on the current trace."""
    trace = get_current_trace()
    start_time = time.time()
    stage_data = {"stage": stage, "description": description}
    log_pipeline(stage, f"▶ START: {description}")
    try:
        yield
        stage_data["success"] = True
        log_pipeline(stage, f"✓ END: {description}")
    except Exception as e:
        stage_data["success"] = False
        stage_data["error"] = str(e)
        log_pipeline(stage, f"✗ FAILED: {description} - {e}", level=logging.ERROR, exc_info=e)
        raise
    finally:
        stage_data["elapsed_ms"] = int((time.time() - start_time) * 1000)
        if trace:
            trace.stages.append(stage_data)


def log_stage_event(stage: str, message: str, data: Optional[dict] = None):
    """Debug-level event for a named stage."""
    log_pipeline(stage, message, data)


def log_warning(stage: str, message: str, data: Optional[dict] = None):
    log_pipeline(stage, f"⚠ {message}", data, level=logging.WARNING)


def log_error(stage: str, message: str, error: Optional[Exception] = None):
    data = (
        {"error": str(error), "error_type": error.__class__.__name__}
        if error
        else None
    )
    log_pipeline(stage, f"❌ {message}", data, level=logging.ERROR, exc_info=error)


def log_latency_summary(
    stage: str,
    component: str,
    total_ms: int,
    breakdown_ms: Optional[dict[str, int]] = None,
    meta: Optional[dict[str, Any]] = None,
):
    """One compact latency event per request, kept in every log mode."""
    payload: dict[str, Any] = {"component": component, "total_ms": int(total_ms)}
    if breakdown_ms:
        payload["breakdown_ms"] = {key: int(value) for key, value in breakdown_ms.items()}
    if meta:
        payload["meta"] = meta
    log_pipeline(stage, "LATENCY_SUMMARY", payload)
