"""
Centralized Logging Configuration using Logfire

The HTTP backend and the console entry point both call setup_logging().
Modules get a ServiceLogger via get_logger(name).

Features:
- Standard library logging routed through Logfire
- Console output with timestamps
- Spans around outbound calls (completion API, SMTP)
"""

import logging
import os
import time
from contextlib import contextmanager

import logfire

# ═══════════════════════════════════════════════════════════════
# Configuration
# ═══════════════════════════════════════════════════════════════
DEBUG_MODE = os.getenv("DEBUG", "false").lower() in ("true", "1", "yes", "on")
SERVICE_NAME = os.getenv("LOGFIRE_SERVICE_NAME", "anilab-chat-assistant")
SEND_TO_LOGFIRE = os.getenv("SEND_TO_LOGFIRE", "if-token-present")

EMOJI = {
    "start": "🚀",
    "success": "✅",
    "error": "❌",
    "warning": "⚠️",
    "info": "ℹ️",
    "debug": "🔍",
    "llm": "🤖",
    "mail": "✉️",
}

_configured = False


def setup_logging(service_name: str = None, level: str = None) -> None:
    """
    Configure Logfire and stdlib logging once per process.

    Args:
        service_name: Optional service name override
        level: Log level name; defaults to DEBUG in debug mode, else INFO
    """
    global _configured
    if _configured:
        return

    final_service_name = service_name or SERVICE_NAME
    final_level = (level or ("DEBUG" if DEBUG_MODE else "INFO")).upper()

    logfire.configure(
        service_name=final_service_name,
        send_to_logfire=SEND_TO_LOGFIRE,
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents" if DEBUG_MODE else "simple",
            include_timestamps=True,
            verbose=DEBUG_MODE,
            min_log_level="debug" if DEBUG_MODE else "info",
        ),
    )

    logging.basicConfig(
        level=getattr(logging, final_level, logging.INFO),
        handlers=[logfire.LogfireLoggingHandler()],
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    _configured = True
    logging.getLogger(__name__).info(f"{EMOJI['start']} Logging configured for {final_service_name}")


class ServiceLogger:
    """Logger wrapper with emoji prefixes and Logfire spans."""

    def __init__(self, name: str):
        self.name = name
        self._logger = logging.getLogger(name)

    def info(self, message: str, **kwargs):
        self._logger.info(f"{EMOJI['info']} [{self.name}] {message}", extra={"data": kwargs})

    def debug(self, message: str, **kwargs):
        self._logger.debug(f"{EMOJI['debug']} [{self.name}] {message}", extra={"data": kwargs})

    def warning(self, message: str, **kwargs):
        self._logger.warning(f"{EMOJI['warning']} [{self.name}] {message}", extra={"data": kwargs})

    def error(self, message: str, error: Exception = None, **kwargs):
        if error:
            kwargs["error_type"] = type(error).__name__
            kwargs["error_message"] = str(error)
        self._logger.error(f"{EMOJI['error']} [{self.name}] {message}", extra={"data": kwargs})

    def success(self, message: str, **kwargs):
        self._logger.info(f"{EMOJI['success']} [{self.name}] {message}", extra={"data": kwargs})

    @contextmanager
    def span(self, operation: str, **attributes):
        with logfire.span(f"{self.name}.{operation}", **attributes) as span:
            yield span

    @contextmanager
    def llm_span(self, model: str, prompt_preview: str = None, **attributes):
        """Span around one completion call, logging duration and failures."""
        start_time = time.time()
        preview = prompt_preview[:100] + "..." if prompt_preview and len(prompt_preview) > 100 else prompt_preview
        self.debug(f"{EMOJI['llm']} LLM call to '{model}'", prompt_preview=preview)
        try:
            with logfire.span(f"llm.{model}", **attributes) as span:
                yield span
            self.debug(
                "LLM response received",
                model=model,
                duration_ms=round((time.time() - start_time) * 1000, 2),
            )
        except Exception as e:
            self.error(
                f"LLM call failed: {e}",
                model=model,
                duration_ms=round((time.time() - start_time) * 1000, 2),
            )
            raise

    @contextmanager
    def mail_span(self, **attributes):
        """Span around one SMTP dispatch."""
        start_time = time.time()
        try:
            with logfire.span("mail.send", **attributes) as span:
                yield span
            self.success(
                f"{EMOJI['mail']} Mail sent",
                duration_ms=round((time.time() - start_time) * 1000, 2),
            )
        except Exception as e:
            self.error(f"Mail dispatch failed: {e}", duration_ms=round((time.time() - start_time) * 1000, 2))
            raise


def get_logger(name: str) -> ServiceLogger:
    """Get a ServiceLogger instance for the given name."""
    return ServiceLogger(name)
