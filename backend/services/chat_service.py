"""
Chat Service

Wrapper around the ChatEngine for use in FastAPI.
Loads the catalog and FAQ, wires the completion client and lead notifier,
and contains every failure so a request is always answered.
"""

from datetime import datetime, timezone
from pathlib import Path
from time import perf_counter
from typing import Optional

from assistant.b2b import B2BDialogue
from assistant.catalog import load_catalog, load_faq
from assistant.completion import CompletionClient
from assistant.engine import ChatEngine
from assistant.logging_config import get_logger
from assistant.mailer import build_notifier
from assistant.pipeline_logger import log_error, log_latency_summary, trace_query
from assistant.sessions import InMemorySessionStore
from backend.core.config import Settings, settings as default_settings

logger = get_logger(__name__)

APOLOGY = "Prepáčte, niečo sa pokazilo. Skúste to prosím o chvíľu znova."
ANONYMOUS_SESSION = "anonymous"


def resolve_session_key(session_id: Optional[str], client_host: Optional[str]) -> str:
    """Explicit session id, else client address, else one shared anonymous key."""
    if session_id and session_id.strip():
        return session_id.strip()
    return client_host or ANONYMOUS_SESSION


def build_engine(settings: Settings) -> ChatEngine:
    """Assemble a ChatEngine from settings."""
    notifier = build_notifier(
        settings.smtp_host,
        settings.smtp_port,
        settings.smtp_user,
        settings.smtp_pass,
        settings.smtp_from,
        settings.lead_to_email,
    )
    completion = None
    if settings.llm_polish_enabled and settings.openai_api_key:
        completion = CompletionClient(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            base_url=settings.openai_base_url,
            timeout=settings.llm_timeout,
        )
    return ChatEngine(
        catalog=load_catalog(Path(settings.catalog_path)),
        faq=load_faq(Path(settings.faq_path)),
        sessions=InMemorySessionStore(settings.session_max or None),
        b2b=B2BDialogue(notifier, contact=settings.lead_to_email),
        completion=completion,
        support_url=settings.support_url,
        limit=settings.recommend_limit,
    )


class ChatService:
    """
    Service wrapper for ChatEngine.

    Provides a clean interface for the API: lazy initialization, one trace
    per message, latency summary logging and the apologetic fallback.
    """

    def __init__(self, settings: Optional[Settings] = None, engine: Optional[ChatEngine] = None):
        self._settings = settings or default_settings
        self._engine = engine

    def initialize(self) -> None:
        """Build the engine (loads data files) if not built yet."""
        if self._engine is None:
            self._engine = build_engine(self._settings)
            logger.info(
                "Chat engine ready",
                products=len(self._engine.catalog),
                faq=self._engine.faq is not None,
                polish=self._engine.polish_enabled,
                mail=self._engine.lead_mail_enabled,
            )

    @property
    def engine(self) -> ChatEngine:
        self.initialize()
        return self._engine

    async def chat(self, message: Optional[str], session_key: str) -> dict:
        """
        Process a chat message and return {"reply": ...}.

        Never raises: any internal failure is logged and answered with the
        apology text.
        """
        request_start = perf_counter()
        with trace_query(message or "", session_key) as trace:
            try:
                result = await self.engine.reply(message, session_key)
            except Exception as e:
                log_error("CHAT", "Chat handling failed", e)
                log_latency_summary(
                    "CHAT",
                    "chat_service.chat",
                    int((perf_counter() - request_start) * 1000),
                    breakdown_ms=_stage_timings(trace.stages),
                    meta={"route": "error", "success": False},
                )
                return {"reply": APOLOGY}

            log_latency_summary(
                "CHAT",
                "chat_service.chat",
                int((perf_counter() - request_start) * 1000),
                breakdown_ms=_stage_timings(trace.stages),
                meta={
                    "route": result.route,
                    "success": True,
                    "products": len(result.products),
                    "polished": result.polished,
                },
            )
            return {"reply": result.reply}

    def health(self) -> dict:
        """Liveness summary: catalog size, FAQ presence and current UTC time."""
        engine = self.engine
        return {
            "ok": True,
            "products": len(engine.catalog),
            "faq": engine.faq is not None,
            "time": datetime.now(timezone.utc).isoformat(),
        }

    async def close(self) -> None:
        if self._engine is not None:
            await self._engine.aclose()


def _stage_timings(stages: list[dict]) -> dict[str, int]:
    timings: dict[str, int] = {}
    for stage in stages:
        key = f"{stage['stage'].lower()}_ms"
        timings[key] = timings.get(key, 0) + stage.get("elapsed_ms", 0)
    return timings


# Global service instance
_chat_service: Optional[ChatService] = None


def get_chat_service() -> ChatService:
    """Get or create the chat service instance."""
    global _chat_service
    if _chat_service is None:
        _chat_service = ChatService()
    return _chat_service
