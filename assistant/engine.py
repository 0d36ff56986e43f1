"""
Chat Engine

Routes one customer message per call:

    normalize → session → B2B dialogue | intent
        order_help      → FAQ resolver (deterministic, never polished)
        everything else → scorer/picker → formatter → optional LLM polish

The engine holds no global state; catalog, FAQ, session store, completion
client and B2B dialogue are injected.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

from assistant import taxonomy
from assistant.b2b import B2BDialogue
from assistant.catalog import FaqConfig, Product
from assistant.completion import CompletionClient, polish_reply
from assistant.faq import resolve_faq
from assistant.formatter import format_reply
from assistant.intent import (
    classify_intent,
    extract_goal,
    extract_preferred_format,
    is_b2b_message,
)
from assistant.mailer import notifier_configured
from assistant.pipeline_logger import log_stage_event, trace_stage
from assistant.scoring import pick_products
from assistant.sessions import Session, SessionStore
from assistant.text import normalize_text

ROUTE_EMPTY = "empty"
ROUTE_B2B = "b2b"

GREETING = (
    "Dobrý deň! Som ANiLab AI asistent. Napíšte mi, čo hľadáte, napríklad kávu "
    "na energiu, na spánok alebo bez kofeínu, a rád vám odporučím vhodné produkty."
)
CLARIFYING_QUESTION = (
    "Aby som vedel odporučiť presnejšie: na čo má produkt pomôcť (energia, sústredenie, "
    "spánok, stres, imunita) a akú formu preferujete (zrnková, mletá, instantná alebo bez kofeínu)?"
)
CLOSING = "Ak máte ďalšiu otázku, pokojne napíšte."
ORDER_FALLBACK = "S objednávkou, dopravou aj platbou vám rád pomôže náš tím: {url}"
NO_PRODUCTS = "Momentálne vám neviem odporučiť konkrétny produkt."


@dataclass
class ChatResult:
    reply: str
    route: str
    products: list[Product] = field(default_factory=list)
    polished: bool = False


class ChatEngine:
    """Conversational core shared by the HTTP service and the console."""

    def __init__(
        self,
        catalog: Sequence[Product],
        sessions: SessionStore,
        b2b: B2BDialogue,
        faq: Optional[FaqConfig] = None,
        completion: Optional[CompletionClient] = None,
        support_url: str = "",
        limit: int = 3,
    ):
        self.catalog = list(catalog)
        self.faq = faq
        self.sessions = sessions
        self._b2b = b2b
        self._completion = completion
        self._support_url = support_url
        self._limit = limit

    @property
    def polish_enabled(self) -> bool:
        return self._completion is not None and self._completion.configured

    @property
    def lead_mail_enabled(self) -> bool:
        return notifier_configured(self._b2b.notifier)

    async def aclose(self) -> None:
        if self._completion is not None:
            await self._completion.close()

    async def reply(self, message: Optional[str], session_key: str) -> ChatResult:
        """Produce the reply for one message in the given conversation."""
        text = (message or "").strip()
        if not text:
            return ChatResult(reply=GREETING, route=ROUTE_EMPTY)

        normalized = normalize_text(text)
        session = self.sessions.get_or_create(session_key)
        session.remember(text)
        log_stage_event("SESSION", "Session loaded", {
            "b2b_step": session.b2b_step,
            "sessions": len(self.sessions),
        })

        try:
            if session.is_b2b or self._starts_b2b(normalized):
                with trace_stage("B2B", f"step {session.b2b_step}"):
                    answer = await self._b2b.handle(session, text, normalized)
                return ChatResult(reply=answer, route=ROUTE_B2B)

            return await self._route(session, text, normalized)
        finally:
            self.sessions.put(session_key, session)

    @staticmethod
    def _starts_b2b(normalized: str) -> bool:
        """B2B trigger for an idle session; logistics questions stay on the FAQ path."""
        return is_b2b_message(normalized) and classify_intent(normalized) != taxonomy.ORDER_HELP

    async def _route(self, session: Session, text: str, normalized: str) -> ChatResult:
        preferred_format = extract_preferred_format(normalized)
        if preferred_format:
            session.preferred_format = preferred_format
        goal = extract_goal(normalized)
        if goal:
            session.last_goal = goal

        intent = classify_intent(normalized)
        session.last_intent = intent
        log_stage_event("INTENT", "Message classified", {
            "intent": intent,
            "goal": session.last_goal,
            "format": session.preferred_format,
        })

        if intent == taxonomy.ORDER_HELP:
            with trace_stage("FAQ", "resolve"):
                answer = resolve_faq(normalized, self.faq)
            return ChatResult(
                reply=answer or ORDER_FALLBACK.format(url=self._support_url),
                route=intent,
            )

        with trace_stage("RANK", "pick products"):
            products = pick_products(
                self.catalog,
                normalized,
                goal=session.last_goal,
                preferred_format=session.preferred_format,
                limit=self._limit,
            )

        question = None
        if not session.asked_once and not session.last_goal and not session.preferred_format:
            question = CLARIFYING_QUESTION
            session.asked_once = True

        draft = format_reply(self._intro(intent, session, products), products, question, CLOSING)
        with trace_stage("LLM", "polish"):
            answer = await polish_reply(self._completion, draft, text)
        return ChatResult(reply=answer, route=intent, products=products, polished=answer != draft)

    @staticmethod
    def _intro(intent: str, session: Session, products: Sequence[Product]) -> str:
        if not products:
            return NO_PRODUCTS
        if session.last_goal:
            return f"Na {taxonomy.GOAL_LABELS[session.last_goal]} vám odporúčam:"
        if session.preferred_format:
            return f"Ak hľadáte {taxonomy.FORMAT_LABELS[session.preferred_format]}, odporúčam:"
        if intent == taxonomy.PRODUCT_SEARCH:
            return "Toto sú produkty, ktoré vám odporúčam:"
        return "Rád vám pomôžem s výberom. Zákazníci si najčastejšie vyberajú:"
