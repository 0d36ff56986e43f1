"""
B2B lead dialogue.

Five fixed questions collect a business inquiry over successive turns:

    idle → 1 business type → 2 country → 3 products → 4 volume → 5 contact → idle

The last step needs an email address; once found the lead is handed to the
notifier and the session always returns to idle, whatever the dispatch result.
"""

from __future__ import annotations

import re

from assistant.intent import normalize_business_type
from assistant.mailer import Lead, LeadNotifier
from assistant.pipeline_logger import log_stage_event
from assistant.sessions import Session

EMAIL_RE = re.compile(r"[\w.+-]+@[\w-]+(?:\.[\w-]+)+")
WEB_RE = re.compile(r"(?:https?://|www\.)[^\s,;]+", re.IGNORECASE)
HANDLE_RE = re.compile(r"(?<![\w@])@[A-Za-z0-9_.]{2,}")

NAME_MAX_CHARS = 60
NAME_MAX_WORDS = 5

QUESTIONS = {
    1: (
        "Ďakujem za záujem o spoluprácu! Aby sme vám vedeli pripraviť ponuku, "
        "položím vám 5 krátkych otázok.\n\n"
        "1/5 O aký typ spolupráce máte záujem? Private label (vlastná značka), "
        "veľkoobchod / predajca, alebo distribúcia?"
    ),
    2: "2/5 Do ktorej krajiny by sme tovar dodávali?",
    3: "3/5 O ktoré produkty alebo kategórie máte záujem (napr. funkčná káva, kapsuly, instantné zmesi)?",
    4: "4/5 Aký približný objem odberu plánujete (napr. kusy alebo kg mesačne)?",
    5: (
        "5/5 Nakoniec nám prosím nechajte kontaktný e-mail. "
        "Ak chcete, pridajte aj meno, firmu a web či sociálne siete."
    ),
}

MISSING_EMAIL = "V správe som nenašiel e-mailovú adresu."


def _plausible_name(chunk: str) -> bool:
    return 0 < len(chunk) <= NAME_MAX_CHARS and len(chunk.split()) <= NAME_MAX_WORDS


def parse_contact(text: str) -> dict[str, str]:
    """
    Pull email, web/handle, name and company out of a free-text contact answer.

    Example:
        "Jana Nová, Kava s.r.o., jana@kava.sk, www.kava.sk"
        -> email jana@kava.sk, web www.kava.sk, name Jana Nová, company Kava s.r.o.
    """
    found = EMAIL_RE.search(text)
    if not found:
        return {}
    email = found.group(0).rstrip(".")
    remainder = text.replace(found.group(0), " ")

    web = ""
    web_match = WEB_RE.search(remainder) or HANDLE_RE.search(remainder)
    if web_match:
        web = web_match.group(0).rstrip(".")
        remainder = remainder.replace(web_match.group(0), " ")

    chunks = [c.strip(" \t-:") for c in re.split(r"[,;\n]", remainder)]
    chunks = [c for c in chunks if c]
    name = chunks[0] if chunks and _plausible_name(chunks[0]) else ""
    company = chunks[1] if len(chunks) > 1 and _plausible_name(chunks[1]) else ""

    return {"email": email, "web": web, "name": name, "company": company}


class B2BDialogue:
    """Drives the lead form for one session per call."""

    def __init__(self, notifier: LeadNotifier, contact: str = ""):
        self._notifier = notifier
        self._contact = contact

    @property
    def notifier(self) -> LeadNotifier:
        return self._notifier

    async def handle(self, session: Session, message: str, normalized: str) -> str:
        """Advance the dialogue by one turn and return the reply text."""
        if not session.is_b2b:
            session.is_b2b = True
            session.b2b_step = 1
            log_stage_event("B2B", "Dialogue started")
            return QUESTIONS[1]

        step = session.b2b_step
        answer = message.strip()
        lead = session.lead

        if step == 1:
            lead.business_type = normalize_business_type(answer, normalized)
        elif step == 2:
            lead.country = answer
        elif step == 3:
            lead.products = answer
        elif step == 4:
            lead.volume = answer
        else:
            return await self._finish(session, answer)

        session.b2b_step = step + 1
        log_stage_event("B2B", "Step answered", {"step": step})
        return QUESTIONS[session.b2b_step]

    async def _finish(self, session: Session, answer: str) -> str:
        contact = parse_contact(answer)
        if not contact:
            log_stage_event("B2B", "Contact without email, asking again")
            return f"{MISSING_EMAIL} {QUESTIONS[5]}"

        draft = session.lead
        draft.email = contact["email"]
        draft.web = contact["web"] or draft.web
        draft.name = contact["name"] or draft.name
        draft.company = contact["company"] or draft.company
        lead = Lead(
            business_type=draft.business_type,
            country=draft.country,
            products=draft.products,
            volume=draft.volume,
            name=draft.name,
            company=draft.company,
            email=draft.email,
            web=draft.web,
        )

        try:
            sent = await self._notifier.send(lead, list(session.history))
        finally:
            session.reset_b2b()

        log_stage_event("B2B", "Dialogue finished", {"sent": sent})
        return self._closing(lead, sent)

    def _closing(self, lead: Lead, sent: bool) -> str:
        if sent:
            return (
                "Ďakujeme! Váš dopyt sme odovzdali nášmu B2B tímu, "
                f"ozveme sa vám na {lead.email} čo najskôr."
            )
        reply = "Ďakujeme! Dopyt sa nám nepodarilo odoslať automaticky."
        if self._contact:
            return reply + f" Napíšte nám prosím priamo na {self._contact}."
        return reply + " Skúste nás prosím kontaktovať e-mailom."
