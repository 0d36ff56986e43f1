"""
Lead notification.

A LeadNotifier hands a finished B2B lead to a human. The SMTP notifier is
built only when the full mail configuration is present; otherwise the
NullLeadNotifier is used and every dispatch reports failure.
"""

from __future__ import annotations

import asyncio
import smtplib
import ssl
from abc import ABC, abstractmethod
from dataclasses import dataclass
from email.message import EmailMessage
from typing import Optional, Sequence

from assistant.logging_config import get_logger
from assistant.pipeline_logger import log_error, log_stage_event

logger = get_logger(__name__)

TRANSCRIPT_LIMIT = 12


@dataclass(frozen=True)
class Lead:
    """Completed B2B inquiry. Only dispatched with a non-empty email."""

    business_type: str
    country: str
    products: str
    volume: str
    name: str
    company: str
    email: str
    web: str


@dataclass(frozen=True)
class SmtpSettings:
    host: str
    port: int
    user: str
    password: str
    sender: str
    recipient: str


class LeadDispatchError(Exception):
    """Raised by a transport when a lead could not be delivered."""


class LeadNotifier(ABC):
    @abstractmethod
    async def send(self, lead: Lead, transcript: Sequence[str]) -> bool:
        """Deliver the lead; True on success, False otherwise. Never raises."""


class NullLeadNotifier(LeadNotifier):
    async def send(self, lead: Lead, transcript: Sequence[str]) -> bool:
        log_stage_event("MAIL", "Mail not configured, lead not sent")
        return False


def render_lead_email(lead: Lead, transcript: Sequence[str]) -> tuple[str, str]:
    """Build (subject, body) for a lead notification."""
    subject = f"B2B dopyt: {lead.company or lead.email}"
    fields = [
        ("Typ spolupráce", lead.business_type),
        ("Krajina", lead.country),
        ("Produkty", lead.products),
        ("Objem", lead.volume),
        ("Meno", lead.name),
        ("Firma", lead.company),
        ("E-mail", lead.email),
        ("Web / sociálne siete", lead.web),
    ]
    lines = ["Nový B2B dopyt z chatu", ""]
    lines.extend(f"{label}: {value or '-'}" for label, value in fields)
    excerpt = list(transcript)[-TRANSCRIPT_LIMIT:]
    if excerpt:
        lines.extend(["", f"Posledné správy ({len(excerpt)}):"])
        lines.extend(f"> {message}" for message in excerpt)
    return subject, "\n".join(lines) + "\n"


class SmtpLeadNotifier(LeadNotifier):
    """Sends lead notifications through an SMTP server in a worker thread."""

    def __init__(self, settings: SmtpSettings):
        self._settings = settings

    def _deliver(self, message: EmailMessage) -> None:
        s = self._settings
        try:
            if s.port == 465:
                with smtplib.SMTP_SSL(s.host, s.port, context=ssl.create_default_context()) as smtp:
                    smtp.login(s.user, s.password)
                    smtp.send_message(message)
            else:
                with smtplib.SMTP(s.host, s.port) as smtp:
                    smtp.starttls(context=ssl.create_default_context())
                    smtp.login(s.user, s.password)
                    smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            raise LeadDispatchError(str(e)) from e

    async def send(self, lead: Lead, transcript: Sequence[str]) -> bool:
        subject, body = render_lead_email(lead, transcript)
        message = EmailMessage()
        message["Subject"] = subject
        message["From"] = self._settings.sender
        message["To"] = self._settings.recipient
        message["Reply-To"] = lead.email
        message.set_content(body)

        try:
            with logger.mail_span(host=self._settings.host):
                await asyncio.to_thread(self._deliver, message)
        except LeadDispatchError as e:
            log_error("MAIL", "Lead dispatch failed", e)
            return False
        log_stage_event("MAIL", "Lead dispatched", {"company": lead.company, "email": lead.email})
        return True


def build_notifier(
    host: str,
    port: int,
    user: str,
    password: str,
    sender: str,
    recipient: str,
) -> LeadNotifier:
    """Return an SMTP notifier when every credential is present, else the null notifier."""
    if not all([host, port, user, password, sender, recipient]):
        return NullLeadNotifier()
    return SmtpLeadNotifier(SmtpSettings(host, int(port), user, password, sender, recipient))


def notifier_configured(notifier: Optional[LeadNotifier]) -> bool:
    return isinstance(notifier, SmtpLeadNotifier)
