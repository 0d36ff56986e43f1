import asyncio

import pytest

from assistant import taxonomy
from assistant.b2b import MISSING_EMAIL, QUESTIONS, B2BDialogue, parse_contact
from assistant.sessions import Session
from assistant.text import normalize_text

from conftest import RecordingNotifier


def _turn(dialogue, session, text):
    return asyncio.run(dialogue.handle(session, text, normalize_text(text)))


def _walk_to_contact(dialogue, session):
    _turn(dialogue, session, "Máme záujem o veľkoobchod")
    _turn(dialogue, session, "Vlastná značka")
    _turn(dialogue, session, "Slovensko")
    _turn(dialogue, session, "Funkčná káva s hubami")
    return _turn(dialogue, session, "200 kg mesačne")


def test_parse_contact_full_line():
    contact = parse_contact("Jana Nová, Kava s.r.o., jana@kava.sk, www.kava.sk")
    assert contact == {
        "email": "jana@kava.sk",
        "web": "www.kava.sk",
        "name": "Jana Nová",
        "company": "Kava s.r.o.",
    }


def test_parse_contact_handle_and_missing_email():
    contact = parse_contact("peter@shop.eu IG: @kavashop")
    assert contact["email"] == "peter@shop.eu"
    assert contact["web"] == "@kavashop"
    assert parse_contact("zavolajte mi prosím") == {}


def test_parse_contact_ignores_long_name_chunk():
    contact = parse_contact("toto je veľmi dlhá veta ktorá určite nie je meno, jana@kava.sk")
    assert contact["name"] == ""


def test_dialogue_asks_five_questions_in_order():
    dialogue = B2BDialogue(RecordingNotifier())
    session = Session()

    assert _turn(dialogue, session, "Máme záujem o veľkoobchod") == QUESTIONS[1]
    assert session.is_b2b and session.b2b_step == 1
    assert _turn(dialogue, session, "Vlastná značka") == QUESTIONS[2]
    assert _turn(dialogue, session, "Slovensko") == QUESTIONS[3]
    assert _turn(dialogue, session, "Funkčná káva") == QUESTIONS[4]
    assert _turn(dialogue, session, "200 kg mesačne") == QUESTIONS[5]

    assert session.lead.business_type == taxonomy.B2B_TYPE_PRIVATE_LABEL
    assert session.lead.country == "Slovensko"
    assert session.lead.volume == "200 kg mesačne"


def test_contact_step_repeats_until_email():
    notifier = RecordingNotifier()
    dialogue = B2BDialogue(notifier)
    session = Session()
    _walk_to_contact(dialogue, session)

    reply = _turn(dialogue, session, "ozvite sa mi telefonicky")
    assert reply.startswith(MISSING_EMAIL)
    assert session.b2b_step == 5
    assert notifier.sent == []


def test_completed_lead_is_sent_and_session_reset():
    notifier = RecordingNotifier()
    dialogue = B2BDialogue(notifier)
    session = Session()
    _walk_to_contact(dialogue, session)

    reply = _turn(dialogue, session, "Jana Nová, Kava s.r.o., jana@kava.sk")

    assert "jana@kava.sk" in reply
    assert len(notifier.sent) == 1
    lead, _ = notifier.sent[0]
    assert lead.company == "Kava s.r.o."
    assert lead.country == "Slovensko"
    assert session.is_b2b is False
    assert session.b2b_step == 0


def test_failed_dispatch_still_resets_and_points_to_contact():
    dialogue = B2BDialogue(RecordingNotifier(result=False), contact="b2b@anilab.sk")
    session = Session()
    _walk_to_contact(dialogue, session)

    reply = _turn(dialogue, session, "jana@kava.sk")

    assert "nepodarilo" in reply
    assert "b2b@anilab.sk" in reply
    assert session.is_b2b is False


def test_notifier_exception_still_resets_session():
    class ExplodingNotifier(RecordingNotifier):
        async def send(self, lead, transcript):
            raise RuntimeError("boom")

    dialogue = B2BDialogue(ExplodingNotifier())
    session = Session()
    _walk_to_contact(dialogue, session)

    with pytest.raises(RuntimeError):
        _turn(dialogue, session, "jana@kava.sk")
    assert session.is_b2b is False
