from assistant.catalog import FaqConfig
from assistant.faq import resolve_faq
from assistant.text import normalize_text


def _ask(text, faq):
    return resolve_faq(normalize_text(text), faq)


def test_free_shipping_threshold(faq):
    answer = _ask("Od akej sumy je doprava zadarmo?", faq)
    assert "49 €" in answer
    assert "https://anilab.sk/doprava" in answer


def test_cash_on_delivery_fee(faq):
    assert "1,50 €" in _ask("Koľko stojí dobierka?", faq)


def test_shipping_payment_returns_links(faq):
    assert "https://anilab.sk/doprava" in _ask("Aká je cena dopravy?", faq)
    assert "https://anilab.sk/platba" in _ask("Ako môžem zaplatiť?", faq)
    assert "https://anilab.sk/reklamacie" in _ask("Chcem vrátiť tovar", faq)


def test_missing_field_falls_through_to_next_check():
    faq = FaqConfig(shippingUrl="https://anilab.sk/doprava")
    answer = _ask("Je doprava zadarmo?", faq)
    assert answer.startswith("Ceny a možnosti dopravy")


def test_no_config_or_no_match_returns_none(faq):
    assert _ask("Kedy príde zásielka?", None) is None
    assert _ask("Ahoj", faq) is None
    assert _ask("Ako môžem zaplatiť?", FaqConfig()) is None
