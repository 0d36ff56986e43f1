"""
Deterministic answers to logistics questions.

This path never touches the ranking engine or the completion service, so
shipping, payment and returns answers are always taken from config.
"""

from __future__ import annotations

from typing import Callable, Optional

from assistant import taxonomy
from assistant.catalog import FaqConfig
from assistant.text import contains_any


def _amount(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}".replace(".", ",")


def _free_shipping(faq: FaqConfig) -> Optional[str]:
    if faq.free_shipping_threshold is None:
        return None
    answer = f"Dopravu máte zadarmo pri objednávke nad {_amount(faq.free_shipping_threshold)} {faq.currency}."
    if faq.shipping_url:
        answer += f" Podrobnosti: {faq.shipping_url}"
    return answer


def _cash_on_delivery(faq: FaqConfig) -> Optional[str]:
    if faq.cod_fee is None:
        return None
    return f"Platba na dobierku je možná, poplatok je {_amount(faq.cod_fee)} {faq.currency}."


def _shipping(faq: FaqConfig) -> Optional[str]:
    if not faq.shipping_url:
        return None
    answer = f"Ceny a možnosti dopravy nájdete tu: {faq.shipping_url}"
    if faq.free_shipping_threshold is not None:
        answer += f" (nad {_amount(faq.free_shipping_threshold)} {faq.currency} je doprava zadarmo)"
    return answer


def _payment(faq: FaqConfig) -> Optional[str]:
    if not faq.payment_url:
        return None
    return f"Prehľad spôsobov platby nájdete tu: {faq.payment_url}"


def _returns(faq: FaqConfig) -> Optional[str]:
    if not faq.returns_url:
        return None
    return f"Ako vrátiť tovar alebo podať reklamáciu, nájdete tu: {faq.returns_url}"


FAQ_CHECKS: list[tuple[str, list[str], Callable[[FaqConfig], Optional[str]]]] = [
    ("free_shipping", taxonomy.FAQ_FREE_SHIPPING_KEYWORDS, _free_shipping),
    ("cash_on_delivery", taxonomy.FAQ_COD_KEYWORDS, _cash_on_delivery),
    ("shipping", taxonomy.FAQ_SHIPPING_KEYWORDS, _shipping),
    ("payment", taxonomy.FAQ_PAYMENT_KEYWORDS, _payment),
    ("returns", taxonomy.FAQ_RETURNS_KEYWORDS, _returns),
]


def resolve_faq(normalized: str, faq: Optional[FaqConfig]) -> Optional[str]:
    """
    Answer a logistics question from config.

    The first check whose keywords match and whose config field is populated
    produces the answer. Returns None if nothing applies.
    """
    if faq is None:
        return None
    for _name, keywords, render in FAQ_CHECKS:
        if contains_any(normalized, keywords):
            answer = render(faq)
            if answer:
                return answer
    return None
