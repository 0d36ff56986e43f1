"""Shared fixtures: a small in-code catalog, FAQ config and engine builder."""

import pytest

from assistant.b2b import B2BDialogue
from assistant.catalog import FaqConfig, Product
from assistant.engine import ChatEngine
from assistant.mailer import LeadNotifier
from assistant.sessions import InMemorySessionStore


class RecordingNotifier(LeadNotifier):
    def __init__(self, result: bool = True):
        self.result = result
        self.sent = []

    async def send(self, lead, transcript):
        self.sent.append((lead, list(transcript)))
        return self.result


def make_product(pid, **fields):
    data = {"id": pid, "title": f"Produkt {pid}", "url": f"https://anilab.sk/p/{pid}"}
    data.update(fields)
    return Product.model_validate(data)


@pytest.fixture
def catalog():
    return [
        make_product(1, title="Focus Coffee", category="káva", formats=["ground"],
                     goals=["focus", "energy"], bestSeller=True, caffeine="yes"),
        make_product(2, title="Energy Beans", category="káva", formats=["whole_bean"],
                     goals=["energy"], bestSeller=True, caffeine="yes"),
        make_product(3, title="Reishi Decaf", category="káva", formats=["ground"],
                     goals=["sleep", "stress"], caffeine="no", keywords=["reishi"]),
        make_product(4, title="Chaga Instant", category="káva", formats=["instant"],
                     goals=["immunity"], caffeine="yes"),
        make_product(5, title="Sleep Cacao", category="kakao", formats=["instant"],
                     goals=["sleep"], caffeine="no"),
        make_product(6, title="Bez odkazu", url="", category="káva",
                     formats=["ground"], goals=["energy"], bestSeller=True),
    ]


@pytest.fixture
def faq():
    return FaqConfig(
        freeShippingThreshold=49,
        codFee=1.5,
        shippingUrl="https://anilab.sk/doprava",
        paymentUrl="https://anilab.sk/platba",
        returnsUrl="https://anilab.sk/reklamacie",
    )


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def make_engine(catalog, faq, notifier):
    def _make(**overrides):
        params = {
            "catalog": catalog,
            "faq": faq,
            "sessions": InMemorySessionStore(),
            "b2b": B2BDialogue(notifier, contact="b2b@anilab.sk"),
            "completion": None,
            "support_url": "https://anilab.sk/kontakt",
            "limit": 3,
        }
        params.update(overrides)
        return ChatEngine(**params)

    return _make
