"""
Intent classification.

Routes a normalized message into one of the canonical intents using an
explicit, ordered rule list. Goal and preferred-format extraction live here
too since both the router and the scorer depend on them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from assistant import taxonomy
from assistant.text import contains_any, contains_word


@dataclass(frozen=True)
class IntentRule:
    """One routing rule: first rule whose predicate matches decides the intent."""

    intent: str
    matches: Callable[[str], bool]


def extract_goal(normalized: str) -> Optional[str]:
    """Return the first goal key whose keywords occur in the message."""
    for goal, keywords in taxonomy.GOAL_KEYWORDS.items():
        if contains_any(normalized, keywords):
            return goal
    return None


def extract_preferred_format(normalized: str) -> Optional[str]:
    """Return the first preferred format triggered by the message."""
    for fmt, keywords in taxonomy.FORMAT_KEYWORDS.items():
        if contains_any(normalized, keywords):
            return fmt
    return None


def is_b2b_message(normalized: str) -> bool:
    return contains_any(normalized, taxonomy.B2B_KEYWORDS) or contains_word(
        normalized, taxonomy.B2B_TOKENS
    )


def normalize_business_type(raw: str, normalized: str) -> str:
    """Map a free-text business type answer to a canonical label, else keep the raw text."""
    for label, keywords in taxonomy.B2B_TYPE_KEYWORDS:
        if contains_any(normalized, keywords):
            return label
    return raw.strip()


INTENT_RULES: list[IntentRule] = [
    IntentRule(taxonomy.ORDER_HELP, lambda text: contains_any(text, taxonomy.ORDER_HELP_KEYWORDS)),
    IntentRule(taxonomy.PRODUCT_SEARCH, lambda text: contains_any(text, taxonomy.PRODUCT_SEARCH_KEYWORDS)),
    IntentRule(taxonomy.BENEFIT_GOAL, lambda text: extract_goal(text) is not None),
]


def classify_intent(normalized: str, rules: Optional[list[IntentRule]] = None) -> str:
    """
    Classify a normalized message.

    Rules are evaluated in list order; the first match wins and anything
    unmatched is "general".
    """
    for rule in rules if rules is not None else INTENT_RULES:
        if rule.matches(normalized):
            return rule.intent
    return taxonomy.GENERAL
