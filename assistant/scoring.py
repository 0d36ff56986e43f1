"""
Product scoring and selection.

Every product gets an additive score built from independent signals. The
score is returned as a breakdown so each contribution can be inspected.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

from assistant.catalog import Product
from assistant.taxonomy import CAFFEINE_FREE
from assistant.text import normalize_text

# Signal weights
CATEGORY_MATCH = 8
GOAL_MATCH = 10
KEYWORD_MATCH = 2
CAFFEINE_FREE_MATCH = 15
CAFFEINE_FREE_MISMATCH = -6
FORMAT_MATCH = 25
FORMAT_MISMATCH = -12
BEST_SELLER = 2
NO_URL = -100


@dataclass(frozen=True)
class Signal:
    name: str
    weight: int


@dataclass
class ScoreBreakdown:
    product: Product
    index: int
    signals: list[Signal] = field(default_factory=list)

    @property
    def total(self) -> int:
        return sum(signal.weight for signal in self.signals)


def score_product(
    product: Product,
    normalized_message: str,
    goal: Optional[str] = None,
    preferred_format: Optional[str] = None,
    index: int = 0,
) -> ScoreBreakdown:
    """Score one product against the message, goal and preferred format."""
    breakdown = ScoreBreakdown(product=product, index=index)
    signals = breakdown.signals

    category = normalize_text(product.category)
    if category and category in normalized_message:
        signals.append(Signal("category", CATEGORY_MATCH))

    if goal and goal in product.goals:
        signals.append(Signal(f"goal:{goal}", GOAL_MATCH))

    for keyword in sorted(product.keywords):
        needle = normalize_text(keyword)
        if needle and needle in normalized_message:
            signals.append(Signal(f"keyword:{needle}", KEYWORD_MATCH))

    if preferred_format == CAFFEINE_FREE:
        if product.caffeine == "no":
            signals.append(Signal("caffeine_free", CAFFEINE_FREE_MATCH))
        elif product.caffeine == "yes":
            signals.append(Signal("caffeinated", CAFFEINE_FREE_MISMATCH))
    elif preferred_format:
        if preferred_format in product.formats:
            signals.append(Signal(f"format:{preferred_format}", FORMAT_MATCH))
        else:
            signals.append(Signal(f"format_mismatch:{preferred_format}", FORMAT_MISMATCH))

    if product.best_seller:
        signals.append(Signal("best_seller", BEST_SELLER))

    if not product.recommendable:
        signals.append(Signal("no_url", NO_URL))

    return breakdown


def rank_products(
    catalog: Sequence[Product],
    normalized_message: str,
    goal: Optional[str] = None,
    preferred_format: Optional[str] = None,
) -> list[ScoreBreakdown]:
    """Score the whole catalog; highest score first, catalog order breaks ties."""
    scored = [
        score_product(product, normalized_message, goal, preferred_format, index)
        for index, product in enumerate(catalog)
    ]
    return sorted(scored, key=lambda b: (-b.total, b.index))


def pick_products(
    catalog: Sequence[Product],
    normalized_message: str,
    goal: Optional[str] = None,
    preferred_format: Optional[str] = None,
    limit: int = 3,
) -> list[Product]:
    """
    Select up to `limit` products to recommend.

    Order of attempts:
      1. preferred format filter (physical format, or caffeine-free products)
      2. products with a strictly positive score
      3. best sellers
      4. first products of the catalog
    Products without a URL are never returned.
    """
    if limit <= 0 or not catalog:
        return []

    ranked = [b for b in rank_products(catalog, normalized_message, goal, preferred_format) if b.product.recommendable]

    if preferred_format == CAFFEINE_FREE:
        decaf = [b.product for b in ranked if b.product.caffeine == "no"]
        if decaf:
            return decaf[:limit]
    elif preferred_format:
        in_format = [b.product for b in ranked if preferred_format in b.product.formats]
        if in_format:
            return in_format[:limit]

    positive = [b.product for b in ranked if b.total > 0]
    if positive:
        return positive[:limit]

    best_sellers = [p for p in catalog if p.best_seller and p.recommendable]
    if best_sellers:
        return best_sellers[:limit]

    return [p for p in catalog if p.recommendable][:limit]
