"""Reply text rendering."""

from __future__ import annotations

from typing import Optional, Sequence

from assistant.catalog import Product


def render_product(product: Product) -> str:
    line = f"• {product.title}: {product.url}"
    if product.pitch.strip():
        line += f"\n  {product.pitch.strip()}"
    return line


def format_reply(
    intro: Optional[str] = None,
    products: Sequence[Product] = (),
    question: Optional[str] = None,
    closing: Optional[str] = None,
) -> str:
    """
    Join intro, product block, question and closing with blank lines.

    Empty sections are omitted. Pure function: the same input always gives
    the same text.
    """
    sections = [
        (intro or "").strip(),
        "\n".join(render_product(p) for p in products),
        (question or "").strip(),
        (closing or "").strip(),
    ]
    return "\n\n".join(section for section in sections if section)
