"""
Static catalog and FAQ data.

Both files are read once at startup. A missing or malformed source never
stops the service: the catalog degrades to an empty list and the FAQ to None.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from assistant.pipeline_logger import log_error, log_stage_event, log_warning


class Product(BaseModel):
    """Catalog entry. Immutable for the lifetime of the process."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    title: str
    url: str = ""
    pitch: str = ""
    keywords: frozenset[str] = Field(default_factory=frozenset)
    formats: frozenset[str] = Field(default_factory=frozenset)
    goals: frozenset[str] = Field(default_factory=frozenset)
    best_seller: bool = Field(default=False, alias="bestSeller")
    caffeine: Optional[Literal["yes", "no"]] = None
    category: str = ""

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_text(cls, value):
        return str(value)

    @field_validator("caffeine", mode="before")
    @classmethod
    def _caffeine_flag(cls, value):
        if value is None or value == "":
            return None
        if isinstance(value, bool):
            return "yes" if value else "no"
        text = str(value).strip().lower()
        if text in ("yes", "ano", "áno", "true"):
            return "yes"
        if text in ("no", "nie", "false"):
            return "no"
        return None

    @property
    def recommendable(self) -> bool:
        return bool(self.url.strip())


class FaqConfig(BaseModel):
    """Logistics facts used for deterministic FAQ answers."""

    currency: str = "€"
    free_shipping_threshold: Optional[float] = Field(default=None, alias="freeShippingThreshold")
    cod_fee: Optional[float] = Field(default=None, alias="codFee")
    shipping_url: Optional[str] = Field(default=None, alias="shippingUrl")
    payment_url: Optional[str] = Field(default=None, alias="paymentUrl")
    returns_url: Optional[str] = Field(default=None, alias="returnsUrl")

    model_config = ConfigDict(populate_by_name=True)


def load_catalog(path: Path) -> list[Product]:
    """
    Load the product list from a JSON file.

    Accepts either a top-level list or {"products": [...]}. Entries that do
    not validate are skipped; any file-level problem yields an empty catalog.
    """
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        log_error("CATALOG", f"Catalog not loaded from {path}", e)
        return []

    rows = raw.get("products") if isinstance(raw, dict) else raw
    if not isinstance(rows, list):
        log_warning("CATALOG", "Catalog file has no product list", {"path": str(path)})
        return []

    products: list[Product] = []
    for index, row in enumerate(rows):
        try:
            products.append(Product.model_validate(row))
        except ValidationError as e:
            log_warning("CATALOG", "Skipping malformed product", {"index": index, "errors": e.error_count()})

    log_stage_event("CATALOG", "Catalog loaded", {"path": str(path), "products": len(products)})
    return products


def load_faq(path: Path) -> Optional[FaqConfig]:
    """Load the optional FAQ config. Returns None when absent or invalid."""
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
        faq = FaqConfig.model_validate(raw)
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        log_warning("CATALOG", f"FAQ config not loaded from {path}", {"error": str(e)})
        return None
    log_stage_event("CATALOG", "FAQ config loaded", {"path": str(path)})
    return faq
