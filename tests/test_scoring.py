from assistant import taxonomy
from assistant.scoring import (
    BEST_SELLER,
    CATEGORY_MATCH,
    FORMAT_MISMATCH,
    GOAL_MATCH,
    NO_URL,
    pick_products,
    rank_products,
    score_product,
)
from assistant.text import normalize_text

from conftest import make_product


def _ids(products):
    return [p.id for p in products]


def test_score_breakdown_lists_each_signal(catalog):
    breakdown = score_product(catalog[0], normalize_text("káva na energiu"), goal="energy")
    names = {s.name for s in breakdown.signals}
    assert {"category", "goal:energy", "best_seller"} <= names
    assert breakdown.total == CATEGORY_MATCH + GOAL_MATCH + BEST_SELLER


def test_product_without_url_is_penalized(catalog):
    breakdown = score_product(catalog[5], "", goal="energy")
    assert breakdown.total == GOAL_MATCH + BEST_SELLER + NO_URL


def test_format_mismatch_is_penalized(catalog):
    breakdown = score_product(catalog[3], "", preferred_format=taxonomy.GROUND)
    assert breakdown.total == FORMAT_MISMATCH


def test_rank_breaks_ties_by_catalog_order():
    products = [make_product(i, category="káva") for i in range(1, 5)]
    ranked = rank_products(products, normalize_text("káva"))
    assert [b.product.id for b in ranked] == ["1", "2", "3", "4"]


def test_caffeine_free_filter_returns_only_decaf(catalog):
    picked = pick_products(catalog, normalize_text("káva bez kofeínu na spánok"),
                           goal="sleep", preferred_format=taxonomy.CAFFEINE_FREE)
    assert _ids(picked) == ["3", "5"]
    assert all(p.caffeine == "no" for p in picked)


def test_physical_format_filter_is_hard(catalog):
    picked = pick_products(catalog, "", goal="sleep", preferred_format=taxonomy.INSTANT)
    assert _ids(picked) == ["5", "4"]


def test_positive_scores_when_no_format(catalog):
    picked = pick_products(catalog, normalize_text("reishi"), goal="sleep", limit=2)
    assert _ids(picked) == ["3", "5"]


def test_falls_back_to_best_sellers_then_catalog_order():
    products = [
        make_product(1, formats=["ground"]),
        make_product(2, formats=["ground"], bestSeller=True),
    ]
    assert _ids(pick_products(products, "nic", preferred_format=taxonomy.INSTANT)) == ["2"]

    plain = [make_product(1, url=""), make_product(2), make_product(3)]
    assert _ids(pick_products(plain, "nic", preferred_format=taxonomy.INSTANT, limit=5)) == ["2", "3"]


def test_never_returns_products_without_url(catalog):
    for goal in [None, "energy", "sleep"]:
        for fmt in [None, taxonomy.GROUND, taxonomy.CAFFEINE_FREE]:
            picked = pick_products(catalog, normalize_text("káva"), goal=goal, preferred_format=fmt, limit=10)
            assert all(p.url for p in picked)


def test_empty_catalog_and_zero_limit():
    assert pick_products([], "kava") == []
    assert pick_products([make_product(1)], "kava", limit=0) == []
