from assistant.formatter import format_reply, render_product

from conftest import make_product


def test_render_product_with_and_without_pitch():
    product = make_product(1, title="Focus Coffee", pitch=" Na sústredenie. ")
    assert render_product(product) == "• Focus Coffee: https://anilab.sk/p/1\n  Na sústredenie."
    assert render_product(make_product(2, title="X")) == "• X: https://anilab.sk/p/2"


def test_format_reply_joins_sections_and_skips_empty():
    products = [make_product(1, title="A"), make_product(2, title="B")]
    text = format_reply("Odporúčam:", products, None, "Pekný deň.")
    assert text == (
        "Odporúčam:\n\n"
        "• A: https://anilab.sk/p/1\n"
        "• B: https://anilab.sk/p/2\n\n"
        "Pekný deň."
    )


def test_format_reply_is_deterministic():
    products = [make_product(1)]
    assert format_reply("a", products, "b?", "c") == format_reply("a", products, "b?", "c")
    assert format_reply() == ""
