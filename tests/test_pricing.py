import pytest

from printshop.pricing import quote


@pytest.mark.parametrize(
    "color, paper_size, print_side, expected",
    [
        ("color", "A3", "double-sided", (54, 5, 59)),
        ("color", "A3", "single-sided", (30, 3, 33)),
        ("color", "A4", "double-sided", (36, 4, 40)),
        ("color", "A4", "single-sided", (20, 2, 22)),
        ("bw", "A3", "double-sided", (27, 3, 30)),
        ("bw", "A3", "single-sided", (15, 2, 17)),
        ("bw", "A4", "double-sided", (18, 2, 20)),
        ("bw", "A4", "single-sided", (10, 1, 11)),
    ],
)
def test_quote_for_ten_copies(color, paper_size, print_side, expected):
    q = quote(10, paper_size, print_side, color)
    assert (q.subtotal, q.tax, q.total) == expected


def test_alice_example():
    q = quote(10, "A3", "double-sided", "color")
    assert q.subtotal == 54
    assert q.tax == 5
    assert q.total == 59


def test_half_way_subtotal_rounds_up():
    # 1 * 1.5 * 1.8 * 5 = 13.5
    q = quote(5, "A3", "double-sided", "bw")
    assert q.subtotal == 14
    assert q.tax == 1
    assert q.total == 15


def test_half_way_tax_rounds_up():
    # subtotal 25, tax 2.5
    q = quote(25, "A4", "single-sided", "bw")
    assert q.tax == 3
    assert q.total == 28


def test_option_matching_is_exact():
    # Only the literal values trigger a multiplier
    assert quote(10, "a3", "Double-Sided", "Color").total == 11
