import math

import pytest

from checkout_flow import pricing as P
from checkout_flow.cart import CartLine


@pytest.mark.parametrize("price", [0.01, 1.0, 19.99, 116.0, 999.95, 1_000_000.0])
@pytest.mark.parametrize("rate", [0.0, 8.0, 16.0, 33.3, 100.0])
def test_ex_tax_unit_price_round_trips(price: float, rate: float) -> None:
    ex_unit = P.ex_tax_unit_price(price, rate)
    assert math.isclose(ex_unit * (1 + rate / 100), price, rel_tol=1e-9)


def test_derive_line() -> None:
    line = CartLine(product_id="p", name="x", unit_price=116.0, tax_rate_percent=16.0, quantity=3)
    amounts = P.derive_line(line)
    assert amounts.ex_tax_unit == pytest.approx(100.0)
    assert amounts.ex_tax == pytest.approx(300.0)
    assert amounts.tax_amount == pytest.approx(48.0)
    assert amounts.inc_tax == pytest.approx(348.0)


def test_display_summary_uses_nominal_rate() -> None:
    summary = P.display_summary(200.0)
    assert summary.subtotal == pytest.approx(172.4137931)
    assert summary.tax == pytest.approx(27.5862069)
    assert summary.subtotal + summary.tax == pytest.approx(200.0)


def test_display_and_per_line_paths_diverge_on_mixed_rates() -> None:
    line = CartLine(product_id="p", name="x", unit_price=108.0, tax_rate_percent=8.0)
    per_line = P.derive_line(line)
    display = P.display_summary(108.0)
    assert per_line.tax_amount == pytest.approx(8.0)
    assert display.tax != pytest.approx(per_line.tax_amount)


def test_format_money() -> None:
    assert P.format_money(200) == "200.00"
    assert P.format_money(27.586206) == "27.59"


@pytest.mark.parametrize(
    ("total", "cents"),
    [(200.0, 20000), (0.0, 0), (19.999, 2000), (10.125, 1013), (0.1 + 0.2, 30)],
)
def test_amount_minor_units(total: float, cents: int) -> None:
    assert P.amount_minor_units(total) == cents
