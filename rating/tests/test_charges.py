"""
Unit Tests for the Charge Calculators

Tests STD quote sentinels and the LTL carrier / customer calculators.

Run with: pytest rating/tests/test_charges.py -v
"""

import pytest

from rating.charges import (
    build_quote,
    calculate_carrier_charge,
    calculate_customer_sell,
    in_fak_band,
)
from rating.models import LTLDiscountProfile, Sentinel, ShipmentLine


@pytest.fixture
def profile():
    """60% discount, $100 minimum, 25% fuel, no FAK band."""
    return LTLDiscountProfile(
        carrier_code="LTLA",
        name="LTL Alpha",
        discount=60.0,
        minimum_charge=100.0,
        fuel_percent=0.25,
        class_range=(50.0, 500.0),
        fak_range=None,
    )


def line(freight_class=70.0, weight=500.0, charge=800.0, discount=0.0):
    return ShipmentLine(freight_class, weight, charge, discount)


# =============================================================================
# STD QUOTE
# =============================================================================

class TestBuildQuote:
    """Ranked row -> Quote, with sentinels for unusable figures."""

    @pytest.fixture
    def row(self):
        return {
            "carrier_code": "AAAA",
            "name": "Alpha Freight",
            "is_customer": False,
            "contact_name": "Dana Ops",
            "contact_phone": "312-555-0100",
            "contact_email": "",
            "base": 1800.0,
            "fuel_charge": 180.0,
            "total": 1980.0,
            "miles": 900.0,
            "rate_per_mile": 2.0,
            "note": " Team service ",
        }

    def test_numbers(self, row):
        quote = build_quote(row, stop_offs=1)
        assert quote.base == pytest.approx(1800.0)
        assert quote.miles == 900
        assert isinstance(quote.miles, int)
        assert quote.comments == "Team service"
        assert quote.contact.name == "Dana Ops"
        assert quote.stop_offs == 1
        assert quote.error is False

    def test_zero_fuel_is_included(self, row):
        quote = build_quote({**row, "fuel_charge": 0.0})
        assert quote.fuel_charge is Sentinel.FUEL_INCLUDED
        assert quote.error is False

    def test_flat_lane(self, row):
        assert build_quote({**row, "rate_per_mile": 0.0}).rate_per_mile is Sentinel.FLAT

    def test_zero_base(self, row):
        quote = build_quote({**row, "base": 0.0})
        assert quote.base is Sentinel.MILEAGE_NOT_FOUND
        assert quote.error is True

    def test_rounded_to_zero_base_not_flagged(self, row):
        quote = build_quote({**row, "base": 0.0, "error": False})
        assert quote.base == 0.0
        assert quote.error is False

    def test_ranker_flag_wins(self, row):
        quote = build_quote({**row, "miles": 0.0, "error": True})
        assert quote.base == pytest.approx(1800.0)
        assert quote.error is True

    def test_missing_miles(self, row):
        quote = build_quote({**row, "miles": None})
        assert quote.miles is Sentinel.MILEAGE_NOT_FOUND
        assert quote.error is True

    def test_nan_total(self, row):
        assert build_quote({**row, "total": float("nan")}).total is Sentinel.RATE_ERROR

    def test_sentinel_text(self):
        assert Sentinel.MILEAGE_NOT_FOUND == "Mileage Not Found!"


# =============================================================================
# FAK BAND
# =============================================================================

class TestFakBand:
    """Strictly inside the band, bounds in either order."""

    def test_inside(self):
        assert in_fak_band(70.0, (60.0, 100.0))

    def test_bounds_excluded(self):
        assert not in_fak_band(60.0, (60.0, 100.0))
        assert not in_fak_band(100.0, (60.0, 100.0))

    def test_outside(self):
        assert not in_fak_band(125.0, (60.0, 100.0))

    def test_reversed_bounds(self):
        assert in_fak_band(70.0, (100.0, 60.0))

    def test_no_band(self):
        assert not in_fak_band(70.0, None)


# =============================================================================
# LTL CARRIER
# =============================================================================

class TestCarrierCharge:
    """Buy-side LTL."""

    def test_discounted(self, profile):
        charge = calculate_carrier_charge(profile, [line()])
        assert charge.base == pytest.approx(800.0)
        assert charge.gross == pytest.approx(320.0)
        assert charge.discount_total == pytest.approx(480.0)
        assert charge.fuel_charge == pytest.approx(80.0)
        assert charge.total == pytest.approx(400.0)
        assert charge.lines[0].discounted is True

    def test_minimum_floor(self, profile):
        charge = calculate_carrier_charge(profile, [line(charge=200.0)])
        assert charge.gross == pytest.approx(100.0)
        assert charge.fuel_charge == pytest.approx(25.0)
        assert charge.total == pytest.approx(125.0)

    def test_above_minimum_unchanged(self, profile):
        charge = calculate_carrier_charge(profile, [line(charge=300.0)])
        assert charge.gross == pytest.approx(120.0)

    def test_fak_line_not_discounted(self, profile):
        fak = profile._replace(fak_range=(60.0, 100.0), use_fak=True)
        charge = calculate_carrier_charge(fak, [line(freight_class=70.0), line(freight_class=100.0)])
        assert [l.discounted for l in charge.lines] == [False, True]
        assert charge.gross == pytest.approx(800.0 + 320.0)
        assert charge.discount_total == pytest.approx(480.0)

    def test_line_discount_first(self, profile):
        """10% line discount, then 60% profile discount."""
        charge = calculate_carrier_charge(profile, [line(charge=1000.0, discount=10.0)])
        assert charge.base == pytest.approx(900.0)
        assert charge.gross == pytest.approx(360.0)

    def test_no_profile_discount(self, profile):
        charge = calculate_carrier_charge(profile._replace(discount=0.0), [line()])
        assert charge.gross == pytest.approx(800.0)
        assert charge.discount_total == 0.0


# =============================================================================
# LTL CUSTOMER
# =============================================================================

class TestCustomerSell:
    """Sell-side LTL."""

    def test_discounted(self, profile):
        sell = calculate_customer_sell(profile, [line(), line(weight=250.0, charge=400.0)])
        assert sell.total_charge == pytest.approx(1200.0)
        assert sell.total_weight == pytest.approx(750.0)
        assert sell.gross == pytest.approx(480.0)
        assert sell.discount_total == pytest.approx(720.0)
        assert sell.fuel_charge == pytest.approx(120.0)
        assert sell.total == pytest.approx(600.0)

    def test_no_minimum_floor(self, profile):
        sell = calculate_customer_sell(profile._replace(minimum_charge=1000.0), [line()])
        assert sell.gross == pytest.approx(320.0)

    def test_line_discount_ignored(self, profile):
        sell = calculate_customer_sell(profile, [line(discount=50.0)])
        assert sell.gross == pytest.approx(320.0)

    def test_fak_line(self, profile):
        fak = profile._replace(fak_range=(60.0, 100.0), use_fak=True)
        sell = calculate_customer_sell(fak, [line(freight_class=85.0)])
        assert sell.gross == pytest.approx(800.0)
        assert sell.discount_total == 0.0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
