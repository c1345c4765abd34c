"""
LTL Charge Calculators

Buy side (carrier cost) and sell side (customer charge) for a list of
shipment lines priced under one LTL discount profile.

Lines whose freight class lies strictly inside the profile's FAK band are
not discounted. The carrier side floors gross at the profile's minimum
charge; the customer side has no floor.
"""

from shared.rounding import round_half_up
from ..data.reference import ACCURACY
from ..models import (
    LineCharge,
    LTLCarrierCharge,
    LTLCustomerSell,
    LTLDiscountProfile,
    ShipmentLine,
)


def in_fak_band(freight_class: float, fak_range: tuple[float, float] | None) -> bool:
    """Class strictly between the band's bounds (bounds in either order)."""
    if fak_range is None:
        return False
    low, high = sorted(float(b) for b in fak_range)
    return low < float(freight_class) < high


def calculate_carrier_charge(
    profile: LTLDiscountProfile,
    lines: list[ShipmentLine],
    accuracy: int = ACCURACY,
) -> LTLCarrierCharge:
    """
    Carrier cost for a shipment.

    Each line's own discount is taken off first, then the profile discount
    (unless the line is in the FAK band or the profile has no discount).

    Returns:
        LTLCarrierCharge. base is the sum of line charges after line
        discounts; gross is raised to the minimum charge when below it.
    """
    base = 0.0
    gross = 0.0
    discount_total = 0.0
    charged = []
    rate = profile.discount / 100

    for line in lines:
        charge = float(line.charge)

        if not profile.discount or in_fak_band(line.freight_class, profile.fak_range):
            charged.append(LineCharge(line.freight_class, charge, discounted=False))
            gross += charge
        else:
            charge = charge * (1 - float(line.discount) / 100)
            saved = rate * charge
            charged.append(LineCharge(line.freight_class, charge, discounted=True))
            gross += charge - saved
            discount_total += saved

        base += charge

    minimum = round_half_up(profile.minimum_charge, accuracy)
    if gross < minimum:
        gross = minimum
    else:
        gross = round_half_up(gross, accuracy)

    fuel_charge = round_half_up(gross * profile.fuel_percent, accuracy)

    return LTLCarrierCharge(
        base=round_half_up(base, accuracy),
        gross=gross,
        fuel_charge=fuel_charge,
        discount_total=round_half_up(discount_total, accuracy),
        total=round_half_up(gross + fuel_charge, accuracy),
        lines=charged,
    )


def calculate_customer_sell(
    profile: LTLDiscountProfile,
    lines: list[ShipmentLine],
    accuracy: int = ACCURACY,
) -> LTLCustomerSell:
    """
    Customer charge for a shipment.

    Line-level discounts do not apply on the sell side. discount_total sums
    the per-line discounts, each rounded.
    """
    total_charge = 0.0
    total_weight = 0.0
    gross = 0.0
    discount_total = 0.0
    rate = profile.discount / 100

    for line in lines:
        charge = float(line.charge)

        if in_fak_band(line.freight_class, profile.fak_range):
            gross += charge
        else:
            saved = rate * charge
            gross += charge - saved
            discount_total += round_half_up(saved, accuracy)

        total_charge += charge
        total_weight += float(line.weight)

    gross = round_half_up(gross, accuracy)
    fuel_charge = round_half_up(gross * profile.fuel_percent, accuracy)

    return LTLCustomerSell(
        total_charge=round_half_up(total_charge, accuracy),
        total_weight=total_weight,
        gross=gross,
        discount_total=round_half_up(discount_total, accuracy),
        fuel_charge=fuel_charge,
        total=round_half_up(gross + fuel_charge, accuracy),
    )
