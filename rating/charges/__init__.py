"""
Charge Calculators

STD quote building and LTL carrier/customer pricing.
"""

from .std import build_quote
from .ltl import calculate_carrier_charge, calculate_customer_sell, in_fak_band

__all__ = [
    "build_quote",
    "calculate_carrier_charge",
    "calculate_customer_sell",
    "in_fak_band",
]
