"""
Rating Engine

Freight quotation engine: rates a partially specified route against the
lane store's carrier lanes and returns one quote per carrier.
"""

from .calculate_quotes import quote_route
from .ltl_quotes import customer_ltl_readiness, quote_ltl, sell_ltl
from .version import VERSION

__all__ = ["quote_route", "quote_ltl", "sell_ltl", "customer_ltl_readiness", "VERSION"]
