"""
Quote a Route
=============

Loads a CSV reference snapshot, quotes one STD route and prints the quote
table. With --customer and --line, also prints LTL carrier quotes and the
customer sell.

Mileage:
    No mileage service is wired in here. Point-to-point routes use the
    --hhg-miles / --practical-miles overrides like every other route.

Usage:
    python -m rating.scripts.quote --reference-dir snapshot/ \\
        --origin-city Chicago --origin-state IL \\
        --destination-city Dallas --destination-state TX \\
        --mode V --hhg-miles 925

    python -m rating.scripts.quote --reference-dir snapshot/ \\
        --origin-state IL --origin-zip 60601 --destination-state TX --destination-zip 75201 \\
        --mode LTL --customer ACME --line 70,500,800 --line 85,300,450
"""

import argparse
import logging
import sys
from datetime import date

from rating.calculate_quotes import quote_route
from rating.data import load_reference_csv
from rating.errors import RatingError
from rating.ltl_quotes import customer_ltl_readiness, quote_ltl, sell_ltl
from rating.models import Location, RouteSpec, Sentinel, ShipmentLine
from rating.route_input import clean_text, parse_ship_date


# =============================================================================
# CONFIGURATION
# =============================================================================

COLUMN_WIDTHS = {
    "carrier_code": 8,
    "name": 28,
    "base": 11,
    "fuel": 11,
    "total": 11,
    "miles": 8,
    "rpm": 8,
}


# =============================================================================
# OUTPUT
# =============================================================================

def _fmt(value) -> str:
    if isinstance(value, Sentinel):
        return value.value
    if isinstance(value, float):
        return f"{value:,.2f}"
    return str(value)


def print_quote_table(table) -> None:
    """Print an STD quote table."""
    print("\n" + "=" * 60)
    print(f"STD QUOTES  ({table.granularity_code}, v{table.version})")
    print("=" * 60)

    if table.message:
        print(f"  {table.message}")
        return
    if not table.quotes:
        print("  No matching lanes")
        return

    w = COLUMN_WIDTHS
    print(
        f"  {'CODE':<{w['carrier_code']}} {'NAME':<{w['name']}} {'BASE':>{w['base']}} "
        f"{'FUEL':>{w['fuel']}} {'TOTAL':>{w['total']}} {'MILES':>{w['miles']}} {'RPM':>{w['rpm']}}"
    )
    for q in table.quotes:
        flag = " !" if q.error else ""
        print(
            f"  {q.carrier_code:<{w['carrier_code']}} {q.name[:w['name']]:<{w['name']}} "
            f"{_fmt(q.base):>{w['base']}} {_fmt(q.fuel_charge):>{w['fuel']}} "
            f"{_fmt(q.total):>{w['total']}} {_fmt(q.miles):>{w['miles']}} "
            f"{_fmt(q.rate_per_mile):>{w['rpm']}}{flag}"
        )
        if q.comments:
            print(f"      {q.comments}")


def print_ltl(route, reference) -> None:
    """Print LTL carrier quotes and the customer sell."""
    print("\n" + "=" * 60)
    print("LTL QUOTES")
    print("=" * 60)

    readiness = customer_ltl_readiness(reference, route.customer_code)
    if not readiness.valid:
        print(f"  {readiness.reason}")
        return

    for quote in quote_ltl(route, reference):
        charge = quote.charge
        print(
            f"  {quote.profile.carrier_code:<8} {quote.profile.name[:28]:<28} "
            f"gross {charge.gross:>10,.2f}  fuel {charge.fuel_charge:>9,.2f}  total {charge.total:>10,.2f}"
        )

    sell = sell_ltl(route, reference)
    if sell is None:
        print("  No customer lane matches this shipment")
    else:
        print(f"\n  Customer sell: {sell.charge.total:,.2f} (gross {sell.charge.gross:,.2f})")


# =============================================================================
# MAIN
# =============================================================================

def parse_line(text: str) -> ShipmentLine:
    """CLASS,WEIGHT,CHARGE[,DISCOUNT]"""
    parts = [p.strip() for p in text.split(",")]
    if len(parts) not in (3, 4):
        raise argparse.ArgumentTypeError(f"Expected CLASS,WEIGHT,CHARGE[,DISCOUNT], got {text!r}")
    try:
        values = [float(p) for p in parts]
    except ValueError:
        raise argparse.ArgumentTypeError(f"Non-numeric shipment line: {text!r}")
    return ShipmentLine(*values)


def main():
    parser = argparse.ArgumentParser(
        description="Quote a route against a CSV reference snapshot",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Snapshot files (one per reference frame, ISO dates):
  precedences.csv lanes.csv rate_profiles.csv carriers.csv
  fuel_tables.csv fuel_prices.csv [ltl_lanes.csv fak_ranges.csv]

Examples:
  python -m rating.scripts.quote --reference-dir snapshot/ --origin-city Chicago --origin-state IL \\
      --destination-city Dallas --destination-state TX --mode V --hhg-miles 925
        """
    )

    parser.add_argument("--reference-dir", required=True, help="Directory with reference CSV files")

    for side in ("origin", "destination"):
        parser.add_argument(f"--{side}-city", default="", help=f"{side.title()} city")
        parser.add_argument(f"--{side}-state", default="", help=f"{side.title()} state code")
        parser.add_argument(f"--{side}-zip", default="", help=f"{side.title()} zip")
        parser.add_argument(f"--{side}-country", default="USA", help=f"{side.title()} country (default: USA)")

    parser.add_argument("--ship-date", type=str, default=None, help="Ship date YYYY-MM-DD (default: today)")
    parser.add_argument("--mode", required=True, help="Transport mode code")
    parser.add_argument("--hhg-miles", type=int, default=0, help="Household goods miles override")
    parser.add_argument("--practical-miles", type=int, default=0, help="Practical miles override")
    parser.add_argument("--stop-offs", type=int, default=0, help="Number of stop-offs")
    parser.add_argument("--customer", default="", help="Customer code (LTL)")
    parser.add_argument(
        "--line",
        action="append",
        type=parse_line,
        default=[],
        metavar="CLASS,WEIGHT,CHARGE[,DISCOUNT]",
        help="LTL shipment line, repeatable"
    )
    parser.add_argument("--verbose", action="store_true", help="Debug logging")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        route = RouteSpec(
            origin=Location(
                clean_text(args.origin_city), clean_text(args.origin_state),
                clean_text(args.origin_zip), clean_text(args.origin_country),
            ),
            destination=Location(
                clean_text(args.destination_city), clean_text(args.destination_state),
                clean_text(args.destination_zip), clean_text(args.destination_country),
            ),
            ship_date=parse_ship_date(args.ship_date) if args.ship_date else date.today(),
            mode=clean_text(args.mode),
            customer_code=clean_text(args.customer),
            household_goods_miles=args.hhg_miles,
            practical_miles=args.practical_miles,
            stop_offs=args.stop_offs,
            shipment_lines=tuple(args.line),
        )

        print(f"Loading reference snapshot from {args.reference_dir}...")
        reference = load_reference_csv(args.reference_dir)
        print(f"  {reference.lanes.height:,} STD lanes, {reference.ltl_lanes.height:,} LTL lanes")

        if route.shipment_lines and route.customer_code:
            print_ltl(route, reference)
        else:
            print_quote_table(quote_route(route, reference))

    except KeyboardInterrupt:
        print("\n\nCancelled.")
        sys.exit(1)
    except RatingError as e:
        print(f"\nError: {e}")
        sys.exit(2)


if __name__ == "__main__":
    main()
