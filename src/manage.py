"""Storefront database management CLI.

Usage:
    python src/manage.py setup-db   # Create availability tables
    python src/manage.py drop-db    # Drop availability tables
    python src/manage.py low-stock  # Print the current restocking list
"""

import argparse
import sys


def _init_domain():
    from availability.domain import availability

    availability.init()
    return availability


def setup_database():
    from availability.utils.db import setup_db

    domain = _init_domain()
    print("Creating availability database schema...")
    setup_db(domain)
    print("Done.")


def drop_database():
    from availability.utils.db import drop_db

    domain = _init_domain()
    print("Dropping availability database schema...")
    drop_db(domain)
    print("Done.")


def print_low_stock():
    from availability.projections.low_stock_report import LowStockReport

    domain = _init_domain()
    with domain.domain_context():
        rows = domain.repository_for(LowStockReport)._dao.query.all().items
        if not rows:
            print("No products or flavors at or below their reorder point.")
            return
        for row in sorted(rows, key=lambda r: (not r.is_critical, r.current_available)):
            marker = "!!" if row.is_critical else "  "
            print(f"{marker} {row.name:<40} {row.current_available:>5} / {row.low_stock_threshold:<5} {row.stock_status}")


def main():
    parser = argparse.ArgumentParser(description="Storefront database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    subparsers.add_parser("low-stock", help="List products and flavors that need restocking")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "low-stock":
        print_low_stock()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
