#!/usr/bin/env python3
"""
Fare cache management utility for the metro fare service.

Usage:
    python manage_cache.py show                         - Show all cached fare records
    python manage_cache.py lookup <startName> <endName> - Look up a fare (cache first)
    python manage_cache.py stations [query]             - List stations matching a query
    python manage_cache.py clear                        - Remove all cached fare records
"""

import logging
import sys
import os
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from metrofare.cache import get_fare_cache
from metrofare.config import settings
from metrofare.exceptions import MetroFareError
from metrofare.services import get_fare_lookup
from metrofare.stations import get_station_directory


def show_cache(args):
    """Display all cached fare records."""
    records = get_fare_cache().entries()

    print("\n" + "="*64)
    print(f"CACHED FARE RECORDS ({settings.CACHE_PATH})")
    print("="*64)
    print(f"{'Start SID':<10} {'End SID':<10} {'From':<16} {'To':<16} {'Fare':<8}")
    print("-"*64)

    for record in records:
        print(
            f"{record.origin_id:<10} {record.destination_id:<10} "
            f"{record.origin_name:<16} {record.destination_name:<16} {record.fare_amount:<8}"
        )

    print("-"*64)
    print(f"Total records: {len(records)}")
    return 0


def lookup_fare(args):
    """Look up the fare between two station names."""
    if len(args) != 2:
        print("Usage: python manage_cache.py lookup <startName> <endName>")
        return 2

    start_name, end_name = args
    directory = get_station_directory()
    origin_id = directory.resolve_identifier(start_name)
    destination_id = directory.resolve_identifier(end_name)

    cached = get_fare_cache().get(origin_id, destination_id) is not None
    record = get_fare_lookup().resolve_fare(origin_id, destination_id)

    source = "cache" if cached else "remote API"
    print(f"{start_name} ({origin_id}) → {end_name} ({destination_id})")
    print(f"  Fare: {record.fare_amount}")
    print(f"  Discount 60%: {record.discount_rate_60}")
    print(f"  Discount 40%: {record.discount_rate_40}")
    print(f"  Source: {source}")
    return 0


def list_stations(args):
    """List stations whose name contains the query."""
    query = args[0] if args else ""
    stations = get_station_directory().search(query)
    for station in stations:
        print(f"{station.identifier:<10} {station.name}")
    print(f"\nMatching stations: {len(stations)}")
    return 0


def clear_cache(args):
    """Remove every cached fare record."""
    confirm = input("Are you sure you want to clear the fare cache? (yes/no): ")

    if confirm.lower() == 'yes':
        get_fare_cache().clear()
        print("Fare cache cleared.")
    else:
        print("Clear cancelled.")
    return 0


def main(argv=None):
    """Main entry point."""
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        print(__doc__)
        return 0

    command = argv[0].lower()

    commands = {
        'show': show_cache,
        'lookup': lookup_fare,
        'stations': list_stations,
        'clear': clear_cache,
    }

    if command not in commands:
        print(f"Unknown command: {command}")
        print(__doc__)
        return 2

    try:
        return commands[command](argv[1:])
    except MetroFareError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    logging.basicConfig(level=settings.LOG_LEVEL, format="%(levelname)s: %(message)s")
    sys.exit(main())
