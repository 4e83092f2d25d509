"""
Command-line interface for geocrypt.

Provides commands for hashing and comparing locations and for inspecting
geohashes and precision levels.
"""

import argparse
import logging
import sys
from typing import Optional

from .errors import GeocryptError, InvalidPrecisionError
from .hasher import BcryptHasher, Hasher, MockHasher
from .precision import (
    DEFAULT_PRECISION,
    MAX_GEOHASH_BITS,
    MAX_PRECISION,
    MIN_PRECISION,
    bits,
    diagonal_metres,
    error,
    geohash,
    location,
    prec,
)
from .verifier import LocationVerifier


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="geocrypt",
        description="One-way hashing of geographic locations",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Hash command
    hash_parser = subparsers.add_parser(
        "hash",
        help="Hash a location",
    )
    hash_parser.add_argument("lat", type=float, help="Latitude in degrees")
    hash_parser.add_argument("lon", type=float, help="Longitude in degrees")
    hash_parser.add_argument(
        "-t", "--text",
        type=str,
        default="",
        help="Note text bound into the hash (default: none)",
    )
    hash_parser.add_argument(
        "-p", "--precision",
        type=int,
        action="append",
        default=[],
        help=f"Precision level {MIN_PRECISION}-{MAX_PRECISION}, may be repeated "
             f"(default: {DEFAULT_PRECISION})",
    )
    hash_parser.add_argument(
        "--mock",
        action="store_true",
        help="Use the fast mock hasher instead of bcrypt (for testing)",
    )

    # Compare command
    compare_parser = subparsers.add_parser(
        "compare",
        help="Compare a location with a hashed location",
    )
    compare_parser.add_argument("hashed", type=str, help="Hashed location")
    compare_parser.add_argument("lat", type=float, help="Latitude in degrees")
    compare_parser.add_argument("lon", type=float, help="Longitude in degrees")
    compare_parser.add_argument(
        "-t", "--text",
        type=str,
        default="",
        help="Note text (default: none)",
    )
    compare_parser.add_argument(
        "--mock",
        action="store_true",
        help="Use the fast mock hasher instead of bcrypt (for testing)",
    )

    # Geohash command
    geohash_parser = subparsers.add_parser(
        "geohash",
        help="Show the geohash of a location",
    )
    geohash_parser.add_argument("lat", type=float, help="Latitude in degrees")
    geohash_parser.add_argument("lon", type=float, help="Longitude in degrees")
    geohash_parser.add_argument(
        "-b", "--bits",
        type=int,
        default=MAX_GEOHASH_BITS,
        help=f"Bit precision (default: {MAX_GEOHASH_BITS})",
    )

    # Location command
    location_parser = subparsers.add_parser(
        "location",
        help="Show the location of a geohash",
    )
    location_parser.add_argument("geohash", type=str, help="Geohash text")

    # Error command
    error_parser = subparsers.add_parser(
        "error",
        help="Show error bounds for precision levels",
    )
    error_parser.add_argument(
        "-p", "--precision",
        type=int,
        default=None,
        help="Precision level (default: all)",
    )

    return parser


def _hasher(args: argparse.Namespace) -> Hasher:
    if args.mock:
        return MockHasher()
    return BcryptHasher()


def cmd_hash(args: argparse.Namespace) -> int:
    """Handle the hash command."""
    verifier = LocationVerifier(_hasher(args))
    hashed = verifier.hash(args.lat, args.lon, args.text, *args.precision)
    print(hashed.decode("ascii"))
    return 0


def cmd_compare(args: argparse.Namespace) -> int:
    """Handle the compare command."""
    verifier = LocationVerifier(_hasher(args))
    n = verifier.compare(args.hashed, args.lat, args.lon, args.text)
    print(f"Match at {n} bits (precision {prec(n)})")
    return 0


def cmd_geohash(args: argparse.Namespace) -> int:
    """Handle the geohash command."""
    print(geohash(args.lat, args.lon, args.bits))
    return 0


def cmd_location(args: argparse.Namespace) -> int:
    """Handle the location command."""
    lat, lon, n = location(args.geohash)
    lat_err, lon_err = error(n)
    print(f"lat={lat:.7f} (+{lat_err:.2e}) lon={lon:.7f} (+{lon_err:.2e}) bits={n}")
    return 0


def cmd_error(args: argparse.Namespace) -> int:
    """Handle the error command."""
    if args.precision is None:
        precs = range(MIN_PRECISION, MAX_PRECISION + 1)
    else:
        if not MIN_PRECISION <= args.precision <= MAX_PRECISION:
            raise InvalidPrecisionError(args.precision)
        precs = [args.precision]

    print("prec  bits  lat_err    lon_err    diag_m (equator)")
    for p in precs:
        n = bits(p)
        lat_err, lon_err = error(n)
        print(f"{p:>4}  {n:>4}  {lat_err:.3e}  {lon_err:.3e}  {diagonal_metres(0.0, 0.0, n):.2f}")
    return 0


COMMANDS = {
    "hash": cmd_hash,
    "compare": cmd_compare,
    "geohash": cmd_geohash,
    "location": cmd_location,
    "error": cmd_error,
}


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 1

    try:
        return COMMANDS[args.command](args)
    except GeocryptError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
