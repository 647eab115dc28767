"""Command-line interface for the Tokyo event finder."""

import argparse
import logging
import sys

from tokyo_events import __version__


def _serve(args: argparse.Namespace) -> int:
    import uvicorn

    from tokyo_events.api import create_app
    from tokyo_events.config import get_settings

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.reload:
        uvicorn.run(
            "tokyo_events.api:create_app",
            factory=True,
            host=args.host or settings.host,
            port=args.port or settings.port,
            reload=True,
        )
    else:
        uvicorn.run(
            create_app(),
            host=args.host or settings.host,
            port=args.port or settings.port,
        )
    return 0


def _districts(args: argparse.Namespace) -> int:
    from tokyo_events.storage.districts import DistrictCatalog

    current_area = None
    for district in DistrictCatalog().get_all_districts():
        if district.parent_area != current_area:
            current_area = district.parent_area
            print(current_area)
        print(f"  {district.value:<18} {district.name(args.lang)}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Tokyo Event Finder - Search and save events in Tokyo"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the API server")
    serve_parser.add_argument("--host", help="Bind address (default from settings)")
    serve_parser.add_argument("--port", type=int, help="Port (default from settings)")
    serve_parser.add_argument(
        "--reload",
        action="store_true",
        help="Reload on code changes (development only)",
    )
    serve_parser.set_defaults(handler=_serve)

    # Districts command
    districts_parser = subparsers.add_parser(
        "districts", help="List the district catalog"
    )
    districts_parser.add_argument(
        "--lang",
        choices=["ja", "en"],
        default="ja",
        help="Display language",
    )
    districts_parser.set_defaults(handler=_districts)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
