"""Entry point: ``python -m trackboard``."""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date

from trackboard.builder import SiteBuilder
from trackboard.exceptions import TrackboardError
from trackboard.reporting.console import print_banner, print_build_report, print_warnings
from trackboard.settings import AppSettings


def _configure_logging(quiet: bool = False) -> None:
    logging.basicConfig(
        level=logging.WARNING if quiet else logging.INFO,
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
        datefmt="%H:%M:%S",
    )
    # Quiet noisy libraries
    logging.getLogger("MARKDOWN").setLevel(logging.WARNING)


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {value!r}") from exc


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="trackboard",
        description="Build the static job-search status site.",
    )
    parser.add_argument("--config", "-c", help="Path to settings YAML (default: settings.yaml)")
    parser.add_argument("--output", "-o", help="Output directory (overrides output_dir)")
    parser.add_argument("--today", type=_parse_date, help="Reference date for the build (YYYY-MM-DD)")
    parser.add_argument(
        "--no-detail-pages",
        action="store_true",
        help="Only build the dashboard, skip per-role pages",
    )
    parser.add_argument("--quiet", "-q", action="store_true", help="Only log warnings and errors")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = _build_parser().parse_args(argv)
    _configure_logging(args.quiet)
    overrides = {"output_dir": args.output}
    if args.no_detail_pages:
        overrides["detail_pages"] = False
    try:
        if not args.quiet:
            print_banner()
        settings = AppSettings.from_yaml(args.config, **overrides)
        report = SiteBuilder(settings, today=args.today).build()
    except TrackboardError as exc:
        logging.error("%s", exc)
        sys.exit(1)
    except KeyboardInterrupt:
        logging.info("Interrupted by user.")
        sys.exit(130)

    print_warnings(report.warnings)
    if not args.quiet:
        print_build_report(report)


if __name__ == "__main__":
    main()
