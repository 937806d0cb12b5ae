import argparse
import logging
import os
import sys
import time
from datetime import datetime
from pathlib import Path
from typing import Sequence

from .analyze import availability_from_coverage, compute_coverage
from .data import fetch_data, parse_reports
from .errors import AvailabilityError
from .logging_utils import setup_logging
from .render import render_html, render_json, render_text

logger = logging.getLogger(__name__)


def run(path: Path | None, url: str | None, fmt: str = "text") -> str:
    """Read the reports, compute availability and render it in ``fmt``."""
    text = fetch_data(path, url)
    membership, timelines = parse_reports(text)
    coverage = compute_coverage(membership, timelines)
    results = availability_from_coverage(coverage)
    if fmt == "json":
        return render_json(results, coverage)
    if fmt == "html":
        return render_html(
            results,
            coverage,
            updated=datetime.now().astimezone().isoformat(timespec="seconds"),
        )
    return render_text(results)


def main(argv: Sequence[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Compute per-station availability from charger reports"
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument("file", type=Path, nargs="?", help="Report file to read")
    source.add_argument(
        "--url",
        default=os.getenv("STATION_UPTIME_DATA_URL"),
        help="Fetch the report from this URL (default: STATION_UPTIME_DATA_URL)",
    )
    parser.add_argument(
        "--format",
        choices=("text", "json", "html"),
        default="text",
        help="Output format",
    )
    parser.add_argument("--output", type=Path, help="Write output here instead of stdout")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    args = parser.parse_args(argv)

    setup_logging(args.debug)

    start = time.monotonic()
    try:
        output = run(args.file, args.url, args.format)
    except AvailabilityError as exc:
        logger.error("ERROR: %s", exc)
        raise SystemExit(exc.exit_code) from exc
    logger.debug("Computed availability in %.3fs", time.monotonic() - start)

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(output, encoding="utf-8")
        logger.info("Wrote report to %s", args.output)
    else:
        sys.stdout.write(output)


if __name__ == "__main__":
    main()
