"""Helper script to write every risk report and cost review to the output directory."""
from __future__ import annotations

import argparse

from procanalytics.cli import main


def _parse_args(argv: list[str] | None = None) -> tuple[argparse.Namespace, list[str]]:
    parser = argparse.ArgumentParser(description="Export procurement analytics reports")
    parser.add_argument(
        "--with-charts",
        action="store_true",
        help="Also render the chart bundle (charts are skipped by default here).",
    )
    return parser.parse_known_args(argv)


if __name__ == "__main__":  # pragma: no cover
    args, remaining = _parse_args()
    forward_args: list[str] = ["export", *remaining]
    if not args.with_charts:
        forward_args.append("--no-charts")
    raise SystemExit(main(forward_args))
