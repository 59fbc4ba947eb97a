import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from dotenv import load_dotenv

from . import sample_data
from .config import Config
from .config import load_config as load_runtime_config
from .cost_review import review_proposal
from .errors import DivisionError, ValidationError
from .models import MonthlyStat, Proposal, Vendor, ViewState
from .policy import apply_policy_defaults
from .records_io import load_monthly_stats, load_proposals, load_vendors
from .rendering import (
    FILE_SUFFIXES,
    FORMATS,
    render_cost_review,
    render_proposal_detail,
    render_risk_report,
    render_vendor_detail,
)
from .reporting import make_summary_text, proposal_listing, vendor_listing
from .risk import assess
from .session import DashboardSession

logger = logging.getLogger(__name__)


def load_inputs(cfg: Config) -> Tuple[List[Vendor], List[Proposal], List[MonthlyStat]]:
    """Load vendors, proposals and monthly stats, falling back to the built-in sample data."""

    if cfg.vendors_path:
        vendors = load_vendors(cfg.vendors_path)
    else:
        vendors = sample_data.sample_vendors()
        logger.debug("Using built-in sample vendors (%d)", len(vendors))
    if cfg.proposals_path:
        proposals = load_proposals(cfg.proposals_path)
    else:
        proposals = sample_data.sample_proposals()
        logger.debug("Using built-in sample proposals (%d)", len(proposals))
    if cfg.stats_path:
        stats = load_monthly_stats(cfg.stats_path)
    elif cfg.vendors_path or cfg.proposals_path:
        stats = []
    else:
        stats = sample_data.sample_monthly_stats()
    return vendors, proposals, stats


def _select(records: Sequence, wanted: Optional[Iterable[str]], label: str) -> list:
    if not wanted:
        return list(records)
    by_id = {record.id: record for record in records}
    chosen = []
    for record_id in wanted:
        if record_id not in by_id:
            raise LookupError(f"unknown {label} id {record_id!r}")
        chosen.append(by_id[record_id])
    return chosen


def export_reports(
    cfg: Config,
    vendors: Sequence[Vendor],
    proposals: Sequence[Proposal],
    stats: Sequence[MonthlyStat],
    *,
    vendor_ids: Optional[Iterable[str]] = None,
    proposal_ids: Optional[Iterable[str]] = None,
) -> Dict[str, Path]:
    """Write risk reports, cost reviews and the dashboard summary to ``cfg.output_dir``."""

    out_dir = cfg.output_dir
    out_dir.mkdir(parents=True, exist_ok=True)
    suffix = FILE_SUFFIXES[cfg.output_format]
    artifacts: Dict[str, Path] = {}

    for vendor in _select(vendors, vendor_ids, "vendor"):
        path = out_dir / f"risk_{vendor.id}{suffix}"
        path.write_text(render_risk_report(assess(vendor, cfg.current_year), cfg.output_format), encoding="utf-8")
        artifacts[f"risk:{vendor.id}"] = path

    for proposal in _select(proposals, proposal_ids, "proposal"):
        try:
            report = review_proposal(proposal, vendors)
        except DivisionError as exc:
            logger.warning("Skipping cost review for %s: %s", proposal.id, exc)
            continue
        path = out_dir / f"cost_review_{proposal.id}{suffix}"
        path.write_text(render_cost_review(report, cfg.output_format), encoding="utf-8")
        artifacts[f"review:{proposal.id}"] = path

    summary_path = out_dir / "dashboard_summary.txt"
    summary_path.write_text(make_summary_text(vendors, proposals), encoding="utf-8")
    artifacts["summary"] = summary_path

    if cfg.disable_charts:
        logger.info("Charts disabled; skipping visual summary.")
    else:
        from .visuals import emit_visualizations

        result = emit_visualizations(vendors, proposals, stats, out_dir / "charts")
        for reason in result["skipped"]:
            logger.info("chart skipped => %s", reason)
        if result["pdf"]:
            artifacts["charts_pdf"] = Path(str(result["pdf"]))

    logger.info("Wrote %d artifacts to %s", len(artifacts), out_dir)
    return artifacts


def run(cfg: Config, command: str, target_id: Optional[str] = None) -> int:
    """Execute ``command`` and print its output; returns a process exit code."""

    vendors, proposals, stats = load_inputs(cfg)
    session = DashboardSession(
        vendors=vendors,
        proposals=proposals,
        current_year=cfg.current_year,
        vendor_delay=cfg.vendor_delay,
        proposal_delay=cfg.proposal_delay,
    )

    if command == "dashboard":
        session.navigate(ViewState.DASHBOARD)
        print(make_summary_text(vendors, proposals))
        if not cfg.disable_charts:
            from .visuals import emit_visualizations

            result = emit_visualizations(vendors, proposals, stats, cfg.output_dir / "charts")
            for path in result["charts"]:
                logger.info(" - %s", path)
            for reason in result["skipped"]:
                logger.info("chart skipped => %s", reason)
        return 0
    if command == "vendors":
        session.navigate(ViewState.VENDORS)
        print(vendor_listing(vendors))
        return 0
    if command == "proposals":
        session.navigate(ViewState.PROPOSALS)
        print(proposal_listing(proposals))
        return 0
    if command == "vendor":
        session.navigate(ViewState.VENDORS)
        print(render_vendor_detail(session.select_vendor(target_id or ""), cfg.output_format))
        return 0
    if command == "proposal":
        session.navigate(ViewState.PROPOSALS)
        print(render_proposal_detail(session.select_proposal(target_id or ""), cfg.output_format))
        return 0
    if command == "assess":
        session.navigate(ViewState.VENDORS)
        session.select_vendor(target_id or "")
        logger.info("Analyzing risk factors...")
        print(render_risk_report(session.analyze_selected_vendor(), cfg.output_format))
        return 0
    if command == "review":
        session.navigate(ViewState.PROPOSALS)
        session.select_proposal(target_id or "")
        logger.info("Checking historical pricing and market rates...")
        print(render_cost_review(session.review_selected_proposal(), cfg.output_format))
        return 0
    if command == "export":
        artifacts = export_reports(cfg, vendors, proposals, stats)
        for path in artifacts.values():
            logger.info(" - %s", path)
        return 0
    raise ValueError(f"unknown command {command!r}")


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--vendors", help="Vendor file (JSON, CSV or XLSX)")
    common.add_argument("--proposals", help="Proposal file (JSON, or CSV/XLSX with one row per line item)")
    common.add_argument("--stats", help="Monthly spend/savings file (CSV or XLSX)")
    common.add_argument("--output-dir", help="Directory for exported reports and charts")
    common.add_argument("--format", choices=FORMATS, help="Report output format")
    common.add_argument("--current-year", type=int, help="Year used to age the last audit date")
    common.add_argument("--delay", type=float, help="Simulated analysis latency in seconds")
    common.add_argument("--no-charts", action="store_true", help="Skip chart generation")
    common.add_argument("-v", "--verbose", action="store_true", help="Increase logging verbosity")

    parser = argparse.ArgumentParser(description="Vendor risk and proposal cost analytics")
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("dashboard", parents=[common], help="Show headline procurement figures")
    sub.add_parser("vendors", parents=[common], help="List vendors with risk score and spend")
    vendor_cmd = sub.add_parser("vendor", parents=[common], help="Show one vendor's details")
    vendor_cmd.add_argument("target_id", metavar="VENDOR_ID")
    assess_cmd = sub.add_parser("assess", parents=[common], help="Print a vendor risk assessment")
    assess_cmd.add_argument("target_id", metavar="VENDOR_ID")
    sub.add_parser("proposals", parents=[common], help="List proposals")
    proposal_cmd = sub.add_parser("proposal", parents=[common], help="Show a proposal with its line items")
    proposal_cmd.add_argument("target_id", metavar="PROPOSAL_ID")
    review_cmd = sub.add_parser("review", parents=[common], help="Print a proposal cost review")
    review_cmd.add_argument("target_id", metavar="PROPOSAL_ID")
    sub.add_parser("export", parents=[common], help="Write every report to the output directory")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    load_dotenv()
    runtime_cfg = load_runtime_config(os.environ, args)
    if apply_policy_defaults(runtime_cfg.policy_path):
        runtime_cfg = load_runtime_config(os.environ, args)
    log_level = logging.DEBUG if runtime_cfg.verbose else logging.INFO
    logging.basicConfig(level=log_level, format="%(message)s", stream=sys.stderr)
    try:
        return run(runtime_cfg, args.command, getattr(args, "target_id", None))
    except (ValidationError, DivisionError, LookupError, FileNotFoundError) as exc:
        logger.error("Error: %s", exc)
        return 2
    except Exception:  # pragma: no cover - defensive
        logger.exception("Fatal error during analysis")
        return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
