from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from .cli import export_reports, load_inputs
from .config import load_config


@dataclass
class AnalysisOptions:
    vendors_path: Optional[Path] = None
    proposals_path: Optional[Path] = None
    stats_path: Optional[Path] = None
    output_dir: Optional[Path] = None
    output_format: str = "markdown"
    current_year: Optional[int] = None
    vendor_ids: List[str] = field(default_factory=list)
    proposal_ids: List[str] = field(default_factory=list)
    disable_charts: bool = True


def run_analysis(options: AnalysisOptions) -> Dict[str, Path]:
    """Programmatic interface to write risk reports and cost reviews and return artifact paths.

    Keys are ``risk:<vendor id>``, ``review:<proposal id>``, ``summary`` and,
    when charts are enabled, ``charts_pdf``.
    """

    env = dict(os.environ)
    if options.vendors_path:
        env["PROCANALYTICS_VENDORS"] = str(options.vendors_path)
    if options.proposals_path:
        env["PROCANALYTICS_PROPOSALS"] = str(options.proposals_path)
    if options.stats_path:
        env["PROCANALYTICS_STATS"] = str(options.stats_path)
    if options.output_dir:
        env["PROCANALYTICS_OUTPUT_DIR"] = str(options.output_dir)
    if options.current_year is not None:
        env["PROCANALYTICS_CURRENT_YEAR"] = str(options.current_year)
    env["PROCANALYTICS_FORMAT"] = options.output_format
    env["PROCANALYTICS_DISABLE_CHARTS"] = "1" if options.disable_charts else "0"

    cfg = load_config(env, None)
    vendors, proposals, stats = load_inputs(cfg)
    return export_reports(
        cfg,
        vendors,
        proposals,
        stats,
        vendor_ids=options.vendor_ids or None,
        proposal_ids=options.proposal_ids or None,
    )
