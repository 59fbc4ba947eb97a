from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from pathlib import Path
from types import SimpleNamespace
from typing import Mapping, Optional

from .rendering import FORMATS

_BOOLEAN_TRUE = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Config:
    """Runtime configuration assembled from environment variables and CLI options."""

    base_dir: Path
    vendors_path: Optional[Path]
    proposals_path: Optional[Path]
    stats_path: Optional[Path]
    output_dir: Path
    output_format: str
    current_year: int
    vendor_delay: float
    proposal_delay: float
    disable_charts: bool
    policy_path: Optional[Path]
    verbose: bool = False


def _to_path(value: object | None) -> Optional[Path]:
    if value is None:
        return None
    if isinstance(value, Path):
        return value.expanduser().resolve()
    text = str(value).strip()
    if not text:
        return None
    return Path(text).expanduser().resolve()


def _to_int(value: object | None) -> Optional[int]:
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    try:
        return int(float(text))
    except ValueError:
        return None


def _to_float(value: object | None) -> Optional[float]:
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    try:
        return float(text)
    except ValueError:
        return None


def _flag(value: object | None) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _BOOLEAN_TRUE


def _namespace(cli_args: object | None) -> SimpleNamespace:
    if cli_args is None:
        return SimpleNamespace()
    if isinstance(cli_args, SimpleNamespace):
        return cli_args
    if hasattr(cli_args, "__dict__"):
        return SimpleNamespace(**{k: v for k, v in vars(cli_args).items()})
    return SimpleNamespace()


def _output_format(value: object | None, default: str = "text") -> str:
    text = str(value or "").strip().lower()
    if text == "md":
        text = "markdown"
    return text if text in FORMATS else default


def load_config(env: Mapping[str, str], cli_args: object | None = None) -> Config:
    """Build a runtime :class:`Config` from environment variables and CLI options."""

    base_dir = Path(__file__).resolve().parents[2]
    default_output_dir = (base_dir / "outputs").resolve()

    vendors_path = _to_path(env.get("PROCANALYTICS_VENDORS"))
    proposals_path = _to_path(env.get("PROCANALYTICS_PROPOSALS"))
    stats_path = _to_path(env.get("PROCANALYTICS_STATS"))
    output_dir = _to_path(env.get("PROCANALYTICS_OUTPUT_DIR")) or default_output_dir
    output_format = _output_format(env.get("PROCANALYTICS_FORMAT"))
    current_year = _to_int(env.get("PROCANALYTICS_CURRENT_YEAR")) or date.today().year
    delay = _to_float(env.get("PROCANALYTICS_ANALYSIS_DELAY"))
    vendor_delay = _to_float(env.get("PROCANALYTICS_VENDOR_DELAY"))
    proposal_delay = _to_float(env.get("PROCANALYTICS_PROPOSAL_DELAY"))
    disable_charts = _flag(env.get("PROCANALYTICS_DISABLE_CHARTS"))
    policy_path = _to_path(env.get("PROCANALYTICS_POLICY"))
    verbose = False

    cli_ns = _namespace(cli_args)
    if getattr(cli_ns, "vendors", None):
        vendors_path = _to_path(cli_ns.vendors) or vendors_path
    if getattr(cli_ns, "proposals", None):
        proposals_path = _to_path(cli_ns.proposals) or proposals_path
    if getattr(cli_ns, "stats", None):
        stats_path = _to_path(cli_ns.stats) or stats_path
    if getattr(cli_ns, "output_dir", None):
        output_dir = _to_path(cli_ns.output_dir) or output_dir
    if getattr(cli_ns, "format", None):
        output_format = _output_format(cli_ns.format, output_format)
    if getattr(cli_ns, "current_year", None) is not None:
        current_year = int(cli_ns.current_year)
    if getattr(cli_ns, "delay", None) is not None:
        delay = max(0.0, float(cli_ns.delay))
    if getattr(cli_ns, "no_charts", False):
        disable_charts = True
    if getattr(cli_ns, "verbose", False):
        verbose = bool(cli_ns.verbose)

    base_delay = max(0.0, delay or 0.0)
    return Config(
        base_dir=base_dir,
        vendors_path=vendors_path,
        proposals_path=proposals_path,
        stats_path=stats_path,
        output_dir=output_dir,
        output_format=output_format,
        current_year=current_year,
        vendor_delay=max(0.0, vendor_delay) if vendor_delay is not None else base_delay,
        proposal_delay=max(0.0, proposal_delay) if proposal_delay is not None else base_delay,
        disable_charts=disable_charts,
        policy_path=policy_path,
        verbose=verbose,
    )


__all__ = ["Config", "load_config"]
