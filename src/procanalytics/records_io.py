"""Readers for vendor, proposal and monthly spend files (JSON, CSV, XLSX)."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

from .errors import ValidationError
from .models import MonthlyStat, Proposal, Vendor
from .validation import proposals_from_records, vendors_from_records

logger = logging.getLogger(__name__)

_TABULAR_SUFFIXES = {".csv", ".xlsx", ".xls"}

# Proposal-level columns in the one-row-per-line-item tabular layout.
_PROPOSAL_COLUMNS = ("title", "vendorId", "vendor_id", "status", "submissionDate", "submission_date", "amount")
_ITEM_COLUMN_ALIASES = {
    "itemId": "id",
    "item_id": "id",
    "itemDescription": "description",
    "item_description": "description",
    "itemCategory": "category",
    "item_category": "category",
}


def _read_json_records(path: Path, key: str) -> List[Dict[str, Any]]:
    with path.open("r", encoding="utf-8") as handle:
        payload = json.load(handle)
    if isinstance(payload, dict):
        if key not in payload:
            raise ValidationError(f"expected a '{key}' key in {path}", field=key)
        payload = payload[key]
    if not isinstance(payload, list):
        raise ValidationError(f"expected a list of {key} in {path}")
    return payload


def _read_frame(path: Path) -> pd.DataFrame:
    if path.suffix.lower() == ".csv":
        df = pd.read_csv(path, dtype=str, keep_default_na=False)
    else:
        df = pd.read_excel(path, dtype=str).fillna("")
    df.columns = [str(col).strip() for col in df.columns]
    return df


def _check_exists(path: Path) -> Path:
    resolved = Path(path).expanduser()
    if not resolved.exists():
        raise FileNotFoundError(f"data file not found: {resolved}")
    return resolved


def load_vendors(path: Path) -> List[Vendor]:
    """Load and validate vendors from ``path``."""

    path = _check_exists(path)
    if path.suffix.lower() in _TABULAR_SUFFIXES:
        records = _read_frame(path).to_dict(orient="records")
    else:
        records = _read_json_records(path, "vendors")
    vendors = vendors_from_records(records)
    logger.info("Loaded %d vendors from %s", len(vendors), path)
    return vendors


def _group_item_rows(df: pd.DataFrame) -> List[Dict[str, Any]]:
    id_column = next((col for col in ("proposalId", "proposal_id") if col in df.columns), None)
    if id_column is None:
        raise ValidationError("tabular proposal files need a proposalId column", field="proposalId")
    df = df.rename(columns=_ITEM_COLUMN_ALIASES)

    records: List[Dict[str, Any]] = []
    for proposal_id, block in df.groupby(id_column, sort=False):
        head = block.iloc[0]
        record: Dict[str, Any] = {"id": proposal_id}
        for column in _PROPOSAL_COLUMNS:
            if column in block.columns:
                record[column] = head[column]
        item_columns = [col for col in block.columns if col not in _PROPOSAL_COLUMNS and col != id_column]
        record["items"] = block[item_columns].to_dict(orient="records")
        records.append(record)
    return records


def load_proposals(path: Path) -> List[Proposal]:
    """Load and validate proposals from ``path``.

    JSON files hold nested ``items`` lists; CSV/XLSX files hold one row per
    line item with the proposal columns repeated on every row.
    """

    path = _check_exists(path)
    if path.suffix.lower() in _TABULAR_SUFFIXES:
        records = _group_item_rows(_read_frame(path))
    else:
        records = _read_json_records(path, "proposals")
    proposals = proposals_from_records(records)
    logger.info(
        "Loaded %d proposals (%d line items) from %s",
        len(proposals),
        sum(len(p.items) for p in proposals),
        path,
    )
    return proposals


def load_monthly_stats(path: Optional[Path]) -> List[MonthlyStat]:
    """Monthly spend/savings rows from a CSV or XLSX file with month, spend, savings columns."""

    if path is None:
        return []
    path = _check_exists(path)
    df = _read_frame(path) if path.suffix.lower() in _TABULAR_SUFFIXES else pd.DataFrame(_read_json_records(path, "stats"))
    missing = {"month", "spend", "savings"} - set(df.columns)
    if missing:
        raise ValidationError(f"missing columns {sorted(missing)} in {path}")
    spend = pd.to_numeric(df["spend"], errors="coerce")
    savings = pd.to_numeric(df["savings"], errors="coerce")
    if spend.isna().any() or savings.isna().any():
        raise ValidationError(f"non-numeric spend or savings values in {path}")
    return [
        MonthlyStat(str(month), float(sp), float(sv))
        for month, sp, sv in zip(df["month"], spend, savings)
    ]


__all__ = ["load_monthly_stats", "load_proposals", "load_vendors"]
