"""Conversion of raw records (JSON objects, spreadsheet rows) into model objects.

Every check that the analysis functions rely on happens here, so
:func:`procanalytics.risk.assess` and :func:`procanalytics.cost_review.review`
can assume well-formed input.
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Any, Iterable, List, Mapping, Optional, Sequence

import pandas as pd

from .errors import ValidationError
from .models import LineItem, Proposal, ProposalStatus, Vendor

_MISSING = object()


def _lookup(record: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in record:
            value = record[key]
            if value is None:
                continue
            if isinstance(value, float) and pd.isna(value):
                continue
            if isinstance(value, str) and not value.strip():
                continue
            return value
    return _MISSING


def _require(record: Mapping[str, Any], field: str, keys: Sequence[str], record_id: Optional[str]) -> Any:
    value = _lookup(record, *keys)
    if value is _MISSING:
        raise ValidationError("missing required value", field=field, record_id=record_id)
    return value


def _text(value: object) -> str:
    return str(value).strip()


def _to_int(value: object, field: str, record_id: Optional[str]) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"expected an integer, got {value!r}", field=field, record_id=record_id)
    text = str(value).replace(",", "").strip()
    try:
        number = float(text)
    except ValueError:
        raise ValidationError(f"expected an integer, got {value!r}", field=field, record_id=record_id) from None
    if not number.is_integer():
        raise ValidationError(f"expected a whole number, got {value!r}", field=field, record_id=record_id)
    return int(number)


def _to_float(value: object, field: str, record_id: Optional[str]) -> float:
    if isinstance(value, bool):
        raise ValidationError(f"expected an amount, got {value!r}", field=field, record_id=record_id)
    text = str(value).replace("$", "").replace(",", "").strip()
    try:
        number = float(text)
    except ValueError:
        raise ValidationError(f"expected an amount, got {value!r}", field=field, record_id=record_id) from None
    if pd.isna(number) or number in (float("inf"), float("-inf")):
        raise ValidationError(f"expected a finite amount, got {value!r}", field=field, record_id=record_id)
    return number


def parse_date(value: object, field: str = "date", record_id: Optional[str] = None) -> date:
    """Parse ``value`` into a :class:`datetime.date`, raising :class:`ValidationError`."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    parsed = pd.to_datetime(str(value).strip(), errors="coerce")
    if pd.isna(parsed):
        raise ValidationError(f"unparseable date {value!r}", field=field, record_id=record_id)
    return parsed.date()


def parse_status(value: object, record_id: Optional[str] = None) -> ProposalStatus:
    if isinstance(value, ProposalStatus):
        return value
    text = _text(value).lower()
    for status in ProposalStatus:
        if text in (status.value.lower(), status.name.lower()):
            return status
    allowed = ", ".join(status.value for status in ProposalStatus)
    raise ValidationError(f"unknown status {value!r} (expected one of {allowed})", field="status", record_id=record_id)


def _ensure_mapping(record: object, kind: str, record_id: Optional[str] = None) -> Mapping[str, Any]:
    if not isinstance(record, Mapping):
        raise ValidationError(f"expected a {kind} object, got {type(record).__name__}", record_id=record_id)
    return record


def vendor_from_record(record: Mapping[str, Any]) -> Vendor:
    record = _ensure_mapping(record, "vendor")
    raw_id = _lookup(record, "id", "vendor_id", "vendorId")
    record_id = _text(raw_id) if raw_id is not _MISSING else None
    if record_id is None:
        raise ValidationError("missing required value", field="id")

    risk_score = _to_int(_require(record, "riskScore", ("riskScore", "risk_score"), record_id), "riskScore", record_id)
    if not 0 <= risk_score <= 100:
        raise ValidationError(f"must be between 0 and 100, got {risk_score}", field="riskScore", record_id=record_id)
    total_spend = _to_float(_require(record, "totalSpend", ("totalSpend", "total_spend"), record_id), "totalSpend", record_id)
    if total_spend < 0:
        raise ValidationError(f"must not be negative, got {total_spend}", field="totalSpend", record_id=record_id)
    contracts = _to_int(
        _require(record, "activeContracts", ("activeContracts", "active_contracts"), record_id),
        "activeContracts",
        record_id,
    )
    if contracts < 0:
        raise ValidationError(f"must not be negative, got {contracts}", field="activeContracts", record_id=record_id)
    audit_raw = _require(record, "lastAuditDate", ("lastAuditDate", "last_audit_date"), record_id)

    description = _lookup(record, "description")
    category = _lookup(record, "category")
    return Vendor(
        id=record_id,
        name=_text(_require(record, "name", ("name",), record_id)),
        category=_text(category) if category is not _MISSING else "",
        risk_score=risk_score,
        total_spend=total_spend,
        active_contracts=contracts,
        last_audit_date=parse_date(audit_raw, "lastAuditDate", record_id),
        description=_text(description) if description is not _MISSING else "",
    )


def line_item_from_record(
    record: Mapping[str, Any], proposal_id: Optional[str] = None, position: Optional[int] = None
) -> LineItem:
    fallback_id = proposal_id
    if proposal_id and position is not None:
        fallback_id = f"{proposal_id}-{position}"
    record = _ensure_mapping(record, "line item", fallback_id)
    raw_id = _lookup(record, "id", "item_id", "itemId")
    record_id = _text(raw_id) if raw_id is not _MISSING else fallback_id
    quantity = _to_int(_require(record, "quantity", ("quantity", "qty"), record_id), "quantity", record_id)
    if quantity <= 0:
        raise ValidationError(f"must be positive, got {quantity}", field="quantity", record_id=record_id)
    unit_price = _to_float(_require(record, "unitPrice", ("unitPrice", "unit_price"), record_id), "unitPrice", record_id)
    if unit_price < 0:
        raise ValidationError(f"must not be negative, got {unit_price}", field="unitPrice", record_id=record_id)
    category = _lookup(record, "category")
    return LineItem(
        id=record_id or "",
        description=_text(_require(record, "description", ("description",), record_id)),
        category=_text(category) if category is not _MISSING else "",
        quantity=quantity,
        unit_price=unit_price,
    )


def proposal_from_record(record: Mapping[str, Any]) -> Proposal:
    record = _ensure_mapping(record, "proposal")
    raw_id = _lookup(record, "id", "proposal_id", "proposalId")
    if raw_id is _MISSING:
        raise ValidationError("missing required value", field="id")
    record_id = _text(raw_id)

    raw_items = record.get("items") or []
    if not isinstance(raw_items, (list, tuple)):
        raise ValidationError("expected a list of line items", field="items", record_id=record_id)
    items = tuple(
        line_item_from_record(item, record_id, position) for position, item in enumerate(raw_items, start=1)
    )

    amount = _to_float(_require(record, "amount", ("amount",), record_id), "amount", record_id)
    if amount < 0:
        raise ValidationError(f"must not be negative, got {amount}", field="amount", record_id=record_id)
    submitted = _require(record, "submissionDate", ("submissionDate", "submission_date"), record_id)
    return Proposal(
        id=record_id,
        title=_text(_require(record, "title", ("title",), record_id)),
        vendor_id=_text(_require(record, "vendorId", ("vendorId", "vendor_id"), record_id)),
        status=parse_status(_require(record, "status", ("status",), record_id), record_id),
        submission_date=parse_date(submitted, "submissionDate", record_id),
        amount=amount,
        items=items,
    )


def vendors_from_records(records: Iterable[Mapping[str, Any]]) -> List[Vendor]:
    vendors = [vendor_from_record(record) for record in records]
    seen = set()
    for vendor in vendors:
        if vendor.id in seen:
            raise ValidationError("duplicate vendor id", field="id", record_id=vendor.id)
        seen.add(vendor.id)
    return vendors


def proposals_from_records(records: Iterable[Mapping[str, Any]]) -> List[Proposal]:
    proposals = [proposal_from_record(record) for record in records]
    seen = set()
    for proposal in proposals:
        if proposal.id in seen:
            raise ValidationError("duplicate proposal id", field="id", record_id=proposal.id)
        seen.add(proposal.id)
    return proposals


__all__ = [
    "line_item_from_record",
    "parse_date",
    "parse_status",
    "proposal_from_record",
    "proposals_from_records",
    "vendor_from_record",
    "vendors_from_records",
]
