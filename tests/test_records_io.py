from __future__ import annotations

import json
from pathlib import Path

import pytest

from procanalytics.errors import ValidationError
from procanalytics.models import ProposalStatus
from procanalytics.records_io import load_monthly_stats, load_proposals, load_vendors
from procanalytics.sample_data import PROPOSAL_RECORDS, VENDOR_RECORDS


def test_load_vendors_from_json_object(tmp_path: Path) -> None:
    path = tmp_path / "vendors.json"
    path.write_text(json.dumps({"vendors": list(VENDOR_RECORDS)}), encoding="utf-8")
    vendors = load_vendors(path)
    assert [v.id for v in vendors] == ["v1", "v2", "v3", "v4", "v5"]


def test_load_vendors_from_csv(tmp_path: Path) -> None:
    path = tmp_path / "vendors.csv"
    path.write_text(
        "id,name,category,riskScore,totalSpend,activeContracts,lastAuditDate,description\n"
        "v1,Apex,Raw Materials,25,1250000,8,2025-03-14,\n"
        "v2,Meridian,Logistics,62,2400000,4,2023-06-02,Freight partner\n",
        encoding="utf-8",
    )
    vendors = load_vendors(path)
    assert len(vendors) == 2
    assert vendors[0].description == ""
    assert vendors[1].risk_score == 62
    assert vendors[1].last_audit_date.year == 2023


def test_load_proposals_from_json_list(tmp_path: Path) -> None:
    path = tmp_path / "proposals.json"
    path.write_text(json.dumps(list(PROPOSAL_RECORDS)), encoding="utf-8")
    proposals = load_proposals(path)
    assert [p.id for p in proposals] == ["p1", "p2", "p3"]
    assert len(proposals[1].items) == 5


def test_load_proposals_from_line_item_csv(tmp_path: Path) -> None:
    path = tmp_path / "proposals.csv"
    path.write_text(
        "proposalId,title,vendorId,status,submissionDate,amount,itemId,description,category,quantity,unitPrice\n"
        "p1,Racking,v1,Review,2026-09-12,700,i1,Upright,Hardware,2,300\n"
        "p1,Racking,v1,Review,2026-09-12,700,i2,Beam,Hardware,1,100\n"
        "p2,Paper,v5,Approved,2026-08-20,42,i3,Copy paper,Supplies,1,42\n",
        encoding="utf-8",
    )
    proposals = load_proposals(path)
    assert [p.id for p in proposals] == ["p1", "p2"]
    first = proposals[0]
    assert first.status is ProposalStatus.REVIEW
    assert [item.id for item in first.items] == ["i1", "i2"]
    assert first.items[0].unit_price == 300.0
    assert proposals[1].items[0].description == "Copy paper"


def test_tabular_proposals_need_proposal_id(tmp_path: Path) -> None:
    path = tmp_path / "proposals.csv"
    path.write_text("title,quantity\nRacking,1\n", encoding="utf-8")
    with pytest.raises(ValidationError):
        load_proposals(path)


def test_invalid_record_in_file_raises(tmp_path: Path) -> None:
    record = dict(VENDOR_RECORDS[0], riskScore=150)
    path = tmp_path / "vendors.json"
    path.write_text(json.dumps([record]), encoding="utf-8")
    with pytest.raises(ValidationError, match="riskScore"):
        load_vendors(path)


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_vendors(tmp_path / "absent.json")


def test_load_monthly_stats_csv(tmp_path: Path) -> None:
    path = tmp_path / "stats.csv"
    path.write_text("month,spend,savings\nJan,1000,50\nFeb,1200.5,75\n", encoding="utf-8")
    stats = load_monthly_stats(path)
    assert [s.month for s in stats] == ["Jan", "Feb"]
    assert stats[1].spend == 1200.5
    assert load_monthly_stats(None) == []


def test_load_monthly_stats_rejects_missing_columns(tmp_path: Path) -> None:
    path = tmp_path / "stats.csv"
    path.write_text("month,spend\nJan,1000\n", encoding="utf-8")
    with pytest.raises(ValidationError, match="savings"):
        load_monthly_stats(path)


def test_json_object_without_expected_key_raises(tmp_path: Path) -> None:
    path = tmp_path / "vendors.json"
    path.write_text(json.dumps({"vendor": list(VENDOR_RECORDS)}), encoding="utf-8")
    with pytest.raises(ValidationError, match="'vendors' key"):
        load_vendors(path)


def test_non_object_entries_raise_validation_error(tmp_path: Path) -> None:
    vendors_path = tmp_path / "vendors.json"
    vendors_path.write_text(json.dumps([42]), encoding="utf-8")
    with pytest.raises(ValidationError, match="expected a vendor object"):
        load_vendors(vendors_path)

    record = dict(PROPOSAL_RECORDS[0], items=["valid"])
    proposals_path = tmp_path / "proposals.json"
    proposals_path.write_text(json.dumps([record]), encoding="utf-8")
    with pytest.raises(ValidationError, match="expected a line item object"):
        load_proposals(proposals_path)
