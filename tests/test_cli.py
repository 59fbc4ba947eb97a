from __future__ import annotations

import json
from pathlib import Path

import pytest

from procanalytics import cli
from procanalytics.sample_data import PROPOSAL_RECORDS, VENDOR_RECORDS


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for key in (
        "PROCANALYTICS_VENDORS",
        "PROCANALYTICS_PROPOSALS",
        "PROCANALYTICS_STATS",
        "PROCANALYTICS_FORMAT",
        "PROCANALYTICS_POLICY",
        "PROCANALYTICS_ANALYSIS_DELAY",
        "PROCANALYTICS_VENDOR_DELAY",
        "PROCANALYTICS_PROPOSAL_DELAY",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("PROCANALYTICS_OUTPUT_DIR", str(tmp_path / "outputs"))
    monkeypatch.setenv("PROCANALYTICS_DISABLE_CHARTS", "1")
    monkeypatch.chdir(tmp_path)


def test_assess_prints_markdown_report(capsys: pytest.CaptureFixture[str]) -> None:
    rc = cli.main(["assess", "v2", "--format", "markdown", "--current-year", "2026"])
    assert rc == 0
    out = capsys.readouterr().out
    assert out.startswith("**Risk Assessment Summary for Meridian Logistics Group**")
    assert "- Last audit conducted 3 year(s) ago - audit refresh recommended" in out


def test_review_prints_json(capsys: pytest.CaptureFixture[str]) -> None:
    rc = cli.main(["review", "p1", "--format", "json"])
    assert rc == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["vendor_name"] == "Apex Industrial Supply"
    assert payload["determination"] == "MINOR_CONCERNS"
    assert [item["item_id"] for item in payload["flagged_items"]] == ["p1-1", "p1-3"]


def test_listings_and_dashboard(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["vendors"]) == 0
    assert "Cobalt Facility Services" in capsys.readouterr().out
    assert cli.main(["proposals"]) == 0
    assert "Network Infrastructure Refresh" in capsys.readouterr().out
    assert cli.main(["dashboard"]) == 0
    assert "Pending proposals: 2" in capsys.readouterr().out


def test_unknown_vendor_exits_with_two(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["assess", "missing"]) == 2


def test_invalid_vendor_file_exits_with_two(tmp_path: Path) -> None:
    path = tmp_path / "vendors.json"
    path.write_text(json.dumps([dict(VENDOR_RECORDS[0], lastAuditDate="soon")]), encoding="utf-8")
    assert cli.main(["vendors", "--vendors", str(path)]) == 2


def test_zero_quantity_proposal_exits_with_two(tmp_path: Path) -> None:
    path = tmp_path / "proposals.json"
    path.write_text(
        json.dumps(
            [
                {
                    "id": "px",
                    "title": "Empty",
                    "vendorId": "v1",
                    "status": "Draft",
                    "submissionDate": "2026-01-01",
                    "amount": 0,
                    "items": [],
                }
            ]
        ),
        encoding="utf-8",
    )
    assert cli.main(["review", "px", "--proposals", str(path)]) == 2


def test_export_writes_reports(tmp_path: Path) -> None:
    assert cli.main(["export", "--format", "html"]) == 0
    out_dir = tmp_path / "outputs"
    assert (out_dir / "risk_v1.html").exists()
    assert (out_dir / "cost_review_p3.html").exists()
    assert "Active vendors: 5" in (out_dir / "dashboard_summary.txt").read_text(encoding="utf-8")


def test_non_object_vendor_entry_exits_with_two(tmp_path: Path) -> None:
    path = tmp_path / "vendors.json"
    path.write_text(json.dumps([42]), encoding="utf-8")
    assert cli.main(["vendors", "--vendors", str(path)]) == 2


def test_non_object_line_item_exits_with_two(tmp_path: Path) -> None:
    path = tmp_path / "proposals.json"
    path.write_text(json.dumps([dict(PROPOSAL_RECORDS[0], items=["valid"])]), encoding="utf-8")
    assert cli.main(["proposals", "--proposals", str(path)]) == 2


def test_vendor_detail_shows_description(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["vendor", "v1"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("Apex Industrial Supply (v1)")
    assert "structural steel and fasteners" in out
    assert "Contracts: 8  Last Audit: 2025-03-14" in out


def test_proposal_detail_lists_line_items(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["proposal", "p1", "--format", "json"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["title"] == "Warehouse Racking Upgrade"
    assert payload["submission_date"] == "2026-09-12"
    assert [item["line_total"] for item in payload["items"]] == [12000, 10200, 9000, 1400]
    assert cli.main(["proposal", "missing"]) == 2
