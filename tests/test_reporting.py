from __future__ import annotations

from procanalytics.cost_review import review_proposal
from procanalytics.models import Determination
from procanalytics.reporting import (
    dashboard_stats,
    make_summary_text,
    pending_value,
    proposal_listing,
    proposals_frame,
    vendor_listing,
    vendors_frame,
)
from procanalytics.sample_data import sample_proposals, sample_vendors


def test_dashboard_stats_from_sample_data():
    stats = dashboard_stats(sample_vendors(), sample_proposals())
    assert stats.total_spend == 5_120_000
    assert stats.active_vendors == 5
    assert stats.pending_proposals == 2
    assert stats.risky_vendors == 2


def test_sample_proposals_cover_every_determination():
    vendors = sample_vendors()
    results = {p.id: review_proposal(p, vendors) for p in sample_proposals()}
    assert results["p1"].determination is Determination.MINOR_CONCERNS
    assert [(f.item_id, f.pct_above_average) for f in results["p1"].flagged_items] == [("p1-1", 102), ("p1-3", 204)]
    assert results["p2"].determination is Determination.MAJOR_CONCERNS
    assert results["p3"].determination is Determination.ALL_FAIR


def test_sample_proposal_amounts_match_line_items():
    for proposal in sample_proposals():
        assert proposal.amount == sum(item.line_total for item in proposal.items)


def test_vendors_frame_adds_risk_level():
    df = vendors_frame(sample_vendors())
    assert list(df["risk_level"]) == ["LOW", "MODERATE", "MODERATE", "HIGH", "LOW"]
    assert vendors_frame([]).empty


def test_proposals_frame_counts_items():
    df = proposals_frame(sample_proposals())
    assert list(df["item_count"]) == [4, 5, 3]
    assert list(df["status"]) == ["Review", "Draft", "Approved"]


def test_listings_and_summary_text():
    vendors = sample_vendors()
    listing = vendor_listing(vendors)
    assert "Risk:  62  Spend: $2.4M" in listing
    assert listing.splitlines()[1].startswith("!")
    assert listing.splitlines()[0].startswith(" ")

    proposals = proposal_listing(sample_proposals())
    assert "#P1" in proposals
    assert "4 Items  $32,600" in proposals

    summary = make_summary_text(vendors, sample_proposals())
    assert "Total procurement spend: $5.1M" in summary
    assert "Pending proposal value: $98,800" in summary
    assert "Risky vendors: 2" in summary
    assert "Risk levels: LOW=2, MODERATE=2, HIGH=1" in summary
    assert "Meridian Logistics Group" in summary


def test_pending_value_excludes_approved_proposals():
    proposals = sample_proposals()
    assert pending_value(proposals) == 32_600 + 66_200
    assert pending_value([p for p in proposals if p.id == "p3"]) == 0
    assert pending_value([]) == 0
