from __future__ import annotations

from dataclasses import asdict
from typing import Sequence

import pandas as pd

from .models import DashboardStats, Proposal, ProposalStatus, Vendor
from .rendering import format_millions, status_badge
from .risk import classify_risk, is_elevated


def vendors_frame(vendors: Sequence[Vendor]) -> pd.DataFrame:
    columns = [
        "id",
        "name",
        "category",
        "risk_score",
        "total_spend",
        "active_contracts",
        "last_audit_date",
        "description",
    ]
    if not vendors:
        return pd.DataFrame(columns=columns + ["risk_level"])
    df = pd.DataFrame([asdict(v) for v in vendors], columns=columns)
    df["risk_level"] = [classify_risk(score).value for score in df["risk_score"]]
    return df


def proposals_frame(proposals: Sequence[Proposal]) -> pd.DataFrame:
    rows = [
        {
            "id": p.id,
            "title": p.title,
            "vendor_id": p.vendor_id,
            "status": p.status.value,
            "submission_date": p.submission_date,
            "amount": p.amount,
            "item_count": len(p.items),
        }
        for p in proposals
    ]
    return pd.DataFrame(rows, columns=["id", "title", "vendor_id", "status", "submission_date", "amount", "item_count"])


def dashboard_stats(vendors: Sequence[Vendor], proposals: Sequence[Proposal]) -> DashboardStats:
    """Headline figures for the dashboard cards.

    Pending proposals are those not yet approved; risky vendors are the ones
    listed with a red score badge (score above 50).
    """

    return DashboardStats(
        total_spend=float(sum(v.total_spend for v in vendors)),
        active_vendors=len(vendors),
        pending_proposals=sum(1 for p in proposals if p.status is not ProposalStatus.APPROVED),
        risky_vendors=sum(1 for v in vendors if is_elevated(v.risk_score)),
    )


def vendor_listing(vendors: Sequence[Vendor]) -> str:
    lines = []
    for vendor in vendors:
        flag = "!" if is_elevated(vendor.risk_score) else " "
        lines.append(
            f"{flag} {vendor.id:<6} {vendor.name:<32} {vendor.category:<18} "
            f"Risk: {vendor.risk_score:>3}  Spend: {format_millions(vendor.total_spend)}"
        )
    return "\n".join(lines)


def proposal_listing(proposals: Sequence[Proposal]) -> str:
    lines = []
    for proposal in proposals:
        lines.append(
            f"#{proposal.id.upper():<6} {status_badge(proposal.status):<11} {proposal.title:<36} "
            f"{len(proposal.items)} Items  ${proposal.amount:,.0f}"
        )
    return "\n".join(lines)


def pending_value(proposals: Sequence[Proposal]) -> float:
    df = proposals_frame(proposals)
    return float(df.loc[df["status"] != ProposalStatus.APPROVED.value, "amount"].sum())


def make_summary_text(vendors: Sequence[Vendor], proposals: Sequence[Proposal]) -> str:
    stats = dashboard_stats(vendors, proposals)
    text = (
        f"Total procurement spend: {format_millions(stats.total_spend)}\n"
        f"Active vendors: {stats.active_vendors}\n"
        f"Pending proposals: {stats.pending_proposals}\n"
        f"Pending proposal value: ${pending_value(proposals):,.0f}\n"
        f"Risky vendors: {stats.risky_vendors}\n"
    )
    df = vendors_frame(vendors)
    if not df.empty:
        top = df.sort_values("total_spend", ascending=False).head(5)[
            ["name", "category", "risk_score", "risk_level", "total_spend"]
        ]
        text += f"Top vendors by spend:\n{top.to_string(index=False)}\n"
        by_level = df["risk_level"].value_counts()
        counts = ", ".join(f"{level}={int(by_level.get(level, 0))}" for level in ("LOW", "MODERATE", "HIGH"))
        text += f"Risk levels: {counts}\n"
    return text


__all__ = [
    "dashboard_stats",
    "make_summary_text",
    "pending_value",
    "proposal_listing",
    "proposals_frame",
    "vendor_listing",
    "vendors_frame",
]
