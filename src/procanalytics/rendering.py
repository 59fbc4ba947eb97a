"""Renderers turning analysis reports into text, Markdown, HTML or JSON.

The Markdown risk summary and the HTML cost review keep the dashboard's
wording and inline styling.
"""
from __future__ import annotations

import html
import json
from typing import Any, Dict, List

import pandas as pd

from .models import CostReviewReport, Determination, Proposal, ProposalStatus, RiskReport, Vendor
from .risk import format_millions

FORMATS = ("text", "markdown", "html", "json")

_DETERMINATION_TEXT: Dict[Determination, str] = {
    Determination.ALL_FAIR: (
        "All line items fall within expected market ranges. "
        "Pricing appears competitive and reasonable based on historical data."
    ),
    Determination.MINOR_CONCERNS: (
        "Majority of items are reasonably priced. "
        "{count} item(s) flagged for price negotiation or justification."
    ),
    Determination.MAJOR_CONCERNS: (
        "Multiple items exceed typical market rates. Recommend vendor negotiation before approval."
    ),
}

_STATUS_BADGE: Dict[ProposalStatus, str] = {
    ProposalStatus.DRAFT: "[draft]",
    ProposalStatus.REVIEW: "[review]",
    ProposalStatus.APPROVED: "[approved]",
}

_FOOTNOTE = "Analysis based on historical pricing data and market benchmarks."


def format_amount(value: float) -> str:
    """Group thousands and keep up to three decimals, like ``Number.toLocaleString``."""

    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,.3f}".rstrip("0").rstrip(".")


def determination_text(report: CostReviewReport) -> str:
    try:
        template = _DETERMINATION_TEXT[report.determination]
    except KeyError:  # pragma: no cover - every Determination member has an entry
        raise ValueError(f"unhandled determination {report.determination!r}") from None
    return template.format(count=report.flagged_count)


def status_badge(status: ProposalStatus) -> str:
    return _STATUS_BADGE[status]


# Risk reports -------------------------------------------------------------------


def risk_report_markdown(report: RiskReport) -> str:
    lines = [
        f"**Risk Assessment Summary for {report.vendor_name}**",
        "",
        f"Overall Risk Level: {report.risk_level.value} (Score: {report.risk_score}/100)",
        "",
    ]
    if report.elevated:
        lines.append("⚠️ **Key Concerns:**")
    else:
        lines.append("✓ **Positive Indicators:**")
    lines.extend(f"- {message}" for message in report.concerns)
    lines.append("")
    lines.append("**Recommended Actions:**")
    lines.extend(f"{idx}. {text}" for idx, text in enumerate(report.recommendations, start=1))
    return "\n".join(lines) + "\n"


def risk_report_text(report: RiskReport) -> str:
    heading = "Key concerns" if report.elevated else "Positive indicators"
    lines = [
        f"Risk assessment: {report.vendor_name}",
        f"  Level: {report.risk_level.value}  Score: {report.risk_score}/100",
        f"  {heading}:",
    ]
    lines.extend(f"    - {message}" for message in report.concerns)
    lines.append("  Recommended actions:")
    lines.extend(f"    {idx}. {text}" for idx, text in enumerate(report.recommendations, start=1))
    return "\n".join(lines)


def risk_report_html(report: RiskReport) -> str:
    heading = "Key Concerns" if report.elevated else "Positive Indicators"
    parts = [
        '<div style="color: #e5e5e5;">',
        f"<p><strong>Risk Assessment Summary for {html.escape(report.vendor_name)}</strong></p>",
        f"<p>Overall Risk Level: {report.risk_level.value} (Score: {report.risk_score}/100)</p>",
        f"<p><strong>{heading}:</strong></p>",
        "<ul>",
    ]
    parts.extend(f"<li>{html.escape(message)}</li>" for message in report.concerns)
    parts.append("</ul>")
    parts.append("<p><strong>Recommended Actions:</strong></p>")
    parts.append("<ol>")
    parts.extend(f"<li>{html.escape(text)}</li>" for text in report.recommendations)
    parts.append("</ol>")
    parts.append("</div>")
    return "".join(parts)


def risk_report_dict(report: RiskReport) -> Dict[str, Any]:
    return {
        "vendor_name": report.vendor_name,
        "risk_level": report.risk_level.value,
        "risk_score": report.risk_score,
        "elevated": report.elevated,
        "findings": [
            {"kind": finding.kind.value, "message": finding.message, "value": finding.value}
            for finding in report.findings
        ],
        "recommendations": list(report.recommendations),
    }


# Cost reviews -------------------------------------------------------------------


def cost_review_html(report: CostReviewReport) -> str:
    vendor = html.escape(report.vendor_name)
    parts: List[str] = ['<div style="color: #e5e5e5;">']
    parts.append('<p style="margin-bottom: 12px;"><strong style="color: #00d6cb;">Cost Analysis Report</strong></p>')
    parts.append(f'<p style="margin-bottom: 8px; font-size: 14px;">Vendor: <strong>{vendor}</strong></p>')
    parts.append(
        f'<p style="margin-bottom: 16px; font-size: 14px;">Total Line Items: {report.item_count} | '
        f'Total Value: <strong style="color: #00d6cb;">${format_amount(report.total_value)}</strong></p>'
    )

    if report.flagged_items:
        parts.append('<p style="margin-bottom: 8px;"><strong style="color: #f59e0b;">⚠️ Items Requiring Review:</strong></p>')
        parts.append('<ul style="margin-left: 20px; margin-bottom: 16px; line-height: 1.6;">')
        for item in report.flagged_items:
            parts.append('<li style="margin-bottom: 4px;">')
            parts.append(
                f"<strong>{html.escape(item.description)}</strong> - "
                f"Unit price of ${format_amount(item.unit_price)} is "
            )
            parts.append(f"{item.pct_above_average}% above average")
            parts.append("</li>")
        parts.append("</ul>")

    parts.append('<p style="margin-bottom: 8px;"><strong style="color: #10b981;">✓ Fair Reasonableness Determination:</strong></p>')
    parts.append(f'<p style="margin-bottom: 8px; color: #a6a6a6;">{determination_text(report)}</p>')
    parts.append(
        '<p style="margin-top: 16px; padding-top: 12px; border-top: 1px solid rgba(255,255,255,0.1); '
        'font-size: 13px; color: #666;">'
    )
    parts.append(_FOOTNOTE)
    parts.append("</p>")
    parts.append("</div>")
    return "".join(parts)


def cost_review_markdown(report: CostReviewReport) -> str:
    lines = [
        "**Cost Analysis Report**",
        "",
        f"Vendor: **{report.vendor_name}**",
        "",
        f"Total Line Items: {report.item_count} | Total Value: **${format_amount(report.total_value)}**",
        "",
    ]
    if report.flagged_items:
        lines.append("⚠️ **Items Requiring Review:**")
        for item in report.flagged_items:
            lines.append(
                f"- **{item.description}** - Unit price of ${format_amount(item.unit_price)} "
                f"is {item.pct_above_average}% above average"
            )
        lines.append("")
    lines.append("✓ **Fair Reasonableness Determination:**")
    lines.append("")
    lines.append(determination_text(report))
    lines.append("")
    lines.append(f"_{_FOOTNOTE}_")
    return "\n".join(lines) + "\n"


def cost_review_text(report: CostReviewReport) -> str:
    lines = [
        f"Cost analysis: {report.vendor_name}",
        f"  Line items: {report.item_count}  Total value: ${report.total_value:,.2f}"
        f"  Average unit price: ${report.average_unit_price:,.2f}",
    ]
    if report.flagged_items:
        lines.append("  Items requiring review:")
        for item in report.flagged_items:
            lines.append(
                f"    - {item.description}: ${item.unit_price:,.2f} ({item.pct_above_average}% above average)"
            )
    lines.append(f"  Determination: {report.determination.value}")
    lines.append(f"    {determination_text(report)}")
    return "\n".join(lines)


def cost_review_dict(report: CostReviewReport) -> Dict[str, Any]:
    return {
        "vendor_name": report.vendor_name,
        "item_count": report.item_count,
        "total_value": report.total_value,
        "average_unit_price": report.average_unit_price,
        "flagged_items": [
            {
                "item_id": item.item_id,
                "description": item.description,
                "unit_price": item.unit_price,
                "pct_above_average": item.pct_above_average,
            }
            for item in report.flagged_items
        ],
        "determination": report.determination.value,
    }


# Detail panels ------------------------------------------------------------------


def _detail_text(value: str) -> str:
    return value or "(no description)"


def vendor_detail_text(vendor: Vendor) -> str:
    lines = [
        f"{vendor.name} ({vendor.id})",
        f"  {_detail_text(vendor.description)}",
        f"  Category: {vendor.category or '-'}",
        f"  Contracts: {vendor.active_contracts}  Last Audit: {vendor.last_audit_date.isoformat()}",
        f"  Risk: {vendor.risk_score}  Spend: {format_millions(vendor.total_spend)}",
    ]
    return "\n".join(lines)


def vendor_detail_markdown(vendor: Vendor) -> str:
    lines = [
        f"### {vendor.name}",
        "",
        _detail_text(vendor.description),
        "",
        f"- Contracts: {vendor.active_contracts}",
        f"- Last Audit: {vendor.last_audit_date.isoformat()}",
    ]
    return "\n".join(lines) + "\n"


def vendor_detail_html(vendor: Vendor) -> str:
    return (
        "<div>"
        f"<h3>{html.escape(vendor.name)}</h3>"
        f"<p>{html.escape(_detail_text(vendor.description))}</p>"
        f"<p>Contracts: {vendor.active_contracts}</p>"
        f"<p>Last Audit: {vendor.last_audit_date.isoformat()}</p>"
        "</div>"
    )


def vendor_detail_dict(vendor: Vendor) -> Dict[str, Any]:
    return {
        "id": vendor.id,
        "name": vendor.name,
        "category": vendor.category,
        "description": vendor.description,
        "risk_score": vendor.risk_score,
        "total_spend": vendor.total_spend,
        "active_contracts": vendor.active_contracts,
        "last_audit_date": vendor.last_audit_date.isoformat(),
    }


def line_items_frame(proposal: Proposal) -> pd.DataFrame:
    """Line item table with the workspace column headings, amounts preformatted."""

    rows = [
        {
            "Description": item.description,
            "Cat.": item.category,
            "Qty": item.quantity,
            "Unit Price": f"${format_amount(item.unit_price)}",
            "Total": f"${format_amount(item.line_total)}",
        }
        for item in proposal.items
    ]
    return pd.DataFrame(rows, columns=["Description", "Cat.", "Qty", "Unit Price", "Total"])


def _items_table(proposal: Proposal) -> str:
    if not proposal.items:
        return "(no line items)"
    return line_items_frame(proposal).to_string(index=False)


def proposal_detail_text(proposal: Proposal) -> str:
    lines = [
        f"{proposal.title} (#{proposal.id.upper()}) {status_badge(proposal.status)}",
        f"  Submitted on {proposal.submission_date.isoformat()}",
        f"  Total Value: ${format_amount(proposal.amount)}",
        "",
        _items_table(proposal),
    ]
    return "\n".join(lines)


def proposal_detail_markdown(proposal: Proposal) -> str:
    lines = [
        f"## {proposal.title}",
        "",
        f"Submitted on {proposal.submission_date.isoformat()} | Total Value: **${format_amount(proposal.amount)}**",
        "",
        "```",
        _items_table(proposal),
        "```",
    ]
    return "\n".join(lines) + "\n"


def proposal_detail_html(proposal: Proposal) -> str:
    parts = [
        "<div>",
        f"<h2>{html.escape(proposal.title)}</h2>",
        f"<p>Submitted on {proposal.submission_date.isoformat()}</p>",
        f"<p>Total Value: <strong>${format_amount(proposal.amount)}</strong></p>",
    ]
    if proposal.items:
        parts.append(line_items_frame(proposal).to_html(index=False, escape=True, border=0))
    parts.append("</div>")
    return "".join(parts)


def proposal_detail_dict(proposal: Proposal) -> Dict[str, Any]:
    return {
        "id": proposal.id,
        "title": proposal.title,
        "vendor_id": proposal.vendor_id,
        "status": proposal.status.value,
        "submission_date": proposal.submission_date.isoformat(),
        "amount": proposal.amount,
        "items": [
            {
                "id": item.id,
                "description": item.description,
                "category": item.category,
                "quantity": item.quantity,
                "unit_price": item.unit_price,
                "line_total": item.line_total,
            }
            for item in proposal.items
        ],
    }


# Dispatch -----------------------------------------------------------------------


def render_vendor_detail(vendor: Vendor, fmt: str = "text") -> str:
    if fmt == "text":
        return vendor_detail_text(vendor)
    if fmt == "markdown":
        return vendor_detail_markdown(vendor)
    if fmt == "html":
        return vendor_detail_html(vendor)
    if fmt == "json":
        return json.dumps(vendor_detail_dict(vendor), indent=2)
    raise ValueError(f"unknown format {fmt!r}; expected one of {', '.join(FORMATS)}")


def render_proposal_detail(proposal: Proposal, fmt: str = "text") -> str:
    if fmt == "text":
        return proposal_detail_text(proposal)
    if fmt == "markdown":
        return proposal_detail_markdown(proposal)
    if fmt == "html":
        return proposal_detail_html(proposal)
    if fmt == "json":
        return json.dumps(proposal_detail_dict(proposal), indent=2)
    raise ValueError(f"unknown format {fmt!r}; expected one of {', '.join(FORMATS)}")


def render_risk_report(report: RiskReport, fmt: str = "text") -> str:
    if fmt == "text":
        return risk_report_text(report)
    if fmt == "markdown":
        return risk_report_markdown(report)
    if fmt == "html":
        return risk_report_html(report)
    if fmt == "json":
        return json.dumps(risk_report_dict(report), indent=2)
    raise ValueError(f"unknown format {fmt!r}; expected one of {', '.join(FORMATS)}")


def render_cost_review(report: CostReviewReport, fmt: str = "text") -> str:
    if fmt == "text":
        return cost_review_text(report)
    if fmt == "markdown":
        return cost_review_markdown(report)
    if fmt == "html":
        return cost_review_html(report)
    if fmt == "json":
        return json.dumps(cost_review_dict(report), indent=2)
    raise ValueError(f"unknown format {fmt!r}; expected one of {', '.join(FORMATS)}")


FILE_SUFFIXES = {"text": ".txt", "markdown": ".md", "html": ".html", "json": ".json"}


__all__ = [
    "FILE_SUFFIXES",
    "FORMATS",
    "cost_review_dict",
    "cost_review_html",
    "cost_review_markdown",
    "cost_review_text",
    "determination_text",
    "format_amount",
    "format_millions",
    "line_items_frame",
    "proposal_detail_dict",
    "proposal_detail_html",
    "proposal_detail_markdown",
    "proposal_detail_text",
    "render_cost_review",
    "render_proposal_detail",
    "render_risk_report",
    "render_vendor_detail",
    "risk_report_dict",
    "risk_report_html",
    "risk_report_markdown",
    "risk_report_text",
    "status_badge",
    "vendor_detail_dict",
    "vendor_detail_html",
    "vendor_detail_markdown",
    "vendor_detail_text",
]
