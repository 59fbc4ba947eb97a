"""Vendor risk assessment.

The risk level buckets (40 / 70) and the concern threshold (50) are
independent: vendor listings are coloured by the 50 threshold while the report
headline uses the buckets.
"""
from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import List

from .models import FindingKind, RiskFinding, RiskLevel, RiskReport, Vendor

logger = logging.getLogger(__name__)

HIGH_RISK_FLOOR = 70
MODERATE_RISK_FLOOR = 40
CONCERN_THRESHOLD = 50
AUDIT_MAX_AGE_YEARS = 1
EXPOSURE_THRESHOLD = 1_000_000

ELEVATED_RECOMMENDATIONS = (
    "Conduct comprehensive vendor audit within 30 days",
    "Review contract terms and implement additional oversight measures",
    "Consider diversifying vendor portfolio to reduce dependency",
)
ACCEPTABLE_RECOMMENDATIONS = (
    "Maintain current monitoring schedule",
    "Continue quarterly performance reviews",
)


def format_millions(value: float) -> str:
    """Dollar amount in millions with one decimal, ties rounded away from zero."""

    millions = Decimal(value / 1_000_000)
    return f"${millions.quantize(Decimal('0.1'), rounding=ROUND_HALF_UP)}M"


def classify_risk(risk_score: int) -> RiskLevel:
    if risk_score > HIGH_RISK_FLOOR:
        return RiskLevel.HIGH
    if risk_score > MODERATE_RISK_FLOOR:
        return RiskLevel.MODERATE
    return RiskLevel.LOW


def is_elevated(risk_score: int) -> bool:
    """True when a score needs the remediation path (and a red badge in listings)."""

    return risk_score > CONCERN_THRESHOLD


def audit_age(vendor: Vendor, current_year: int) -> int:
    return current_year - vendor.last_audit_date.year


def assess(vendor: Vendor, current_year: int) -> RiskReport:
    """Build the risk report for ``vendor`` as of ``current_year``."""

    level = classify_risk(vendor.risk_score)
    elevated = is_elevated(vendor.risk_score)
    findings: List[RiskFinding] = []

    if elevated:
        findings.append(
            RiskFinding(
                FindingKind.SCORE_EXCEEDS_THRESHOLD,
                f"Risk score of {vendor.risk_score} exceeds acceptable threshold of {CONCERN_THRESHOLD}",
                vendor.risk_score,
            )
        )
        age = audit_age(vendor, current_year)
        if age > AUDIT_MAX_AGE_YEARS:
            findings.append(
                RiskFinding(
                    FindingKind.AUDIT_REFRESH,
                    f"Last audit conducted {age} year(s) ago - audit refresh recommended",
                    age,
                )
            )
        if vendor.total_spend > EXPOSURE_THRESHOLD:
            findings.append(
                RiskFinding(
                    FindingKind.FINANCIAL_EXPOSURE,
                    f"High financial exposure with {format_millions(vendor.total_spend)} in total spend",
                    vendor.total_spend,
                )
            )
        recommendations = ELEVATED_RECOMMENDATIONS
    else:
        findings.append(
            RiskFinding(
                FindingKind.SCORE_WITHIN_RANGE,
                f"Risk score of {vendor.risk_score} is within acceptable range",
                vendor.risk_score,
            )
        )
        findings.append(
            RiskFinding(
                FindingKind.ACTIVE_RELATIONSHIP,
                f"{vendor.active_contracts} active contracts demonstrate ongoing relationship",
                vendor.active_contracts,
            )
        )
        recommendations = ACCEPTABLE_RECOMMENDATIONS

    logger.debug("assessed %s :: level=%s findings=%d", vendor.id, level.value, len(findings))
    return RiskReport(
        vendor_name=vendor.name,
        risk_level=level,
        risk_score=vendor.risk_score,
        elevated=elevated,
        findings=tuple(findings),
        recommendations=tuple(recommendations),
    )


__all__ = ["assess", "audit_age", "classify_risk", "format_millions", "is_elevated"]
