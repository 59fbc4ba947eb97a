from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Tuple


class ViewState(Enum):
    DASHBOARD = "Dashboard"
    VENDORS = "Vendor Intel"
    PROPOSALS = "Proposals"


class ProposalStatus(Enum):
    DRAFT = "Draft"
    REVIEW = "Review"
    APPROVED = "Approved"


class RiskLevel(Enum):
    LOW = "LOW"
    MODERATE = "MODERATE"
    HIGH = "HIGH"


class Determination(Enum):
    """How many line items of a proposal were flagged as priced above market."""

    ALL_FAIR = "ALL_FAIR"
    MINOR_CONCERNS = "MINOR_CONCERNS"
    MAJOR_CONCERNS = "MAJOR_CONCERNS"


class FindingKind(Enum):
    SCORE_EXCEEDS_THRESHOLD = "score_exceeds_threshold"
    AUDIT_REFRESH = "audit_refresh"
    FINANCIAL_EXPOSURE = "financial_exposure"
    SCORE_WITHIN_RANGE = "score_within_range"
    ACTIVE_RELATIONSHIP = "active_relationship"


@dataclass(frozen=True)
class Vendor:
    """A supplier record as shown in the vendor intelligence list."""

    id: str
    name: str
    category: str
    risk_score: int
    total_spend: float
    active_contracts: int
    last_audit_date: date
    description: str = ""


@dataclass(frozen=True)
class LineItem:
    id: str
    description: str
    category: str
    quantity: int
    unit_price: float

    @property
    def line_total(self) -> float:
        return self.quantity * self.unit_price


@dataclass(frozen=True)
class Proposal:
    id: str
    title: str
    vendor_id: str
    status: ProposalStatus
    submission_date: date
    amount: float
    items: Tuple[LineItem, ...] = ()


@dataclass(frozen=True)
class MonthlyStat:
    month: str
    spend: float
    savings: float


@dataclass(frozen=True)
class RiskFinding:
    """One concern or positive indicator produced by the risk assessor.

    ``value`` carries the number the message was built from (score, audit age
    in years, spend in dollars or contract count) so renderers can rephrase it.
    """

    kind: FindingKind
    message: str
    value: float


@dataclass(frozen=True)
class RiskReport:
    vendor_name: str
    risk_level: RiskLevel
    risk_score: int
    elevated: bool
    findings: Tuple[RiskFinding, ...] = ()
    recommendations: Tuple[str, ...] = ()

    @property
    def concerns(self) -> Tuple[str, ...]:
        return tuple(finding.message for finding in self.findings)


@dataclass(frozen=True)
class FlaggedItem:
    item_id: str
    description: str
    unit_price: float
    pct_above_average: int


@dataclass(frozen=True)
class CostReviewReport:
    vendor_name: str
    item_count: int
    total_value: float
    average_unit_price: float
    flagged_items: Tuple[FlaggedItem, ...] = field(default_factory=tuple)
    determination: Determination = Determination.ALL_FAIR

    @property
    def flagged_count(self) -> int:
        return len(self.flagged_items)


@dataclass(frozen=True)
class DashboardStats:
    total_spend: float
    active_vendors: int
    pending_proposals: int
    risky_vendors: int


__all__ = [
    "CostReviewReport",
    "DashboardStats",
    "Determination",
    "FindingKind",
    "FlaggedItem",
    "LineItem",
    "MonthlyStat",
    "Proposal",
    "ProposalStatus",
    "RiskFinding",
    "RiskLevel",
    "RiskReport",
    "Vendor",
    "ViewState",
]
