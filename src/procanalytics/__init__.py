"""Vendor risk assessment and proposal cost review for procurement analytics."""

from .cost_review import review, review_proposal
from .errors import DivisionError, ValidationError
from .models import (
    CostReviewReport,
    Determination,
    LineItem,
    Proposal,
    ProposalStatus,
    RiskLevel,
    RiskReport,
    Vendor,
    ViewState,
)
from .risk import assess

__all__ = [
    "CostReviewReport",
    "Determination",
    "DivisionError",
    "LineItem",
    "Proposal",
    "ProposalStatus",
    "RiskLevel",
    "RiskReport",
    "ValidationError",
    "Vendor",
    "ViewState",
    "assess",
    "review",
    "review_proposal",
]
