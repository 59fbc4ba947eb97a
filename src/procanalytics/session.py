"""Navigation and selection state for an interactive dashboard session."""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from .cost_review import review_proposal
from .models import CostReviewReport, Proposal, RiskReport, Vendor, ViewState
from .risk import assess

logger = logging.getLogger(__name__)


@dataclass
class DashboardSession:
    """Tracks the active view, the selected vendor/proposal and their analyses.

    Selecting a different vendor or proposal discards the analysis produced
    for the previous selection. ``vendor_delay`` and ``proposal_delay`` only
    emulate the latency of a remote call and never change the result.
    """

    vendors: List[Vendor]
    proposals: List[Proposal]
    current_year: int
    vendor_delay: float = 0.0
    proposal_delay: float = 0.0
    sleeper: Callable[[float], None] = time.sleep
    view: ViewState = ViewState.DASHBOARD
    menu_open: bool = False
    selected_vendor: Optional[Vendor] = None
    vendor_analysis: Optional[RiskReport] = None
    selected_proposal: Optional[Proposal] = None
    cost_review: Optional[CostReviewReport] = None
    history: List[ViewState] = field(default_factory=list)

    def navigate(self, view: ViewState) -> None:
        if view is not self.view:
            self.history.append(self.view)
        self.view = view
        self.menu_open = False

    def toggle_menu(self) -> bool:
        self.menu_open = not self.menu_open
        return self.menu_open

    def select_vendor(self, vendor_id: str) -> Vendor:
        vendor = next((v for v in self.vendors if v.id == vendor_id), None)
        if vendor is None:
            raise LookupError(f"unknown vendor id {vendor_id!r}")
        self.selected_vendor = vendor
        self.vendor_analysis = None
        return vendor

    def select_proposal(self, proposal_id: str) -> Proposal:
        proposal = next((p for p in self.proposals if p.id == proposal_id), None)
        if proposal is None:
            raise LookupError(f"unknown proposal id {proposal_id!r}")
        self.selected_proposal = proposal
        self.cost_review = None
        return proposal

    def _simulate_latency(self, seconds: float) -> None:
        if seconds > 0:
            self.sleeper(seconds)

    def analyze_selected_vendor(self) -> RiskReport:
        if self.selected_vendor is None:
            raise LookupError("no vendor selected")
        self.vendor_analysis = None
        self._simulate_latency(self.vendor_delay)
        self.vendor_analysis = assess(self.selected_vendor, self.current_year)
        logger.debug("vendor analysis ready for %s", self.selected_vendor.id)
        return self.vendor_analysis

    def review_selected_proposal(self) -> CostReviewReport:
        if self.selected_proposal is None:
            raise LookupError("no proposal selected")
        self._simulate_latency(self.proposal_delay)
        self.cost_review = review_proposal(self.selected_proposal, self.vendors)
        logger.debug("cost review ready for %s", self.selected_proposal.id)
        return self.cost_review


__all__ = ["DashboardSession"]
