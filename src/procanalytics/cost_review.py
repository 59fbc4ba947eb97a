"""Price reasonableness review for proposal line items."""
from __future__ import annotations

import logging
import math
from typing import Iterable, List, Optional, Sequence, Tuple

from .errors import DivisionError
from .models import CostReviewReport, Determination, FlaggedItem, LineItem, Proposal, Vendor

logger = logging.getLogger(__name__)

OUTLIER_MULTIPLIER = 1.5
MINOR_CONCERN_LIMIT = 2
UNKNOWN_VENDOR = "Unknown Vendor"


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def line_totals(items: Sequence[LineItem]) -> Tuple[float, int]:
    """Return ``(total value, total quantity)`` across ``items``."""

    total = 0.0
    quantity = 0
    for item in items:
        total += item.quantity * item.unit_price
        quantity += item.quantity
    return total, quantity


def average_unit_price(items: Sequence[LineItem]) -> float:
    """Quantity-weighted average unit price; raises :class:`DivisionError` on zero quantity."""

    total, quantity = line_totals(items)
    if quantity <= 0:
        raise DivisionError(
            f"cannot average unit prices over a total quantity of {quantity} ({len(items)} line items)"
        )
    return total / quantity


def determine(flagged_count: int) -> Determination:
    if flagged_count == 0:
        return Determination.ALL_FAIR
    if flagged_count <= MINOR_CONCERN_LIMIT:
        return Determination.MINOR_CONCERNS
    return Determination.MAJOR_CONCERNS


def find_outliers(items: Iterable[LineItem], avg_price: float) -> List[FlaggedItem]:
    """Items priced above ``avg_price * 1.5``, in input order."""

    threshold = avg_price * OUTLIER_MULTIPLIER
    flagged: List[FlaggedItem] = []
    for item in items:
        if item.unit_price > threshold:
            pct = _round_half_up((item.unit_price / avg_price - 1) * 100)
            flagged.append(FlaggedItem(item.id, item.description, item.unit_price, pct))
    return flagged


def review(items: Sequence[LineItem], vendor_name: str) -> CostReviewReport:
    """Review ``items`` from ``vendor_name`` for prices well above the proposal average."""

    items = tuple(items)
    total, _quantity = line_totals(items)
    avg_price = average_unit_price(items)
    flagged = find_outliers(items, avg_price)
    determination = determine(len(flagged))
    logger.debug(
        "cost review %s :: items=%d avg=%.2f flagged=%d -> %s",
        vendor_name,
        len(items),
        avg_price,
        len(flagged),
        determination.value,
    )
    return CostReviewReport(
        vendor_name=vendor_name,
        item_count=len(items),
        total_value=total,
        average_unit_price=avg_price,
        flagged_items=tuple(flagged),
        determination=determination,
    )


def vendor_name_for(proposal: Proposal, vendors: Iterable[Vendor]) -> str:
    for vendor in vendors:
        if vendor.id == proposal.vendor_id:
            return vendor.name
    return UNKNOWN_VENDOR


def review_proposal(proposal: Proposal, vendors: Optional[Iterable[Vendor]] = None) -> CostReviewReport:
    name = vendor_name_for(proposal, vendors or ())
    return review(proposal.items, name)


__all__ = [
    "UNKNOWN_VENDOR",
    "average_unit_price",
    "determine",
    "find_outliers",
    "line_totals",
    "review",
    "review_proposal",
    "vendor_name_for",
]
