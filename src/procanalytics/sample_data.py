"""
Built-in mock vendors, proposals and monthly spend figures.

Used whenever no vendor or proposal file is configured, so the CLI has
something to show out of the box.
"""

from __future__ import annotations

from typing import List, Tuple

from .models import MonthlyStat, Proposal, Vendor
from .validation import proposals_from_records, vendors_from_records

VENDOR_RECORDS: Tuple[dict, ...] = (
    {
        "id": "v1",
        "name": "Apex Industrial Supply",
        "category": "Raw Materials",
        "riskScore": 25,
        "totalSpend": 1_250_000,
        "activeContracts": 8,
        "lastAuditDate": "2025-03-14",
        "description": "Primary supplier of structural steel and fasteners for plant maintenance.",
    },
    {
        "id": "v2",
        "name": "Meridian Logistics Group",
        "category": "Logistics",
        "riskScore": 62,
        "totalSpend": 2_400_000,
        "activeContracts": 4,
        "lastAuditDate": "2023-06-02",
        "description": "Regional freight and warehousing partner with recent delivery delays.",
    },
    {
        "id": "v3",
        "name": "Northwind Tech Solutions",
        "category": "IT Services",
        "riskScore": 45,
        "totalSpend": 850_000,
        "activeContracts": 6,
        "lastAuditDate": "2024-11-20",
        "description": "Managed network services and hardware reseller.",
    },
    {
        "id": "v4",
        "name": "Cobalt Facility Services",
        "category": "Facilities",
        "riskScore": 78,
        "totalSpend": 430_000,
        "activeContracts": 2,
        "lastAuditDate": "2022-09-08",
        "description": "Janitorial and HVAC maintenance contractor; open compliance findings.",
    },
    {
        "id": "v5",
        "name": "Summit Office Products",
        "category": "Office Supplies",
        "riskScore": 15,
        "totalSpend": 190_000,
        "activeContracts": 12,
        "lastAuditDate": "2025-08-01",
        "description": "Consumables and furniture under a national cooperative contract.",
    },
)

PROPOSAL_RECORDS: Tuple[dict, ...] = (
    {
        "id": "p1",
        "title": "Warehouse Racking Upgrade",
        "vendorId": "v1",
        "status": "Review",
        "submissionDate": "2026-09-12",
        "amount": 32_600,
        "items": [
            {"id": "p1-1", "description": "Heavy-duty pallet rack upright", "category": "Hardware", "quantity": 40, "unitPrice": 300},
            {"id": "p1-2", "description": "Beam pair, 96 in", "category": "Hardware", "quantity": 120, "unitPrice": 85},
            {"id": "p1-3", "description": "Installation labor (per bay)", "category": "Labor", "quantity": 20, "unitPrice": 450},
            {"id": "p1-4", "description": "Seismic anchoring kit", "category": "Hardware", "quantity": 40, "unitPrice": 35},
        ],
    },
    {
        "id": "p2",
        "title": "Network Infrastructure Refresh",
        "vendorId": "v3",
        "status": "Draft",
        "submissionDate": "2026-10-02",
        "amount": 66_200,
        "items": [
            {"id": "p2-1", "description": "Core switch, 48-port", "category": "Hardware", "quantity": 2, "unitPrice": 8500},
            {"id": "p2-2", "description": "Wireless access point", "category": "Hardware", "quantity": 24, "unitPrice": 650},
            {"id": "p2-3", "description": "Cat6A cabling (per drop)", "category": "Cabling", "quantity": 180, "unitPrice": 95},
            {"id": "p2-4", "description": "Configuration services (hours)", "category": "Services", "quantity": 60, "unitPrice": 175},
            {"id": "p2-5", "description": "Annual support contract", "category": "Services", "quantity": 1, "unitPrice": 6000},
        ],
    },
    {
        "id": "p3",
        "title": "Quarterly Office Supplies",
        "vendorId": "v5",
        "status": "Approved",
        "submissionDate": "2026-08-20",
        "amount": 3_510,
        "items": [
            {"id": "p3-1", "description": "Copy paper, case", "category": "Supplies", "quantity": 50, "unitPrice": 42},
            {"id": "p3-2", "description": "Toner cartridge", "category": "Supplies", "quantity": 12, "unitPrice": 55},
            {"id": "p3-3", "description": "Desk organizer", "category": "Supplies", "quantity": 30, "unitPrice": 25},
        ],
    },
)

PROCUREMENT_STATS: Tuple[MonthlyStat, ...] = (
    MonthlyStat("Jan", 620_000, 41_000),
    MonthlyStat("Feb", 580_000, 38_500),
    MonthlyStat("Mar", 710_000, 52_000),
    MonthlyStat("Apr", 665_000, 47_250),
    MonthlyStat("May", 742_000, 58_900),
    MonthlyStat("Jun", 803_000, 64_300),
)


def sample_vendors() -> List[Vendor]:
    return vendors_from_records(VENDOR_RECORDS)


def sample_proposals() -> List[Proposal]:
    return proposals_from_records(PROPOSAL_RECORDS)


def sample_monthly_stats() -> List[MonthlyStat]:
    return list(PROCUREMENT_STATS)
