from __future__ import annotations

from typing import List

import pytest

from procanalytics.models import Determination, RiskLevel, ViewState
from procanalytics.sample_data import sample_proposals, sample_vendors
from procanalytics.session import DashboardSession


@pytest.fixture
def sleeps() -> List[float]:
    return []


@pytest.fixture
def session(sleeps: List[float]) -> DashboardSession:
    return DashboardSession(
        vendors=sample_vendors(),
        proposals=sample_proposals(),
        current_year=2026,
        vendor_delay=0.8,
        proposal_delay=1.0,
        sleeper=sleeps.append,
    )


def test_navigation_closes_menu_and_records_history(session: DashboardSession) -> None:
    assert session.view is ViewState.DASHBOARD
    assert session.toggle_menu() is True
    session.navigate(ViewState.VENDORS)
    assert session.view is ViewState.VENDORS
    assert session.menu_open is False
    session.navigate(ViewState.VENDORS)
    session.navigate(ViewState.PROPOSALS)
    assert session.history == [ViewState.DASHBOARD, ViewState.VENDORS]


def test_selecting_another_vendor_clears_analysis(session: DashboardSession, sleeps: List[float]) -> None:
    session.select_vendor("v2")
    report = session.analyze_selected_vendor()
    assert report.vendor_name == "Meridian Logistics Group"
    assert report.risk_level is RiskLevel.MODERATE
    assert session.vendor_analysis is report
    assert sleeps == [0.8]

    session.select_vendor("v1")
    assert session.vendor_analysis is None


def test_review_selected_proposal(session: DashboardSession, sleeps: List[float]) -> None:
    session.select_proposal("p2")
    report = session.review_selected_proposal()
    assert report.vendor_name == "Northwind Tech Solutions"
    assert report.determination is Determination.MAJOR_CONCERNS
    assert sleeps == [1.0]
    session.select_proposal("p1")
    assert session.cost_review is None


def test_unknown_ids_and_missing_selection(session: DashboardSession) -> None:
    with pytest.raises(LookupError):
        session.select_vendor("nope")
    with pytest.raises(LookupError):
        session.analyze_selected_vendor()
    with pytest.raises(LookupError):
        session.select_proposal("nope")
    with pytest.raises(LookupError):
        session.review_selected_proposal()


def test_zero_delay_never_sleeps(sleeps: List[float]) -> None:
    session = DashboardSession(sample_vendors(), sample_proposals(), 2026, sleeper=sleeps.append)
    session.select_vendor("v5")
    session.analyze_selected_vendor()
    assert sleeps == []
