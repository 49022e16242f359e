"""
Annuity payout + ACA subsidy tests.

Tests:
1-8.   Annuity amortization formula, extreme and invalid input
9-15.  ACA poverty line, eligibility threshold, subsidy floor
"""

import math

import pytest

from flofaction.calculators.aca_subsidy import (
    ACASubsidyCalculator,
    calculate_aca_subsidy,
    estimate_aca_subsidy,
    federal_poverty_line,
)
from flofaction.calculators.annuity import (
    AnnuityCalculator,
    build_annuity_payout,
    calculate_annuity_payout,
)
from flofaction.exceptions import InvalidInputError


# ============================================================
# Annuity
# ============================================================

def _closed_form(principal, annual_rate, years):
    r = annual_rate / 12
    n = years * 12
    return principal * r * (1 + r) ** n / ((1 + r) ** n - 1)


def test_annuity_matches_closed_form():
    payout = calculate_annuity_payout(100000, 0.06, 20)
    assert payout > 0
    assert payout == pytest.approx(_closed_form(100000, 0.06, 20), abs=1e-6)
    assert payout == pytest.approx(716.43, abs=0.01)


def test_annuity_zero_rate_rejected():
    """Rate 0 would divide by zero, so it is rejected instead of returning NaN."""
    with pytest.raises(InvalidInputError):
        calculate_annuity_payout(100000, 0, 20)
    with pytest.raises(InvalidInputError):
        calculate_annuity_payout(100000, -0.02, 20)


def test_annuity_zero_years_rejected():
    with pytest.raises(InvalidInputError):
        calculate_annuity_payout(100000, 0.05, 0)


def test_annuity_non_finite_rejected():
    with pytest.raises(InvalidInputError):
        calculate_annuity_payout(math.inf, 0.05, 10)
    with pytest.raises(InvalidInputError):
        calculate_annuity_payout(100000, math.nan, 10)


def test_annuity_tiny_rate_approaches_straight_line():
    """A rate too small to move (1 + r)^n still amortizes: payout ~ principal / n."""
    payout = calculate_annuity_payout(100000, 1e-17, 20)
    assert payout == pytest.approx(100000 / 240, rel=1e-6)


def test_annuity_long_term_bounded():
    assert calculate_annuity_payout(100000, 0.06, 100) == pytest.approx(500.0, rel=0.01)
    with pytest.raises(InvalidInputError):
        calculate_annuity_payout(100000, 0.06, 10000000)
    with pytest.raises(InvalidInputError):
        calculate_annuity_payout(100000, 0.06, 10 ** 400)


def test_annuity_huge_principal_rejected():
    with pytest.raises(InvalidInputError):
        calculate_annuity_payout(1e308, 0.5, 30)


def test_annuity_breakdown_and_form():
    payout = build_annuity_payout(250000, 0.05, 15)
    assert payout.total_payout == pytest.approx(payout.monthly_income * 180)
    result = AnnuityCalculator().calculate({"principal": "250,000", "annual_rate": "5%", "years": "15"})
    assert result["monthly_income"] == pytest.approx(payout.monthly_income)


# ============================================================
# ACA subsidy
# ============================================================

def test_poverty_line_by_family_size():
    assert federal_poverty_line(1) == 15060
    assert federal_poverty_line(4) == 15060 + 3 * 5380


def test_zero_income_gets_full_plan_cost():
    assert calculate_aca_subsidy(0, 1, 450) == 450


def test_high_income_gets_no_subsidy():
    estimate = estimate_aca_subsidy(200000, 1, 450)
    assert estimate.poverty_ratio == pytest.approx(13.28, abs=0.01)
    assert not estimate.eligible
    assert estimate.subsidy == 0


def test_family_of_four_partial_subsidy():
    estimate = estimate_aca_subsidy(60000, 4, 900)
    assert estimate.eligible
    assert estimate.affordable_premium == pytest.approx(425.0)
    assert estimate.subsidy == pytest.approx(475.0)


def test_ratio_exactly_four_is_ineligible():
    assert calculate_aca_subsidy(4 * 15060, 1, 900) == 0


def test_subsidy_never_negative():
    """Cheap plan below the affordable premium gets nothing, not a negative credit."""
    assert calculate_aca_subsidy(40000, 1, 100) == 0


def test_aca_invalid_input():
    with pytest.raises(InvalidInputError):
        calculate_aca_subsidy(-1, 1, 450)
    with pytest.raises(InvalidInputError):
        calculate_aca_subsidy(30000, 0, 450)
    with pytest.raises(InvalidInputError):
        calculate_aca_subsidy(30000, 2, -10)


def test_aca_form_calculator():
    result = ACASubsidyCalculator().calculate(
        {"household_income": "$0", "family_size": "1", "plan_cost": "450"}
    )
    assert result["subsidy"] == 450
    assert result["eligible"] is True
