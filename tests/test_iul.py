"""
IUL projection tests.

Tests:
1-3.  Shape and totals (30 rows, ages, premiums paid)
4-5.  Year-one value against the recurrence by hand
6-7.  Cap / floor clamp on credited rate
8-10. Negative cost of insurance (flagged, floor policy)
11-12. Input validation and form calculator
"""

import math

import pytest

from flofaction.calculators.iul import IULCalculator, credited_rate, project_iul
from flofaction.config import CalculatorConfig, CoiFloorPolicy, IULAssumptions
from flofaction.exceptions import InvalidInputError


def test_projection_has_thirty_years():
    projection = project_iul(35, 500, 10000)
    assert len(projection.years) == 30
    assert [row.year for row in projection.years] == list(range(1, 31))


def test_projection_reports_attained_age():
    projection = project_iul(35, 500, 0)
    assert projection.years[0].age == 36
    assert projection.years[-1].age == 65


def test_total_premiums_include_lump_sum():
    projection = project_iul(35, 500, 10000)
    assert projection.total_premiums_paid == pytest.approx(10000 + 500 * 12 * 30)
    assert projection.final_cash_value == projection.years[-1].cash_value
    assert projection.final_death_benefit == projection.years[-1].death_benefit


def test_year_one_matches_recurrence():
    projection = project_iul(40, 100, 0)
    coi = 500000 * 0.0005 * math.exp(0.06 * 1)
    expected_cash = 1200 * 1.07 - coi
    first = projection.years[0]
    assert first.cost_of_insurance == pytest.approx(coi)
    assert first.cash_value == pytest.approx(expected_cash)
    assert first.death_benefit == pytest.approx(500000 + expected_cash)


def test_death_benefit_is_base_plus_cash_value():
    projection = project_iul(30, 1000, 5000, death_benefit_base=250000)
    for row in projection.years:
        assert row.death_benefit == pytest.approx(250000 + row.cash_value)


def test_credited_rate_clamped_to_cap_and_floor():
    assert credited_rate(0.25, 0.0075, 0.105) == 0.105
    assert credited_rate(-0.30, 0.0075, 0.105) == 0.0075
    assert credited_rate(0.07, 0.0075, 0.105) == 0.07


def test_market_returns_cycle_and_clamp():
    projection = project_iul(45, 300, 0, market_returns=[0.25, -0.10, 0.05])
    rates = [row.credited_rate for row in projection.years]
    assert rates[:3] == [0.105, 0.0075, 0.05]
    assert rates[3:6] == [0.105, 0.0075, 0.05]
    assert all(0.0075 <= r <= 0.105 for r in rates)


def test_negative_coi_is_flagged_by_default():
    """Cash value above the death benefit base makes COI negative from year 1."""
    projection = project_iul(50, 0, 1000000)
    assert projection.negative_coi_years[0] == 1
    assert projection.years[0].cost_of_insurance < 0


def test_negative_coi_floored_at_zero_when_configured():
    config = CalculatorConfig(iul=IULAssumptions(coi_floor_policy=CoiFloorPolicy.FLOOR_AT_ZERO))
    projection = project_iul(50, 0, 1000000, config)
    assert projection.negative_coi_years[0] == 1
    assert all(row.cost_of_insurance >= 0 for row in projection.years)
    # Negative charges credit the cash value; flooring removes that credit
    unfloored = project_iul(50, 0, 1000000)
    assert projection.final_cash_value < unfloored.final_cash_value


def test_no_negative_coi_for_small_policy():
    projection = project_iul(35, 200, 0)
    assert projection.negative_coi_years == []


def test_invalid_inputs_rejected():
    with pytest.raises(InvalidInputError):
        project_iul(-1, 100, 0)
    with pytest.raises(InvalidInputError):
        project_iul(40, -100, 0)
    with pytest.raises(InvalidInputError):
        project_iul(40, 100, -5)
    with pytest.raises(InvalidInputError):
        project_iul(40, 100, 0, death_benefit_base=0)


def test_form_calculator_parses_strings():
    result = IULCalculator().calculate({"age": "40", "monthly_premium": "$100", "initial_lump_sum": ""})
    assert len(result["years"]) == 30
    assert result["years"][0]["age"] == 41
    assert result["total_premiums_paid"] == pytest.approx(36000)
