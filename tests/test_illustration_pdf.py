"""
IUL illustration PDF tests.

Tests:
1-2. Valid PDF bytes for a normal projection
3.   Negative-COI projection still renders
"""

from flofaction.calculators.iul import project_iul
from flofaction.illustration_pdf import _fmt, _pct, _safe, generate_iul_illustration_pdf


def _inputs(**overrides):
    data = {"age": 40, "monthly_premium": 500, "initial_lump_sum": 10000, "client_name": "Jane Doe"}
    data.update(overrides)
    return data


def test_pdf_generates_valid_bytes():
    inputs = _inputs()
    projection = project_iul(inputs["age"], inputs["monthly_premium"], inputs["initial_lump_sum"])
    pdf_bytes = generate_iul_illustration_pdf(projection, inputs, "Test Agency")
    assert isinstance(pdf_bytes, bytes)
    assert pdf_bytes[:5] == b"%PDF-"
    assert len(pdf_bytes) > 1000


def test_pdf_handles_unicode_client_name():
    inputs = _inputs(client_name="Zoë — O’Neil")
    projection = project_iul(40, 500, 0)
    pdf_bytes = generate_iul_illustration_pdf(projection, inputs)
    assert pdf_bytes[:5] == b"%PDF-"


def test_pdf_with_negative_coi_years():
    projection = project_iul(55, 0, 900000)
    assert projection.negative_coi_years
    pdf_bytes = generate_iul_illustration_pdf(projection, _inputs(initial_lump_sum=900000))
    assert len(pdf_bytes) > 1000


def test_formatters():
    assert _fmt(1234.5) == "$1,234.50"
    assert _fmt("n/a") == "$0.00"
    assert _pct(0.105) == "10.50%"
    assert _safe("a — b") == "a  -  b"
