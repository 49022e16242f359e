"""
IUL illustration PDF.

Renders an IULProjection as a printable illustration using fpdf2
(pure Python, no system dependencies).

Sections, always present:
1. Header + client inputs
2. Illustration assumptions
3. Year-by-year values
4. Totals
5. Disclosures
"""

from datetime import datetime

from fpdf import FPDF

from .config import DEFAULT_CONFIG, CalculatorConfig, CoiFloorPolicy
from .schemas import IULProjection


def _fmt(amount) -> str:
    """Format as currency: $1,234.56"""
    try:
        return f"${float(amount):,.2f}"
    except (ValueError, TypeError):
        return "$0.00"


def _pct(rate) -> str:
    try:
        return f"{float(rate) * 100:.2f}%"
    except (ValueError, TypeError):
        return "0.00%"


def _safe(text: str) -> str:
    """Replace Unicode chars that can't be rendered by built-in PDF fonts (latin-1)."""
    if not text:
        return ""
    return (
        text
        .replace("•", "-")    # bullet
        .replace("—", " - ")  # em dash
        .replace("–", "-")    # en dash
        .replace("’", "'")    # right single quote
        .encode("latin-1", errors="replace")
        .decode("latin-1")
    )


class IllustrationPDF(FPDF):

    def __init__(self, company_name=""):
        super().__init__()
        self.company_name = company_name
        self.set_auto_page_break(auto=True, margin=20)

    def footer(self):
        self.set_y(-15)
        self.set_font("Helvetica", "I", 8)
        self.set_text_color(150, 150, 150)
        self.cell(0, 10, f"{_safe(self.company_name)} - Page {self.page_no()}/{{nb}}", align="C")

    def section_header(self, title):
        """Render a section header bar."""
        self.set_font("Helvetica", "B", 11)
        self.set_fill_color(30, 60, 114)
        self.set_text_color(255, 255, 255)
        self.cell(0, 8, f"  {title}", fill=True, new_x="LMARGIN", new_y="NEXT")
        self.set_text_color(0, 0, 0)
        self.ln(2)

    def table_header(self, cols):
        """cols: [(label, width), ...]. Everything but the first column right-aligned."""
        self.set_font("Helvetica", "B", 8)
        self.set_fill_color(240, 240, 240)
        for i, (label, width) in enumerate(cols):
            self.cell(width, 6, label, border="B", fill=True, align="L" if i == 0 else "R")
        self.ln()

    def table_row(self, values, widths, bold=False):
        self.set_font("Helvetica", "B" if bold else "", 8)
        for i, (val, width) in enumerate(zip(values, widths)):
            self.cell(width, 5.5, str(val), align="L" if i == 0 else "R")
        self.ln()

    def label_value(self, label, value):
        self.set_font("Helvetica", "", 9)
        self.cell(60, 5, label)
        self.set_font("Helvetica", "B", 9)
        self.cell(0, 5, _safe(str(value)), new_x="LMARGIN", new_y="NEXT")


def generate_iul_illustration_pdf(
    projection: IULProjection,
    inputs: dict,
    company_name: str = "FloFaction LLC",
    config: CalculatorConfig = DEFAULT_CONFIG,
) -> bytes:
    """
    Generate an IUL illustration document.

    Args:
        projection: result of project_iul
        inputs: the request values (age, monthly_premium, initial_lump_sum, client_name)
        company_name: printed in the header and footer

    Returns:
        PDF bytes
    """
    assumptions = config.iul
    pdf = IllustrationPDF(company_name=company_name)
    pdf.alias_nb_pages()
    pdf.add_page()

    # ── SECTION 1: Header ──
    pdf.set_font("Helvetica", "B", 18)
    pdf.cell(0, 10, _safe(company_name), new_x="LMARGIN", new_y="NEXT")
    pdf.set_font("Helvetica", "B", 13)
    pdf.cell(0, 8, "Indexed Universal Life - Hypothetical Illustration",
             new_x="LMARGIN", new_y="NEXT")
    pdf.set_font("Helvetica", "", 9)
    pdf.cell(0, 5, f"Prepared: {datetime.utcnow().strftime('%B %d, %Y')}",
             new_x="LMARGIN", new_y="NEXT")
    client = inputs.get("client_name")
    if client:
        pdf.cell(0, 5, f"Prepared for: {_safe(client)}", new_x="LMARGIN", new_y="NEXT")
    pdf.ln(4)

    pdf.section_header("CLIENT INPUTS")
    pdf.label_value("Issue age", inputs.get("age", ""))
    pdf.label_value("Monthly premium", _fmt(inputs.get("monthly_premium", 0)))
    pdf.label_value("Initial lump sum", _fmt(inputs.get("initial_lump_sum", 0)))
    face = inputs.get("death_benefit_base") or assumptions.death_benefit_base
    pdf.label_value("Death benefit base", _fmt(face))
    pdf.ln(4)

    # ── SECTION 2: Assumptions ──
    pdf.section_header("ASSUMPTIONS")
    pdf.label_value("Index cap", _pct(assumptions.cap_rate))
    pdf.label_value("Index floor", _pct(assumptions.floor_rate))
    pdf.label_value("Assumed market return", _pct(assumptions.market_return))
    pdf.label_value("Illustration period", f"{assumptions.projection_years} years")
    pdf.ln(4)

    # ── SECTION 3: Yearly values ──
    pdf.section_header("YEAR-BY-YEAR VALUES")
    cols = [("Year", 18), ("Age", 18), ("Premium", 32), ("Credited", 24),
            ("Cost of Ins.", 32), ("Cash Value", 33), ("Death Benefit", 33)]
    widths = [c[1] for c in cols]
    pdf.table_header(cols)
    for row in projection.years:
        pdf.table_row([
            row.year,
            row.age,
            _fmt(row.annual_premium),
            _pct(row.credited_rate),
            _fmt(row.cost_of_insurance),
            _fmt(row.cash_value),
            _fmt(row.death_benefit),
        ], widths)
    pdf.ln(4)

    # ── SECTION 4: Totals ──
    pdf.section_header("TOTALS")
    pdf.label_value("Total premiums paid", _fmt(projection.total_premiums_paid))
    pdf.label_value("Final cash value", _fmt(projection.final_cash_value))
    pdf.label_value("Final death benefit", _fmt(projection.final_death_benefit))
    pdf.ln(4)

    # ── SECTION 5: Disclosures ──
    pdf.section_header("DISCLOSURES")
    pdf.set_font("Helvetica", "", 8)
    notes = [
        "This illustration is hypothetical and not a guarantee of future values.",
        "Index credits are limited by the cap and floor shown above; "
        "actual policy charges vary by carrier and underwriting class.",
    ]
    if projection.negative_coi_years:
        notes.append(
            "Cash value exceeds the death benefit base from year %d; cost of insurance "
            "shown for those years is %s." % (
                projection.negative_coi_years[0],
                "floored at zero" if assumptions.coi_floor_policy == CoiFloorPolicy.FLOOR_AT_ZERO
                else "negative (reduces charges)",
            )
        )
    for note in notes:
        pdf.multi_cell(0, 4, _safe("- " + note), new_x="LMARGIN", new_y="NEXT")

    return bytes(pdf.output())
