import io
from reportlab.lib.pagesizes import A4
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
from reportlab.lib import colors
from reportlab.lib.styles import getSampleStyleSheet

_HEADER_STYLE = TableStyle([
    ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#4CAF50")),
    ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
    ("ALIGN", (0, 0), (-1, -1), "CENTER"),
    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
    ("FONTSIZE", (0, 0), (-1, 0), 11),
    ("BOTTOMPADDING", (0, 0), (-1, 0), 8),
    ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
])


def _table(data):
    table = Table(data, repeatRows=1)
    table.setStyle(_HEADER_STYLE)
    return table


def generate_pdf_for_report(report: dict) -> bytes:
    """Render the analytics report (as built by the /api/analytics routes) to PDF bytes.

    Expected keys: generated_at, stats, waste_types, waste_trend, top_ingredients, low_stock.
    Missing sections are rendered as empty tables.
    """
    buf = io.BytesIO()
    doc = SimpleDocTemplate(buf, pagesize=A4, rightMargin=20, leftMargin=20, topMargin=20, bottomMargin=20)
    styles = getSampleStyleSheet()
    stats = report.get("stats", {})

    elements = [
        Paragraph("Waste & Efficiency Report", styles["Title"]),
        Paragraph(f"Generated {report.get('generated_at', '')}", styles["Normal"]),
        Spacer(1, 16),
        _table([
            ["Efficiency", "Waste %", "Usage efficiency", "Waste this month"],
            [
                f"{stats.get('efficiency', 0)}%",
                f"{stats.get('waste_percentage', 0)}%",
                f"{stats.get('usage', {}).get('efficiency', 0)}%",
                f"{stats.get('total_waste', {}).get('quantity', 0)}",
            ],
        ]),
        Spacer(1, 16),
        Paragraph("Waste by type", styles["Heading2"]),
        _table([["Type", "Amount"]] + [[r["label"], r["amount"]] for r in report.get("waste_types", [])]),
        Spacer(1, 16),
        Paragraph("Waste trend", styles["Heading2"]),
        _table([["Month", "Waste"]] + [[f"{r['label']} {r['year']}", r["value"]] for r in report.get("waste_trend", [])]),
        Spacer(1, 16),
        Paragraph("Most wasted ingredients", styles["Heading2"]),
        _table([["Ingredient", "Wasted", "Unit"]] + [[r["name"], r["consumed"], r["unit"]] for r in report.get("top_ingredients", [])]),
        Spacer(1, 16),
        Paragraph("Lowest stock", styles["Heading2"]),
        _table([["Ingredient", "Stock", "Minimum", "Critical"]] + [
            [r["name"], r["quantity"], r["minimum_stock"], "yes" if r["critical"] else "no"]
            for r in report.get("low_stock", [])
        ]),
    ]

    doc.build(elements)
    return buf.getvalue()
