import io
from reportlab.lib.pagesizes import A4, landscape
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
from reportlab.lib import colors
from reportlab.lib.styles import getSampleStyleSheet

from cookwise.utilities.constants import DISPLAY_DATE_FORMAT, MEAL_TYPES, UNIT_LABELS

HEADER_STYLE = [
    ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#4CAF50")),
    ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
    ("FONTSIZE", (0, 0), (-1, 0), 12),
    ("BOTTOMPADDING", (0, 0), (-1, 0), 10),
    ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
]


def _fmt_qty(quantity) -> str:
    return f"{quantity:g}" if isinstance(quantity, (int, float)) else str(quantity)


def generate_pdf_for_week(week_plan):
    """Generate a simple PDF table: Day / Breakfast / Lunch / Dinner for the provided WeekPlan."""
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf, pagesize=landscape(A4),
        rightMargin=20, leftMargin=20, topMargin=20, bottomMargin=20
    )

    styles = getSampleStyleSheet()
    elements = [
        Paragraph(f"Meal Plan - Week {week_plan.week}, {week_plan.year}", styles["Title"]),
        Spacer(1, 16),
    ]

    data = [["Day"] + [m.capitalize() for m in MEAL_TYPES]]
    for day, meals in week_plan.meals.items():
        row = [f"{day} ({meals['date'].strftime(DISPLAY_DATE_FORMAT)})"]
        for meal_type in MEAL_TYPES:
            entry = meals.get(meal_type)
            row.append(f"{entry.recipe.title} x{entry.servings}" if entry else "-")
        data.append(row)

    table = Table(data, repeatRows=1)
    table.setStyle(TableStyle(HEADER_STYLE + [("ALIGN", (0, 0), (-1, -1), "CENTER")]))

    elements.append(table)
    doc.build(elements)
    return buf.getvalue()


def generate_pdf_for_shopping_list(shopping_list):
    """Generate a printable shopping list grouped by category."""
    buf = io.BytesIO()
    doc = SimpleDocTemplate(buf, pagesize=A4, rightMargin=30, leftMargin=30, topMargin=30, bottomMargin=30)
    styles = getSampleStyleSheet()
    elements = [Paragraph(shopping_list.name, styles["Title"]), Spacer(1, 12)]

    data = [["", "Item", "Quantity", "Category"]]
    flagged = []
    for item in shopping_list.get_items():
        name = item.name + (" *" if item.issue else "")
        data.append([
            "[x]" if item.checked else "[ ]",
            name,
            f"{_fmt_qty(item.quantity)} {UNIT_LABELS.get(item.unit, item.unit)}",
            item.category.capitalize(),
        ])
        if item.issue:
            flagged.append(item.issue.get("message", ""))

    table = Table(data, repeatRows=1, colWidths=[30, 230, 110, 110])
    table.setStyle(TableStyle(HEADER_STYLE + [("ALIGN", (2, 1), (2, -1), "RIGHT")]))
    elements.append(table)

    if flagged:
        elements.append(Spacer(1, 12))
        elements.append(Paragraph("* Pantry stock not applied:", styles["Heading4"]))
        for message in flagged:
            elements.append(Paragraph(message, styles["Normal"]))

    doc.build(elements)
    return buf.getvalue()
