import io
from xml.sax.saxutils import escape
from reportlab.lib.pagesizes import A4, landscape
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
from reportlab.lib import colors
from reportlab.lib.styles import getSampleStyleSheet

from weekfit.domain.WeeklyMenu import WeeklyMenu
from weekfit.utilities.constants import DAY_LABELS, SLOT_LABELS, SHOPPING_CATEGORIES


def generate_pdf_for_menu(menu: WeeklyMenu) -> bytes:
    """Weekly menu table (Day x selected slots) followed by the categorized shopping list."""
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf, pagesize=landscape(A4),
        rightMargin=20, leftMargin=20, topMargin=20, bottomMargin=20
    )

    styles = getSampleStyleSheet()
    cell = styles["BodyText"]
    elements = [
        Paragraph(f"WeekFit - Week of {menu.week_start}", styles["Title"]),
        Spacer(1, 16),
    ]

    slots = []
    for day in menu.days():
        for slot in menu.slots(day):
            if slot not in slots:
                slots.append(slot)

    data = [["Day"] + [SLOT_LABELS.get(s, s) for s in slots]]
    for day in menu.days():
        row = [DAY_LABELS.get(day, day)]
        for slot in slots:
            row.append(Paragraph(escape(menu.get_meal(day, slot) or "-"), cell))
        data.append(row)

    table = Table(data, repeatRows=1)
    table.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#4CAF50")),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
        ("ALIGN", (0, 0), (-1, -1), "CENTER"),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, 0), 12),
        ("BOTTOMPADDING", (0, 0), (-1, 0), 10),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
    ]))
    elements.append(table)

    elements.append(Spacer(1, 20))
    elements.append(Paragraph("Shopping list", styles["Heading2"]))
    for category in SHOPPING_CATEGORIES:
        items = menu.shopping_list.get(category) or []
        if not items:
            continue
        elements.append(Paragraph(category.capitalize(), styles["Heading4"]))
        elements.append(Paragraph(escape(", ".join(items)), cell))

    doc.build(elements)
    return buf.getvalue()
