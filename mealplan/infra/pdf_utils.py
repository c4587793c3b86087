import io
from typing import List
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from mealplan.domain.GroceryList import GroceryItem, GroceryList
from mealplan.logic.shopping.list_helpers import get_sorted_categories, group_items_by_category
from mealplan.logic.units.formatting import format_quantity, round_quantity


def generate_pdf_for_grocery_list(grocery_list: GroceryList, items: List[GroceryItem]) -> bytes:
    """Generate a printable grocery list: one table per category with a checkbox column."""
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf, pagesize=A4,
        rightMargin=20, leftMargin=20, topMargin=20, bottomMargin=20
    )

    styles = getSampleStyleSheet()
    elements = [
        Paragraph(escape(grocery_list.name), styles["Title"]),
        Paragraph(f"{grocery_list.date_range.start} to {grocery_list.date_range.end}", styles["Normal"]),
        Spacer(1, 16),
    ]

    if not items:
        elements.append(Paragraph("No items.", styles["Normal"]))

    grouped = group_items_by_category(items)
    for category in get_sorted_categories(grouped):
        elements.append(Paragraph(escape(category), styles["Heading2"]))
        data = [["", "Item", "Quantity"]]
        for item in sorted(grouped[category], key=lambda i: i.name.lower()):
            qty = format_quantity(round_quantity(item.quantity, item.unit))
            data.append(["[x]" if item.checked else "[ ]", item.name, f"{qty} {item.unit}"])

        table = Table(data, colWidths=[30, 330, 150], repeatRows=1)
        table.setStyle(TableStyle([
            ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#4CAF50")),
            ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("ALIGN", (0, 0), (0, -1), "CENTER"),
            ("BOTTOMPADDING", (0, 0), (-1, 0), 6),
            ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
        ]))
        elements.append(table)
        elements.append(Spacer(1, 10))

    doc.build(elements)
    return buf.getvalue()
