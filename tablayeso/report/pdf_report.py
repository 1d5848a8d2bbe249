"""
PDF Report Generator - Materials summary document.

Sections:
- Title and calculation date
- Calculated item details
- Material totals table

Usage:
    from tablayeso.report.pdf_report import generate_pdf_report
    generate_pdf_report(result, Path("Calculo_Materiales.pdf"))
"""

from datetime import date
from pathlib import Path
from typing import Optional
import logging

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import (
    HRFlowable,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from .. import ExportRefused
from ..catalog import unit_for
from ..models.schema import CalculationResult
from .text_report import MATERIALS_TITLE, TITLE, format_date, item_detail_lines

logger = logging.getLogger(__name__)

EXPORT_REFUSED = "Run a valid calculation before generating the PDF."
FOOTER_TEXT = "Tablayeso Materials Calculator"

PRIMARY = colors.HexColor("#556B2F")
SECONDARY = colors.HexColor("#6B8E23")
MEDIUM_GRAY = colors.HexColor("#808080")
DARK_GRAY = colors.HexColor("#333333")
ROW_ALT = colors.HexColor("#F2F5EA")


def default_pdf_name(day: Optional[date] = None) -> str:
    return f"Calculo_Materiales_{format_date(day).replace('/', '-')}.pdf"


def _draw_footer(canvas, doc) -> None:
    canvas.saveState()
    canvas.setFont("Helvetica", 8)
    canvas.setFillColor(MEDIUM_GRAY)
    width, _ = A4
    canvas.drawCentredString(width / 2, 10 * mm, FOOTER_TEXT)
    canvas.drawRightString(width - 15 * mm, 10 * mm, f"Page {doc.page}")
    canvas.restoreState()


def generate_pdf_report(
    result: CalculationResult,
    output_path: Path,
    day: Optional[date] = None,
) -> Path:
    """
    Write the materials summary PDF.

    Raises:
        ExportRefused: the result has no materials or no item summaries
    """
    if not result.is_exportable:
        raise ExportRefused(EXPORT_REFUSED)

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    doc = SimpleDocTemplate(
        str(output_path),
        pagesize=A4,
        rightMargin=15 * mm,
        leftMargin=15 * mm,
        topMargin=15 * mm,
        bottomMargin=20 * mm,
    )

    styles = getSampleStyleSheet()
    title_style = ParagraphStyle(
        "TablayesoTitle",
        parent=styles["Heading1"],
        fontSize=18,
        textColor=PRIMARY,
        spaceAfter=4,
    )
    date_style = ParagraphStyle(
        "TablayesoDate",
        parent=styles["Normal"],
        fontSize=10,
        textColor=MEDIUM_GRAY,
        spaceAfter=8,
    )
    section_style = ParagraphStyle(
        "TablayesoSection",
        parent=styles["Heading2"],
        fontSize=14,
        textColor=SECONDARY,
        spaceBefore=10,
        spaceAfter=6,
    )
    item_style = ParagraphStyle(
        "TablayesoItem",
        parent=styles["Normal"],
        fontName="Helvetica-Bold",
        fontSize=10,
        textColor=PRIMARY,
        spaceBefore=6,
    )
    body_style = ParagraphStyle(
        "TablayesoBody",
        parent=styles["Normal"],
        fontSize=9,
        textColor=DARK_GRAY,
        leftIndent=6 * mm,
    )

    story = [
        Paragraph(TITLE, title_style),
        Paragraph(f"Calculation date: {format_date(day)}", date_style),
        HRFlowable(width="100%", thickness=1, color=SECONDARY),
        Paragraph("Calculated Items", section_style),
    ]

    for summary in result.item_summaries:
        story.append(Paragraph(f"{summary.label}:", item_style))
        for line in item_detail_lines(summary):
            indent = "&nbsp;" * 4 if line.startswith("  ") else ""
            story.append(Paragraph(indent + line.strip(), body_style))

    story.append(Spacer(1, 4 * mm))
    story.append(Paragraph(MATERIALS_TITLE, section_style))

    table_data = [["Material", "Quantity", "Unit"]]
    for name, quantity in result.materials_total.items():
        table_data.append([name, str(quantity), unit_for(name)])

    table = Table(table_data, colWidths=[95 * mm, 35 * mm, 35 * mm], repeatRows=1)
    table_style = [
        ("BACKGROUND", (0, 0), (-1, 0), PRIMARY),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 9),
        ("ALIGN", (1, 0), (-1, -1), "CENTER"),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.HexColor("#CBD5E0")),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
        ("TOPPADDING", (0, 0), (-1, -1), 4),
    ]
    for row in range(2, len(table_data), 2):
        table_style.append(("BACKGROUND", (0, row), (-1, row), ROW_ALT))
    table.setStyle(TableStyle(table_style))
    story.append(table)

    doc.build(story, onFirstPage=_draw_footer, onLaterPages=_draw_footer)
    logger.info(f"Generated PDF report: {output_path}")
    return output_path
