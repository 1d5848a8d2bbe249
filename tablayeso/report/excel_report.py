"""
Excel Export - Item details and material totals workbook.

Sheets:
- Items: one row per segment, repeating the item configuration, with the
  item totals on the first row of each item
- Materials: Material | Quantity | Unit
"""

from datetime import date
from pathlib import Path
from typing import Dict, List, Optional
import io
import logging

import pandas as pd
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter

from .. import ExportRefused
from ..catalog import unit_for
from ..models.schema import CalculationResult, ItemKind, ItemSummary
from .text_report import format_date

logger = logging.getLogger(__name__)

EXPORT_REFUSED = "Run a valid calculation before generating the Excel file."
HEADER_COLOR = "556B2F"

ITEM_COLUMNS = [
    "Item Type", "Item", "Detail",
    "Faces", "Face 1 Panel", "Face 2 Panel", "Ceiling Panel",
    "Post Spacing (m)", "Plenum (m)", "Double Structure",
    "Total Width (m)", "Width + Length Sum (m)", "Total Area (m²)",
]


def default_excel_name(day: Optional[date] = None) -> str:
    return f"Calculo_Materiales_{format_date(day).replace('/', '-')}.xlsx"


def _item_rows(summary: ItemSummary) -> List[Dict]:
    """Rows for one item: options row with totals, then one row per segment."""
    common = {column: "" for column in ITEM_COLUMNS}
    common["Item Type"] = summary.kind.display_name
    common["Item"] = summary.label

    if summary.kind == ItemKind.WALL:
        common["Faces"] = summary.faces
        common["Face 1 Panel"] = summary.face1_panel.value if summary.face1_panel else ""
        common["Face 2 Panel"] = summary.face2_panel.value if summary.face2_panel else ""
        common["Post Spacing (m)"] = round(summary.post_spacing, 2)
        common["Double Structure"] = "Yes" if summary.double_structure else "No"
    else:
        common["Ceiling Panel"] = summary.panel.value if summary.panel else ""
        common["Plenum (m)"] = round(summary.plenum, 2) if summary.plenum is not None else ""

    options = dict(common, Detail="Options")
    options["Total Area (m²)"] = round(summary.total_area, 2)
    if summary.kind == ItemKind.WALL:
        options["Total Width (m)"] = round(summary.total_width, 2)
    else:
        options["Width + Length Sum (m)"] = round(summary.perimeter_sum, 2)

    rows = [options]
    for seg in summary.segments:
        second = seg.height if summary.kind == ItemKind.WALL else seg.length
        rows.append(dict(common, Detail=f"Seg {seg.number}: {seg.width:.2f}m x {second:.2f}m"))
    return rows


def _format_sheet(worksheet, df: pd.DataFrame) -> None:
    header_font = Font(bold=True, color="FFFFFF")
    header_fill = PatternFill(start_color=HEADER_COLOR, end_color=HEADER_COLOR, fill_type="solid")
    for cell in worksheet[1]:
        cell.font = header_font
        cell.fill = header_fill

    for idx, col in enumerate(df.columns, 1):
        max_length = max(
            df[col].astype(str).map(len).max() if len(df) else 0,
            len(str(col)),
        ) + 2
        worksheet.column_dimensions[get_column_letter(idx)].width = min(max_length, 50)


def export_to_excel(
    result: CalculationResult,
    filepath: Optional[Path] = None,
) -> io.BytesIO:
    """
    Export a calculation result to Excel.

    Args:
        result: Successful calculation result
        filepath: Optional path to also write the workbook to

    Returns:
        BytesIO buffer containing the workbook

    Raises:
        ExportRefused: the result has no materials or no item summaries
    """
    if not result.is_exportable:
        raise ExportRefused(EXPORT_REFUSED)

    item_rows = []
    for summary in result.item_summaries:
        item_rows.extend(_item_rows(summary))
    items_df = pd.DataFrame(item_rows, columns=ITEM_COLUMNS)

    materials_df = pd.DataFrame(
        [
            {"Material": name, "Quantity": quantity, "Unit": unit_for(name)}
            for name, quantity in result.materials_total.items()
        ],
        columns=["Material", "Quantity", "Unit"],
    )

    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        items_df.to_excel(writer, sheet_name="Items", index=False)
        materials_df.to_excel(writer, sheet_name="Materials", index=False)
        _format_sheet(writer.sheets["Items"], items_df)
        _format_sheet(writer.sheets["Materials"], materials_df)

    buffer.seek(0)

    if filepath:
        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)
        with open(filepath, "wb") as f:
            f.write(buffer.getvalue())
        logger.info(f"Wrote Excel workbook: {filepath}")

    return buffer
