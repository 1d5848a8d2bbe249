"""
Text Report - Render a calculation result as markdown text.

Three outcomes are rendered distinctly:
- validation errors, grouped by item
- a successful calculation with no material lines
- item details followed by the materials table
"""

from datetime import date
from typing import List, Optional

from ..catalog import unit_for
from ..models.schema import CalculationResult, ItemKind, ItemSummary

TITLE = "Materials Summary"
ERRORS_TITLE = "Validation Errors"
CORRECT_PROMPT = "Please correct the errors in the marked items."
NO_MATERIALS = "No materials could be computed from the entered dimensions. Review the values."
MATERIALS_TITLE = "Material Totals (Quantities to Purchase)"


def format_date(day: Optional[date] = None) -> str:
    return (day or date.today()).strftime("%d/%m/%Y")


def item_detail_lines(summary: ItemSummary) -> List[str]:
    """Configuration and measurement lines for one item."""
    lines = [f"Type: {summary.kind.display_name}"]

    if summary.kind == ItemKind.WALL:
        lines.append(f"Faces: {summary.faces}")
        if summary.face1_panel:
            lines.append(f"Face 1 Panel: {summary.face1_panel.value}")
        if summary.faces == 2 and summary.face2_panel:
            lines.append(f"Face 2 Panel: {summary.face2_panel.value}")
        lines.append(f"Post Spacing: {summary.post_spacing:.2f} m")
        lines.append(f"Double Structure: {'Yes' if summary.double_structure else 'No'}")
    else:
        if summary.panel:
            lines.append(f"Panel Type: {summary.panel.value}")
        if summary.plenum is not None:
            lines.append(f"Plenum: {summary.plenum:.2f} m")

    lines.append("Segments:")
    if not summary.segments:
        lines.append("  - No valid segments")
        return lines

    for seg in summary.segments:
        if summary.kind == ItemKind.WALL:
            lines.append(
                f"  - Segment {seg.number}: {seg.width:.2f} m (Width) x {seg.height:.2f} m (Height)"
            )
        else:
            lines.append(
                f"  - Segment {seg.number}: {seg.width:.2f} m (Width) x {seg.length:.2f} m (Length)"
            )

    lines.append(f"  Total Segment Area: {summary.total_area:.2f} m²")
    if summary.kind == ItemKind.WALL:
        lines.append(f"  Total Segment Width: {summary.total_width:.2f} m")
    else:
        lines.append(f"  Sum of Segment Widths + Lengths: {summary.perimeter_sum:.2f} m")

    return lines


def render_errors(result: CalculationResult) -> str:
    lines = [f"## {ERRORS_TITLE}", ""]
    for group in result.error_groups:
        lines.append(f"Error in {group.label}: {', '.join(group.messages)}")

    # Batch-level errors follow the per-item ones
    grouped = sum(len(group.messages) for group in result.error_groups)
    lines.extend(result.errors[grouped:])
    lines.append("")
    lines.append(CORRECT_PROMPT)
    return "\n".join(lines) + "\n"


def render_materials_table(result: CalculationResult) -> str:
    lines = [
        "| Material | Quantity | Unit |",
        "|----------|----------|------|",
    ]
    for name, quantity in result.materials_total.items():
        lines.append(f"| {name} | {quantity} | {unit_for(name)} |")
    return "\n".join(lines) + "\n"


def render_result(result: CalculationResult, day: Optional[date] = None) -> str:
    """Render a full report for display or printing."""
    if result.has_errors and not result.has_materials:
        return render_errors(result)

    parts = [f"# {TITLE}", "", f"Calculation date: {format_date(day)}", ""]

    if result.item_summaries:
        parts.append("## Calculated Items")
        parts.append("")
        for summary in result.item_summaries:
            parts.append(f"### {summary.label}")
            parts.extend(item_detail_lines(summary))
            parts.append("")

    parts.append(f"## {MATERIALS_TITLE}")
    parts.append("")
    if result.has_materials:
        parts.append(render_materials_table(result))
    else:
        parts.append(NO_MATERIALS)
        parts.append("")

    text = "\n".join(parts)
    if result.has_errors:
        text += "\n" + render_errors(result)
    return text
