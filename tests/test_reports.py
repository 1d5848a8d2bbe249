from datetime import date

import pandas as pd
import pytest

from tablayeso import ExportRefused
from tablayeso.engine import calculate_materials
from tablayeso.models.schema import (
    CalculationMode,
    CalculationResult,
    CeilingSegment,
    ItemKind,
    ItemSummary,
    StructureItem,
    WallSegment,
)
from tablayeso.report.excel_report import default_excel_name, export_to_excel
from tablayeso.report.pdf_report import default_pdf_name, generate_pdf_report
from tablayeso.report.text_report import (
    CORRECT_PROMPT,
    NO_MATERIALS,
    format_date,
    item_detail_lines,
    render_result,
)

DAY = date(2024, 3, 7)


@pytest.fixture
def result(simple_wall, room_ceiling):
    return calculate_materials([simple_wall, room_ceiling])


class TestTextReport:

    def test_format_date(self):
        assert format_date(DAY) == "07/03/2024"

    def test_wall_detail_lines(self, result):
        lines = item_detail_lines(result.item_summaries[0])

        assert lines[0] == "Type: Wall"
        assert "Faces: 1" in lines
        assert "Face 1 Panel: Normal" in lines
        assert "Post Spacing: 0.40 m" in lines
        assert "Double Structure: No" in lines
        assert "  - Segment 1: 3.00 m (Width) x 2.40 m (Height)" in lines
        assert "  Total Segment Area: 7.20 m²" in lines
        assert "  Total Segment Width: 3.00 m" in lines

    def test_ceiling_detail_lines(self, result):
        lines = item_detail_lines(result.item_summaries[1])

        assert lines[0] == "Type: Ceiling"
        assert "Plenum: 0.50 m" in lines
        assert "  - Segment 1: 3.00 m (Width) x 4.00 m (Length)" in lines
        assert "  Sum of Segment Widths + Lengths: 7.00 m" in lines

    def test_success_report(self, result):
        text = render_result(result, DAY)

        assert "Calculation date: 07/03/2024" in text
        assert "### Wall #1" in text
        assert "### Ceiling #2" in text
        assert "| Joint Compound | 2 | box |" in text
        assert CORRECT_PROMPT not in text

    def test_error_report_groups_by_item(self, simple_wall, invalid_wall):
        text = render_result(calculate_materials([simple_wall, invalid_wall]), DAY)

        assert "Error in Wall #2: Segment 1: invalid dimensions" in text
        assert text.rstrip().endswith(CORRECT_PROMPT)
        assert "| Material |" not in text

    def test_error_report_keeps_items_with_the_same_label(self):
        wall = StructureItem.wall([WallSegment(3.0, 2.4)], faces=3, label="Room")
        ceiling = StructureItem.ceiling([CeilingSegment(3.0, 4.0)], panel="Nope", label="Room")

        text = render_result(calculate_materials([wall, ceiling]), DAY)

        assert "Error in Room: Invalid number of faces (must be 1 or 2)" in text
        assert "Error in Room: Invalid ceiling panel type" in text
        assert "No valid items to calculate." in text

    def test_empty_batch_report(self):
        text = render_result(calculate_materials([]))

        assert "No items to calculate" in text
        assert CORRECT_PROMPT in text

    def test_best_effort_report_shows_totals_and_errors(self, simple_wall, invalid_wall):
        result = calculate_materials([simple_wall, invalid_wall], CalculationMode.BEST_EFFORT)
        text = render_result(result, DAY)

        assert "| Studs | 8 | unit |" in text
        assert "Error in Wall #2" in text

    def test_no_materials_message(self):
        summary = ItemSummary(number=1, label="Wall #1", kind=ItemKind.WALL, faces=1,
                              post_spacing=0.4, double_structure=False)
        text = render_result(CalculationResult(item_summaries=[summary]), DAY)

        assert NO_MATERIALS in text


class TestExcelExport:

    def test_default_name(self):
        assert default_excel_name(DAY) == "Calculo_Materiales_07-03-2024.xlsx"

    def test_workbook_sheets(self, result, tmp_path):
        path = tmp_path / "out" / "materials.xlsx"

        buffer = export_to_excel(result, path)

        assert path.exists()
        assert buffer.getvalue() == path.read_bytes()

        materials = pd.read_excel(path, sheet_name="Materials")
        assert list(materials.columns) == ["Material", "Quantity", "Unit"]
        assert list(materials["Material"]) == list(result.materials_total)
        row = materials[materials["Material"] == "Joint Compound"].iloc[0]
        assert row["Quantity"] == 2
        assert row["Unit"] == "box"

        items = pd.read_excel(path, sheet_name="Items")
        assert list(items["Detail"]) == [
            "Options", "Seg 1: 3.00m x 2.40m",
            "Options", "Seg 1: 3.00m x 4.00m",
        ]
        assert list(items["Item"]) == ["Wall #1", "Wall #1", "Ceiling #2", "Ceiling #2"]
        assert items["Total Area (m²)"].iloc[0] == pytest.approx(7.2)

    def test_returns_buffer_without_path(self, result):
        buffer = export_to_excel(result)
        assert buffer.read(2) == b"PK"

    def test_refuses_failed_calculation(self, simple_wall, invalid_wall):
        failed = calculate_materials([simple_wall, invalid_wall])

        with pytest.raises(ExportRefused, match="Excel"):
            export_to_excel(failed)


class TestPdfExport:

    def test_default_name(self):
        assert default_pdf_name(DAY) == "Calculo_Materiales_07-03-2024.pdf"

    def test_writes_pdf(self, result, tmp_path):
        path = generate_pdf_report(result, tmp_path / "report.pdf", DAY)

        assert path.exists()
        assert path.read_bytes().startswith(b"%PDF")

    def test_refuses_empty_result(self, tmp_path):
        with pytest.raises(ExportRefused, match="PDF"):
            generate_pdf_report(CalculationResult(), tmp_path / "report.pdf")
        assert not (tmp_path / "report.pdf").exists()
