"""
Tablayeso Report Module
Text rendering, PDF and Excel export of calculation results.
"""

from .text_report import render_result, item_detail_lines
from .pdf_report import generate_pdf_report, default_pdf_name
from .excel_report import export_to_excel, default_excel_name

__all__ = [
    "render_result",
    "item_detail_lines",
    "generate_pdf_report",
    "default_pdf_name",
    "export_to_excel",
    "default_excel_name",
]
