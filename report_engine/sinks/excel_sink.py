# ==============================================
# report_engine/sinks/excel_sink.py
# ==============================================
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from io import BytesIO
from typing import Any, Dict, List, Tuple

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from report_engine.core.constants import (
    HEADER_ROW_HEIGHT,
    MEDIA_TYPES,
    METADATA_ROW_HEIGHT,
    STYLE_TAG_COLORS,
    TITLE_ROW_HEIGHT,
)
from report_engine.core.enums import StyleTag
from report_engine.core.logging import log_execution_time
from report_engine.reports.column_spec import assign_styles
from report_engine.reports.table_builder import ReportTable
from report_engine.utils.logger import get_logger
from .base_sink import BaseSink

logger = get_logger(__name__)

_CELL_TYPES = (str, int, float, bool, Decimal, date)


class ExcelSink(BaseSink):
    """
    XLSX sink built on openpyxl.

    Layout per sheet: merged title row, merged description row, spacer,
    styled header row, then data rows with borders, zebra striping, number
    formats and conditional fills. The pane is frozen below the header and
    an auto-filter covers header and data.
    """

    format_name = "xlsx"
    media_type = MEDIA_TYPES["xlsx"]
    file_extension = "xlsx"

    def __init__(self, settings=None, **kwargs):
        super().__init__(settings, **kwargs)
        theme = self.settings.report
        self.theme = theme

        thin = Side(style="thin", color=theme.border_color)
        self.border = Border(left=thin, right=thin, top=thin, bottom=thin)
        self.title_font = Font(bold=True, size=16, color=theme.text_white)
        self.title_fill = PatternFill(fill_type="solid", start_color=theme.brand_color_dark)
        self.info_font = Font(italic=True, size=9, color=theme.text_muted)
        self.header_font = Font(bold=True, size=11, color=theme.text_white)
        self.header_fill = PatternFill(fill_type="solid", start_color=theme.brand_color_medium)
        self.zebra_fill = PatternFill(fill_type="solid", start_color=theme.brand_color_light)
        self.tag_styles: Dict[str, Tuple[PatternFill, Font]] = {
            tag: (
                PatternFill(fill_type="solid", start_color=colors["fill"]),
                Font(color=colors["font"]),
            )
            for tag, colors in STYLE_TAG_COLORS.items()
        }

    @log_execution_time(logger)
    def write(self, tables: List[ReportTable]) -> bytes:
        workbook = Workbook()
        workbook.remove(workbook.active)

        for table in tables:
            sheet = workbook.create_sheet(self._unique_sheet_name(workbook, table.sheet_name or table.title))
            self._write_table(sheet, table)

        buffer = BytesIO()
        workbook.save(buffer)
        return buffer.getvalue()

    def _unique_sheet_name(self, workbook: Workbook, name: str) -> str:
        limit = self.theme.max_sheet_title_length
        base = (name or "Report")[:limit]
        candidate = base
        counter = 2
        while candidate in workbook.sheetnames:
            suffix = f" ({counter})"
            candidate = base[: limit - len(suffix)] + suffix
            counter += 1
        return candidate

    def _write_table(self, sheet: Worksheet, table: ReportTable):
        column_count = table.column_count
        last_col = get_column_letter(column_count)

        # Metadata rows
        for row_number, text in enumerate(table.metadata_rows, start=1):
            if not text:
                continue
            cell = sheet.cell(row=row_number, column=1, value=text)
            if column_count > 1:
                sheet.merge_cells(f"A{row_number}:{last_col}{row_number}")
            if row_number == 1:
                cell.font = self.title_font
                cell.fill = self.title_fill
                cell.alignment = Alignment(horizontal="center", vertical="center", wrap_text=True)
                sheet.row_dimensions[row_number].height = TITLE_ROW_HEIGHT
            else:
                cell.font = self.info_font
                cell.alignment = Alignment(horizontal="left", vertical="center", wrap_text=True)
                sheet.row_dimensions[row_number].height = METADATA_ROW_HEIGHT

        # Header row
        header_row = len(table.metadata_rows) + 1
        for column_index, label in enumerate(table.headers, start=1):
            cell = sheet.cell(row=header_row, column=column_index, value=label)
            cell.font = self.header_font
            cell.fill = self.header_fill
            cell.border = self.border
            cell.alignment = Alignment(horizontal="center", vertical="center", wrap_text=True)
        sheet.row_dimensions[header_row].height = HEADER_ROW_HEIGHT

        # Data rows
        first_data_row = header_row + 1
        assignments = assign_styles(table)
        for row_index, row in enumerate(table.rows):
            row_number = first_data_row + row_index
            zebra = self.theme.zebra_striping and row_number % 2 == 0
            for column_index, value in enumerate(row):
                column = table.columns[column_index]
                cell = sheet.cell(row=row_number, column=column_index + 1, value=self._cell_value(value))
                cell.border = self.border
                cell.alignment = Alignment(
                    horizontal=column.alignment.value if column.alignment else None,
                    vertical="center",
                    wrap_text=column_index == 1,
                )
                if column.format and self._is_number(value):
                    cell.number_format = column.format.number_format

                tag = assignments.get((row_index, column_index))
                if tag is not None:
                    fill, font = self.tag_styles[StyleTag(tag).value]
                    cell.fill = fill
                    cell.font = font
                elif zebra:
                    cell.fill = self.zebra_fill

        last_row = first_data_row + table.row_count - 1
        if self.theme.auto_filter:
            sheet.auto_filter.ref = f"A{header_row}:{last_col}{last_row}"
        if self.theme.freeze_header:
            sheet.freeze_panes = f"A{first_data_row}"

        self._set_column_widths(sheet, table)

    def _set_column_widths(self, sheet: Worksheet, table: ReportTable):
        for column_index, column in enumerate(table.columns):
            width = column.width
            if width is None:
                longest = max(
                    [len(column.label)] + [len(str(row[column_index] or "")) for row in table.rows]
                )
                width = min(max(longest + 2, self.theme.min_column_width), self.theme.max_column_width)
            sheet.column_dimensions[get_column_letter(column_index + 1)].width = width

    @staticmethod
    def _is_number(value: Any) -> bool:
        return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)

    @staticmethod
    def _cell_value(value: Any) -> Any:
        if isinstance(value, Enum):
            value = value.value
        if value is None or value == "":
            return None
        if isinstance(value, datetime) and value.tzinfo is not None:
            # Excel has no timezone support
            return value.replace(tzinfo=None)
        if isinstance(value, _CELL_TYPES):
            return value
        return str(value)
