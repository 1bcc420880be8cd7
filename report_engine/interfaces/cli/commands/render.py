from report_engine.services.report_service import ReportService
from report_engine.utils.date_utils import parse_datetime
from .base import BaseCommand


class Command(BaseCommand):
    description = "Render one or more reports to an xlsx or csv file"

    def add_arguments(self, parser):
        parser.add_argument(
            '--report', '-r',
            dest='reports',
            action='append',
            required=True,
            help='Report type; repeat for a multi-sheet workbook',
        )
        parser.add_argument('--input', '-i', default='-', help='JSON input file (default: stdin)')
        parser.add_argument('--output', '-o', help='Output directory (default: EXPORT_OUTPUT_DIR)')
        parser.add_argument('--format', '-f', dest='export_format', help='xlsx or csv')
        parser.add_argument('--formatted', action='store_true', help='CSV only: write display strings')
        parser.add_argument('--generated-at', dest='generated_at', help='Timestamp for the metadata rows')

    def handle(self, reports, input='-', output=None, export_format=None, formatted=False,
               generated_at=None, **kwargs):
        data = self.load_input(input)
        service = ReportService()

        options = {"formatted": True} if formatted else {}
        result = service.export_workbook(reports, data, export_format, parse_datetime(generated_at), **options)
        path = service.save_export(result, output)

        for table in result.tables:
            suffix = " (placeholder)" if table.is_placeholder else ""
            self.print_info(f"{table.sheet_name}: {table.row_count} row(s){suffix}")
        self.print_success(f"Wrote {path} ({result.size} bytes)")
        return path
