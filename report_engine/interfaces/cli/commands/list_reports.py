from report_engine.sinks import get_supported_formats
from report_engine.services.report_service import ReportService
from .base import BaseCommand


class Command(BaseCommand):
    description = "List available report types"

    def add_arguments(self, parser):
        parser.add_argument('--columns', action='store_true', help='Show column labels of each report')

    def handle(self, columns=False, **kwargs):
        reports = ReportService().list_reports()

        print(f"{'Report type':<24} {'Sheet':<28} Columns")
        print("=" * 64)
        for report in reports:
            print(f"{report['report_type']:<24} {report['sheet_name']:<28} {len(report['columns'])}")
            if columns:
                for label in report['columns']:
                    print(f"    - {label}")

        print()
        self.print_info(f"Export formats: {', '.join(get_supported_formats())}")
        return reports
