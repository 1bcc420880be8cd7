import pandas as pd

from report_engine.services.report_service import ReportService
from report_engine.utils.date_utils import parse_datetime
from .base import BaseCommand


class Command(BaseCommand):
    description = "Build a report and print it to the console"

    def add_arguments(self, parser):
        parser.add_argument('--report', '-r', required=True, help='Report type')
        parser.add_argument('--input', '-i', default='-', help='JSON input file (default: stdin)')
        parser.add_argument('--limit', type=int, default=50, help='Maximum rows to print')
        parser.add_argument('--generated-at', dest='generated_at', help='Timestamp for the metadata row')

    def handle(self, report, input='-', limit=50, generated_at=None, **kwargs):
        data = self.load_input(input)
        table = ReportService().build_report(report, data, parse_datetime(generated_at))

        for line in table.metadata_rows:
            if line:
                print(line)

        frame = pd.DataFrame([list(row) for row in table.rows[:limit]], columns=table.headers, dtype=object)
        print(frame.fillna("").to_string(index=False))

        if table.row_count > limit:
            self.print_warning(f"{table.row_count - limit} more row(s) not shown")
        if table.is_placeholder:
            self.print_warning("No data: placeholder row shown")
        return table
