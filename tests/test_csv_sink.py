import pytest

from report_engine.core.exceptions import BadRequestError
from report_engine.core.enums import ExportFormat
from report_engine.reports import get_report
from report_engine.sinks import CsvSink, ExcelSink, get_sink, get_supported_formats


def lines(content):
    return content.decode("utf-8").split("\n")


def test_csv_layout(settings, generated_at, sample_data):
    table = get_report("at_risk_users", settings).render(sample_data, generated_at)
    output = lines(CsvSink(settings=settings).render(table))

    assert output[0] == "AT-RISK USERS,,,,,,,"
    assert output[1] == "Learners at risk of dropping out | Generated: 15 Jan 2024 10:30,,,,,,,"
    assert output[2] == ",,,,,,,"
    assert output[3] == "Learner ID,Name,Email,Department,Days Inactive,Account Age (days),Risk Level,Action"
    assert output[4] == "5,Citra,citra@example.com,Ops,75,400,CRITICAL,Send Reminder"


def test_formatted_csv(settings, generated_at, sample_data):
    table = get_report("learner_progress", settings).render(sample_data, generated_at)
    output = lines(CsvSink(settings=settings, formatted=True).render(table))
    assert output[4] == "1,Ana,Sales,4,4,100.00%,88.33,On Track"
    assert output[5] == "2,Budi,N/A,3,1,33.33%,52.00,At Risk"


def test_tables_separated_by_blank_line(settings, generated_at):
    tables = [
        get_report("at_risk_users", settings).render({}, generated_at),
        get_report("module_performance", settings).render({}, generated_at),
    ]
    output = lines(CsvSink(settings=settings).render(tables))
    assert output[4] == ",,,,,,,"
    assert output[5] == ""
    assert output[6] == "MODULE PERFORMANCE,,,,,,,"


def test_get_sink():
    assert isinstance(get_sink("xlsx"), ExcelSink)
    assert isinstance(get_sink(ExportFormat.CSV), CsvSink)
    assert isinstance(get_sink("text/csv"), CsvSink)
    assert get_supported_formats() == ["csv", "xlsx"]

    with pytest.raises(BadRequestError) as exc_info:
        get_sink("pdf")
    assert exc_info.value.details["supported_formats"] == ["csv", "xlsx"]
