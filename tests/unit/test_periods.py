from datetime import date, datetime

from boutique.reports.periods import (
    FilterPeriod, coerce_period, filter_by_period, is_in_period, parse_record_date, period_bounds
)

REFERENCE = datetime(2024, 6, 15, 10, 30)  # Saturday


def _records(*dates):
    return [{"id": str(i), "date": d} for i, d in enumerate(dates)]


def test_day_keeps_only_reference_day():
    records = _records("15/06/2024", "14/06/2024", "15/06/2023")
    kept = filter_by_period(records, "day", REFERENCE)
    assert [r["date"] for r in kept] == ["15/06/2024"]


def test_week_starts_on_sunday():
    assert period_bounds(FilterPeriod.WEEK, REFERENCE) == (date(2024, 6, 9), date(2024, 6, 15))
    # A Sunday is the first day of its own week
    assert period_bounds("week", date(2024, 6, 9)) == (date(2024, 6, 9), date(2024, 6, 15))

    records = _records("08/06/2024", "09/06/2024", "12/06/2024", "16/06/2024")
    kept = filter_by_period(records, "week", REFERENCE)
    assert [r["date"] for r in kept] == ["09/06/2024", "12/06/2024"]


def test_month_and_quarter():
    records = _records("01/06/2024", "30/06/2024", "31/05/2024", "01/04/2024", "01/07/2024", "01/06/2023")
    assert [r["date"] for r in filter_by_period(records, "month", REFERENCE)] == ["01/06/2024", "30/06/2024"]
    assert [r["date"] for r in filter_by_period(records, "quarter", REFERENCE)] == [
        "01/06/2024", "30/06/2024", "31/05/2024", "01/04/2024"
    ]


def test_quarter_bounds():
    assert period_bounds("quarter", date(2024, 1, 31)) == (date(2024, 1, 1), date(2024, 3, 31))
    assert period_bounds("quarter", date(2024, 12, 1)) == (date(2024, 10, 1), date(2024, 12, 31))


def test_unknown_period_keeps_everything():
    records = _records("01/01/2000", "garbage", None)
    assert filter_by_period(records, "year", REFERENCE) == records
    assert period_bounds("year", REFERENCE) is None
    assert coerce_period("year") is None


def test_malformed_dates_are_excluded():
    records = _records("15/06/2024", "2024-06-15", "", None, "31/02/2024")
    kept = filter_by_period(records, "month", REFERENCE)
    assert [r["id"] for r in kept] == ["0"]


def test_output_is_ordered_subset_and_input_untouched(june_sales):
    before = list(june_sales)
    kept = filter_by_period(june_sales, "month", REFERENCE)
    assert kept == before
    assert june_sales == before
    assert kept is not june_sales


def test_record_on_reference_day_is_in_day_period():
    assert is_in_period("15/06/2024", "day", REFERENCE)
    assert not is_in_period("16/06/2024", "day", REFERENCE)


def test_parse_record_date():
    assert parse_record_date(" 05/03/2024 ") == date(2024, 3, 5)
    assert parse_record_date(datetime(2024, 3, 5, 12)) == date(2024, 3, 5)
    assert parse_record_date("5 mars") is None
    assert parse_record_date(12) is None
