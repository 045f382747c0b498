"""Tests for loading and parsing the two CSV sources."""
import pytest
import requests

from nutrition_core import data
from nutrition_core.data import (
    fetch_text,
    load_dashboard_state,
    load_sources,
    parse_meal_records,
    parse_nutrition_records,
    parse_table,
)
from nutrition_core.errors import DataUnavailableError, ParseFailure, ResourceUnavailable
from nutrition_core.models import MealRecord, NutritionRecord
from nutrition_core.schema import MEAL_COVERAGE
from nutrition_core.state import LoadStatus


def test_parse_meal_records_in_source_order(meal_csv):
    records = parse_meal_records(meal_csv)

    assert records[0] == MealRecord("Bihar", "Patna", 60.0)
    assert [r.sub_region for r in records] == ["Patna", "Gaya", "Wayanad", "Idukki", "Koraput"]
    assert all(isinstance(r.meal_coverage_percent, float) for r in records)


def test_parse_nutrition_records(nutrition_csv):
    records = parse_nutrition_records(nutrition_csv)

    assert len(records) == 4
    assert records[2] == NutritionRecord("Kerala", "Wayanad", 25.5, 20.5)


def test_text_columns_are_not_coerced():
    records = parse_meal_records("State,District,Meal_Coverage_Percent\n2021,007,50\n")

    assert records[0].region == "2021"
    assert records[0].sub_region == "007"


def test_text_columns_are_kept_verbatim():
    records = parse_meal_records("State,District,Meal_Coverage_Percent\nBihar, Gaya ,50\n")

    assert records[0].sub_region == " Gaya "


def test_blank_rows_are_skipped():
    text = "State,District,Meal_Coverage_Percent\n\nBihar,Patna,60\n,,\n\nBihar,Gaya,80\n"

    records = parse_meal_records(text)

    assert [r.sub_region for r in records] == ["Patna", "Gaya"]


def test_out_of_range_values_pass_through():
    records = parse_meal_records("State,District,Meal_Coverage_Percent\nBihar,Patna,112.5\nBihar,Gaya,-3\n")

    assert [r.meal_coverage_percent for r in records] == [112.5, -3.0]


def test_extra_columns_are_ignored():
    text = "Year,State,District,Meal_Coverage_Percent,Notes\n2022,Bihar,Patna,60,ok\n"

    assert parse_meal_records(text) == (MealRecord("Bihar", "Patna", 60.0),)


def test_header_only_gives_no_records():
    assert parse_meal_records("State,District,Meal_Coverage_Percent\n") == ()


def test_empty_text_gives_no_records():
    assert parse_nutrition_records("") == ()
    assert list(parse_table("  \n", MEAL_COVERAGE).columns) == ["region", "sub_region", "meal_coverage_percent"]


def test_missing_column_fails():
    with pytest.raises(ParseFailure) as exc_info:
        parse_meal_records("State,District\nBihar,Patna\n", source="meal.csv")

    assert "Meal_Coverage_Percent" in exc_info.value.message
    assert exc_info.value.details["source"] == "meal.csv"


def test_non_numeric_value_fails_fast():
    text = "State,District,Meal_Coverage_Percent\nBihar,Patna,60\nBihar,Gaya,n/a\n"

    with pytest.raises(ParseFailure) as exc_info:
        parse_meal_records(text)

    assert exc_info.value.details["column"] == "Meal_Coverage_Percent"
    assert exc_info.value.details["row"] == 2
    assert exc_info.value.status_code == 503


def test_blank_numeric_value_fails():
    text = "State,District,Stunting_Rate_Percent,Underweight_Rate_Percent\nBihar,Patna,,30\n"

    with pytest.raises(ParseFailure) as exc_info:
        parse_nutrition_records(text)

    assert exc_info.value.details["column"] == "Stunting_Rate_Percent"


def test_ragged_row_fails():
    with pytest.raises(ParseFailure):
        parse_meal_records("State,District,Meal_Coverage_Percent\nBihar,Patna,60\nBihar,Gaya,80,1\n")


def test_fetch_text_reads_local_file(tmp_path):
    path = tmp_path / "x.csv"
    path.write_bytes("\ufeffState,District\n".encode("utf-8"))

    assert fetch_text(path) == "State,District\n"


def test_fetch_text_missing_file(tmp_path):
    with pytest.raises(ResourceUnavailable) as exc_info:
        fetch_text(tmp_path / "missing.csv")

    assert exc_info.value.details["location"].endswith("missing.csv")


class _FakeResponse:
    def __init__(self, text, status_code=200):
        self.text = text
        self.status_code = status_code
        self.encoding = None

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Client Error")


def test_fetch_text_over_http(monkeypatch, meal_csv):
    calls = []

    def fake_get(url, timeout):
        calls.append((url, timeout))
        return _FakeResponse(meal_csv)

    monkeypatch.setattr(data.requests, "get", fake_get)

    assert fetch_text("https://example.org/data/meal.csv") == meal_csv
    assert calls == [("https://example.org/data/meal.csv", data.HTTP_TIMEOUT)]


def test_fetch_text_http_error(monkeypatch):
    monkeypatch.setattr(data.requests, "get", lambda url, timeout: _FakeResponse("", status_code=404))

    with pytest.raises(ResourceUnavailable):
        fetch_text("http://example.org/missing.csv")


def test_fetch_text_connection_error(monkeypatch):
    def fake_get(url, timeout):
        raise requests.ConnectionError("connection refused")

    monkeypatch.setattr(data.requests, "get", fake_get)

    with pytest.raises(ResourceUnavailable) as exc_info:
        fetch_text("http://example.org/meal.csv")
    assert "connection refused" in exc_info.value.message


def test_load_sources(source_files):
    meals, nutrition = load_sources(*source_files)

    assert len(meals) == 5
    assert len(nutrition) == 4


def test_load_sources_fails_as_a_whole(source_files, tmp_path):
    meal_path, _ = source_files

    with pytest.raises(DataUnavailableError):
        load_sources(meal_path, tmp_path / "missing.csv")


def test_load_dashboard_state(source_files):
    state = load_dashboard_state(*source_files)

    assert state.status is LoadStatus.READY
    assert state.regions == ["Bihar", "Kerala"]
    assert state.selected_region == "Bihar"
    assert state.report.empty_regions == ("Odisha",)
    assert state.report.dropped_meal_rows == 2

    kerala = state.summary_for("Kerala")
    assert [d.sub_region for d in kerala.sub_regions] == ["Wayanad"]
    assert kerala.avg_stunting_rate == 25.5


def test_load_dashboard_state_unavailable(tmp_path):
    state = load_dashboard_state(tmp_path / "a.csv", tmp_path / "b.csv")

    assert state.status is LoadStatus.UNAVAILABLE
    assert not state.is_ready
    assert state.summaries == ()
    assert "a.csv" in state.error


def test_bundled_data_loads():
    state = load_dashboard_state()

    assert state.is_ready
    assert state.regions[0] == "Bihar"
    assert "Mumbai Suburban" not in [d.sub_region for d in state.summary_for("Maharashtra").sub_regions]
