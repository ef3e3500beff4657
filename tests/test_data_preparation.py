"""Test suite for normalising raw provider records.

Tests verify that:
- The sample dataset loads with duplicates and broken entries dropped
- Nested collections (services, work hours, remarks) are parsed into value types
- Missing or malformed fields degrade to empty values instead of raising
"""
import pytest

from src.data.ingestion import ProviderDataset, load_provider_dataset
from src.data.models import OperationHour, Remark, Service, WorkHour
from src.data.preparation import (
    PROVIDER_COLUMNS,
    normalize_provider,
    parse_clock_minutes,
    parse_work_hours,
    prepare_provider_data,
)


def test_sample_dataset_summary(sample_document):
    provider_df, summary = prepare_provider_data(sample_document["data"], total=sample_document["total"])

    assert list(provider_df.columns) == list(PROVIDER_COLUMNS)
    assert list(provider_df["ID"]) == ["101", "102", "103", "104", "105"]
    assert summary.total == 7
    assert summary.loaded == 5
    assert summary.skipped == 1
    assert summary.duplicate_ids == ("101",)
    assert summary.missing_geo == 1
    assert summary.warnings


def test_first_occurrence_of_duplicate_id_wins(provider_df):
    assert provider_df.loc[provider_df["ID"] == "101", "Name"].item() == "Bệnh viện Bạch Mai"


def test_geo_is_flattened(provider_df):
    row = provider_df.iloc[0]
    assert row["Latitude"] == pytest.approx(21.0008)
    assert row["Longitude"] == pytest.approx(105.8412)
    missing = provider_df.loc[provider_df["ID"] == "105"].iloc[0]
    assert (missing["Latitude"], missing["Longitude"]) == (0.0, 0.0)


def test_nested_collections_are_parsed(provider_df):
    row = provider_df.iloc[0]
    assert row["Services"] == (Service(id=1, name="Cardiology", local_name="Tim mạch"),)
    assert [s.id for s in row["Applied Benefit Services"]] == [1, 2]
    assert row["Work Hours"] == (WorkHour(days=(0, 1, 2, 3, 4, 5, 6), operation_hours=(OperationHour(480, 1020),)),)
    assert row["Remarks"] == (
        Remark(type="NOTE", content="Mang theo thẻ bảo hiểm", english_content="Bring your insurance card"),
    )
    assert row["Phone Numbers"] == ("091-234-5678",)
    assert bool(row["Network Member"]) is True


def test_single_phone_string_becomes_tuple(provider_df):
    row = provider_df.loc[provider_df["ID"] == "105"].iloc[0]
    assert row["Phone Numbers"] == ("0283 822 1111",)


def test_minimal_record_tolerates_missing_fields():
    row = normalize_provider({"id": 7})

    assert row["ID"] == "7"
    assert row["Name"] == ""
    assert row["Services"] == ()
    assert row["Applied Benefit Services"] == ()
    assert row["Work Hours"] == ()
    assert row["Remarks"] == ()
    assert row["Phone Numbers"] == ()
    assert (row["Latitude"], row["Longitude"]) == (0.0, 0.0)
    assert row["Active"] is False


def test_malformed_values_degrade():
    row = normalize_provider(
        {
            "id": "x",
            "geo": {"latitude": "north", "longitude": 500},
            "services": [{"id": "abc", "name": "Lab"}, "junk"],
            "workHours": "always",
            "active": "yes",
        }
    )

    assert (row["Latitude"], row["Longitude"]) == (0.0, 0.0)
    assert row["Services"] == (Service(id=None, name="Lab"),)
    assert row["Work Hours"] == ()
    assert row["Active"] is True


def test_records_without_id_are_skipped():
    provider_df, summary = prepare_provider_data([{"name": "Anonymous"}, {"id": "1", "name": "Named"}])
    assert list(provider_df["ID"]) == ["1"]
    assert summary.skipped == 1
    assert summary.total == 2


def test_empty_dataset():
    provider_df, summary = prepare_provider_data([])
    assert provider_df.empty
    assert list(provider_df.columns) == list(PROVIDER_COLUMNS)
    assert summary.loaded == 0


@pytest.mark.parametrize(
    "value, expected",
    [
        ("1970-01-01T08:00:00Z", 480),
        ("2024-05-01T08:30:00+07:00", 510),
        ("17:45", 1065),
        ("not a time", None),
        ("", None),
        (None, None),
    ],
)
def test_parse_clock_minutes(value, expected):
    assert parse_clock_minutes(value) == expected


def test_work_hour_days_are_bounded_and_deduplicated():
    (block,) = parse_work_hours([{"days": [1, 1, 7, -1, "2"], "operationHours": []}])
    assert block.days == (1, 2)


def test_load_provider_dataset_from_path(sample_dataset_path):
    dataset = load_provider_dataset(sample_dataset_path)

    assert isinstance(dataset, ProviderDataset)
    assert len(dataset) == 5
    assert dataset.total == 7
    assert "loaded=5" in repr(dataset)


def test_load_provider_dataset_from_bare_list():
    dataset = load_provider_dataset(b'[{"id": 1, "name": "A"}, {"id": 2, "name": "B"}]')
    assert dataset.total == 2
    assert list(dataset.provider_df["Name"]) == ["A", "B"]
