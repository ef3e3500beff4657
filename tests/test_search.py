"""Tests for free-text provider search."""
import pandas as pd

from src.utils.search import digits_only, search_providers


def _ids(df: pd.DataFrame) -> list:
    return list(df["ID"])


def test_empty_query_returns_every_provider_in_order(provider_df):
    for query in ("", None):
        result = search_providers(provider_df, query)
        assert _ids(result) == _ids(provider_df)
        assert result is not provider_df


def test_matches_names_case_insensitively(provider_df):
    assert _ids(search_providers(provider_df, "bach mai")) == ["101"]
    assert _ids(search_providers(provider_df, "BỆNH VIỆN")) == ["101", "103"]


def test_matches_english_city(provider_df):
    assert _ids(search_providers(provider_df, "HANOI")) == ["101", "102"]


def test_matches_category_and_english_names(provider_df):
    assert _ids(search_providers(provider_df, "hospital")) == ["101", "103", "104"]


def test_phone_digits_ignore_formatting(provider_df):
    """"0912" is a contiguous run of the digits in "091-234-5678"."""
    assert _ids(search_providers(provider_df, "0912")) == ["101"]
    assert _ids(search_providers(provider_df, "3825 1234")) == ["102"]


def test_phone_digits_must_be_contiguous(provider_df):
    assert search_providers(provider_df, "0915").empty


def test_matches_service_names_across_both_collections(provider_df):
    # "Nha khoa" is only an applied benefit service for 101
    assert _ids(search_providers(provider_df, "nha khoa")) == ["101", "105"]
    assert _ids(search_providers(provider_df, "cardiology")) == ["101", "103"]


def test_no_match(provider_df):
    result = search_providers(provider_df, "veterinary")
    assert result.empty
    assert list(result.columns) == list(provider_df.columns)


def test_digits_only():
    assert digits_only("+84 (24) 3825-1234") == "842438251234"
    assert digits_only("") == ""
    assert digits_only(None) == ""
