"""Pytest configuration helpers.

Ensure the project root is on sys.path so tests can import the `src` package
when pytest is invoked from the repository root or an isolated test runner.
"""

import json
import sys
from pathlib import Path

import pytest
import streamlit as st


def pytest_configure():
    # Insert the repository root (parent of the tests directory) at the front
    repo_root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(repo_root))


HANOI_CENTER = (21.0285, 105.8542)


@pytest.fixture(autouse=True)
def empty_secrets(monkeypatch):
    """Run every test against an empty secrets store so defaults apply."""
    monkeypatch.setattr(st, "secrets", {})


@pytest.fixture
def sample_fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_dataset_path(sample_fixtures_dir):
    return sample_fixtures_dir / "sample_providers.json"


@pytest.fixture
def sample_document(sample_dataset_path):
    return json.loads(sample_dataset_path.read_text(encoding="utf-8"))


@pytest.fixture
def provider_df(sample_document):
    """Normalised DataFrame for the five unique sample providers."""
    from src.data.preparation import prepare_provider_data

    df, _ = prepare_provider_data(sample_document["data"], total=sample_document["total"])
    return df


@pytest.fixture
def hanoi_center():
    return HANOI_CENTER


@pytest.fixture
def clear_geocode_cache():
    from src.utils.geocoding import geocode_address

    geocode_address.clear()
    yield
    geocode_address.clear()
