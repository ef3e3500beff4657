"""
Data Ingestion Module - loads the provider dataset once and caches it.

The dataset is read-only configuration: it is decoded from the configured
JSON file, normalised into a DataFrame and kept in Streamlit's cache. Nothing
in the application writes back to it.
"""

import logging
from pathlib import Path
from typing import Any, Iterable, Optional, Tuple, Union

import pandas as pd
import streamlit as st

from src.data.io_utils import extract_records, read_json_document
from src.data.models import DatasetSummary
from src.data.preparation import prepare_provider_data

logger = logging.getLogger(__name__)


class ProviderDataset:
    """A loaded dataset: the provider DataFrame plus its declared total."""

    def __init__(self, provider_df: pd.DataFrame, summary: DatasetSummary, source: Optional[str] = None):
        self.provider_df = provider_df
        self.summary = summary
        self.source = source

    @property
    def total(self) -> int:
        return self.summary.total

    @classmethod
    def from_records(cls, records: Iterable[Any], total: Optional[int] = None, source: Optional[str] = None):
        provider_df, summary = prepare_provider_data(records, total=total)
        return cls(provider_df, summary, source=source)

    @classmethod
    def from_document(cls, document: Any, source: Optional[str] = None):
        records, total = extract_records(document)
        return cls.from_records(records, total=total, source=source)

    def __len__(self) -> int:
        return len(self.provider_df)

    def __repr__(self) -> str:
        return f"ProviderDataset(source={self.source!r}, loaded={len(self)}, total={self.total})"


def load_provider_dataset(source: Union[Path, str, bytes]) -> ProviderDataset:
    """Read and normalise a provider dataset.

    Args:
        source: Path to the JSON export, or its raw bytes

    Returns:
        ProviderDataset with the normalised DataFrame

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not a valid dataset document
    """
    label = "<bytes>" if isinstance(source, (bytes, bytearray)) else str(source)
    logger.info(f"Loading provider dataset from {label}")
    document = read_json_document(source)
    dataset = ProviderDataset.from_document(document, source=label)
    if dataset.summary.loaded < dataset.total:
        logger.warning(f"Dataset declares {dataset.total} providers but only {dataset.summary.loaded} were loaded")
    return dataset


@st.cache_data(ttl=3600, show_spinner=False)
def load_provider_data(path: str) -> Tuple[pd.DataFrame, int]:
    """Cached loader used by the app: returns (provider_df, total)."""
    dataset = load_provider_dataset(path)
    return dataset.provider_df, dataset.total
