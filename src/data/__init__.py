"""Data loading package for the provider directory."""

from .ingestion import ProviderDataset, load_provider_data, load_provider_dataset
from .models import DatasetSummary, OperationHour, Remark, Service, WorkHour
from .preparation import PROVIDER_COLUMNS, prepare_provider_data

__all__ = [
    "DatasetSummary",
    "OperationHour",
    "PROVIDER_COLUMNS",
    "ProviderDataset",
    "Remark",
    "Service",
    "WorkHour",
    "load_provider_data",
    "load_provider_dataset",
    "prepare_provider_data",
]
