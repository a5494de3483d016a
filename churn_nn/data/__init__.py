"""Data module for loading and validating the churn dataset."""

from .data_loader import DataLoader
from .schemas import CustomerRecord, DataSchemaError

__all__ = ["DataLoader", "CustomerRecord", "DataSchemaError"]
