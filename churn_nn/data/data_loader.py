"""
Data Loader Module
==================

Fetches the churn dataset, parses it into typed columns and validates it.
"""

import hashlib
from io import StringIO
from pathlib import Path
from typing import List, Optional, Union

import httpx
import pandas as pd
from loguru import logger

from config import RAW_DATA_DIR, ensure_dir, get_config

from .schemas import CustomerRecord, DataSchemaError


class DataLoader:
    """Load and validate the customer churn dataset."""

    def __init__(
        self,
        config: Optional[dict] = None,
        client: Optional[httpx.Client] = None,
        raw_data_path: Optional[Path] = None
    ):
        """
        Initialize DataLoader.

        Args:
            config: Configuration dictionary. If None, loads from config.yaml
            client: HTTP client used for downloads. A new one is created per fetch if None
            raw_data_path: Directory where downloaded files are cached
        """
        self.config = config or get_config()
        self.data_config = self.config.get("data", {})
        self.client = client
        self.raw_data_path = Path(raw_data_path) if raw_data_path else RAW_DATA_DIR

        self.target_col = self.data_config.get("target_column", "Churn")
        self.numerical_features = list(self.data_config.get("numerical", []))
        self.categorical_features = list(dict.fromkeys(self.data_config.get("categorical", [])))

    @property
    def required_columns(self) -> List[str]:
        """Columns every dataset must provide."""
        return self.numerical_features + self.categorical_features + [self.target_col]

    def cache_path(self, url: Optional[str] = None) -> Path:
        """
        Local file a URL is cached under.

        The configured dataset URL maps to the configured filename. Any other
        URL gets its own file keyed on a hash of the full URL, so two hosts
        serving the same basename never share a cache entry.

        Args:
            url: Source URL. Defaults to the configured dataset URL

        Returns:
            Path inside the raw data directory
        """
        configured_url = self.data_config.get("url")
        url = url or configured_url
        name = url.split("?", 1)[0].rstrip("/").rsplit("/", 1)[-1] or "dataset.csv"

        if url == configured_url:
            return self.raw_data_path / (self.data_config.get("filename") or name)

        digest = hashlib.sha1(url.encode("utf-8")).hexdigest()[:10]
        basename = Path(name)
        return self.raw_data_path / f"{basename.stem}-{digest}{basename.suffix or '.csv'}"

    def fetch_csv(self, url: Optional[str] = None, force: bool = False) -> Path:
        """
        Download the remote CSV into the raw data directory.

        Args:
            url: Source URL. Defaults to the configured dataset URL
            force: Download even if a cached copy exists

        Returns:
            Path to the local copy
        """
        url = url or self.data_config["url"]
        file_path = self.cache_path(url)

        if file_path.exists() and not force:
            logger.info(f"Using cached dataset {file_path}")
            return file_path

        logger.info(f"Downloading dataset from {url}")
        timeout = self.data_config.get("timeout", 30)

        if self.client is not None:
            response = self.client.get(url, timeout=timeout, follow_redirects=True)
        else:
            response = httpx.get(url, timeout=timeout, follow_redirects=True)

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"Download failed: {e}")
            raise

        ensure_dir(file_path.parent)
        file_path.write_text(response.text, encoding="utf-8")
        logger.info(f"Saved {len(response.content)} bytes to {file_path}")

        return file_path

    def load_data(self, url: Optional[str] = None, force: bool = False) -> pd.DataFrame:
        """Fetch and parse the dataset."""
        return self.parse_csv(self.fetch_csv(url, force=force))

    def parse_csv(self, source: Union[str, Path, StringIO]) -> pd.DataFrame:
        """
        Parse CSV data into a typed DataFrame.

        Args:
            source: File path or file-like object holding CSV text

        Returns:
            DataFrame with numeric columns coerced and string columns stripped
        """
        if isinstance(source, (str, Path)):
            file_path = Path(source)
            if not file_path.exists():
                logger.error(f"Data file not found: {file_path}")
                raise FileNotFoundError(f"Data file not found: {file_path}")
            logger.info(f"Parsing {file_path}")

        df = pd.read_csv(source, skip_blank_lines=True)
        df = df.dropna(how="all").reset_index(drop=True)

        self.check_schema(df)

        for col in df.columns:
            if pd.api.types.is_string_dtype(df[col]):
                df[col] = df[col].str.strip().replace("", pd.NA)

        for col in self.numerical_features:
            df[col] = pd.to_numeric(df[col], errors="coerce")
            n_missing = int(df[col].isna().sum())
            if n_missing > 0:
                logger.warning(f"{col}: {n_missing} missing or non-numeric values")

        logger.info(f"Loaded {len(df)} rows and {len(df.columns)} columns")
        return df

    def check_schema(self, df: pd.DataFrame) -> None:
        """Raise DataSchemaError if required columns are missing."""
        missing = [col for col in self.required_columns if col not in df.columns]
        if missing:
            logger.error(f"Dataset is missing columns: {missing}")
            raise DataSchemaError(f"Dataset is missing columns: {missing}")

    def to_records(self, df: pd.DataFrame) -> List[CustomerRecord]:
        """
        Convert rows into immutable CustomerRecord objects.

        Args:
            df: Parsed DataFrame

        Returns:
            List of records, one per row
        """
        rows = df.astype(object).where(df.notna(), None).to_dict(orient="records")
        return [CustomerRecord(**row) for row in rows]

    def validate_data(self, df: pd.DataFrame) -> dict:
        """
        Validate data quality.

        Args:
            df: DataFrame to validate

        Returns:
            Dictionary with validation results
        """
        validation_results = {
            "total_rows": len(df),
            "total_columns": len(df.columns),
            "missing_values": df.isnull().sum().to_dict(),
            "duplicates": int(df.duplicated().sum()),
            "dtypes": df.dtypes.astype(str).to_dict(),
        }

        if self.target_col in df.columns:
            validation_results["target_distribution"] = df[self.target_col].value_counts().to_dict()
            validation_results["target_balance"] = df[self.target_col].value_counts(normalize=True).to_dict()

        return validation_results
