"""
Feature Encoder Module
======================

Turns parsed churn records into a numeric matrix and an ordered
train/test partition.

Layout of every encoded row::

    [numeric features (min-max scaled)] + [one-hot block per categorical feature]

Category order inside a block is the order of first appearance in the
full dataset, so train, test and later ``transform`` calls share one layout.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

import numpy as np
import pandas as pd
from loguru import logger
from sklearn.compose import ColumnTransformer
from sklearn.impute import SimpleImputer
from sklearn.pipeline import Pipeline
from sklearn.preprocessing import MinMaxScaler, OneHotEncoder

from config import get_config
from churn_nn.data.schemas import DataSchemaError

MISSING_STRATEGIES = ("category", "first")
SCALING_FITS = ("train", "all")


@dataclass
class Partition:
    """Ordered train/test split of the encoded matrix and one-hot labels."""

    X_train: np.ndarray
    X_test: np.ndarray
    y_train: np.ndarray
    y_test: np.ndarray
    feature_names: List[str] = field(default_factory=list)

    @property
    def n_train(self) -> int:
        return len(self.X_train)

    @property
    def n_test(self) -> int:
        return len(self.X_test)

    @property
    def n_features(self) -> int:
        return self.X_train.shape[1]


class FeatureEncoder:
    """One-hot encode, scale and split churn data."""

    def __init__(self, config: Optional[dict] = None):
        """
        Initialize FeatureEncoder.

        Args:
            config: Configuration dictionary
        """
        self.config = config or get_config()
        data_config = self.config.get("data", {})
        encoding_config = self.config.get("encoding", {})

        self.numerical_features = list(data_config.get("numerical", []))
        # Config lists may repeat a column; keep the first occurrence only
        self.categorical_features = list(dict.fromkeys(data_config.get("categorical", [])))
        self.target_col = data_config.get("target_column", "Churn")
        self.classes = list(data_config.get("classes", ["No", "Yes"]))
        self.test_size = data_config.get("test_size", 0.1)

        self.missing_strategy = encoding_config.get("missing_strategy", "category")
        self.missing_token = encoding_config.get("missing_token", "Missing")
        self.scaling_fit = encoding_config.get("scaling_fit", "train")

        if self.missing_strategy not in MISSING_STRATEGIES:
            raise ValueError(
                f"Unknown missing_strategy: {self.missing_strategy}. Available: {list(MISSING_STRATEGIES)}"
            )
        if self.scaling_fit not in SCALING_FITS:
            raise ValueError(
                f"Unknown scaling_fit: {self.scaling_fit}. Available: {list(SCALING_FITS)}"
            )
        if not 0 < self.test_size < 1:
            raise ValueError(f"test_size must be between 0 and 1, got {self.test_size}")

        self.categories: Dict[str, List] = {}
        self.preprocessor = None
        self.feature_names: List[str] = []

    def build_vocabulary(self, df: pd.DataFrame) -> Dict[str, List]:
        """
        Collect categories per categorical column in first-seen order.

        Args:
            df: Full dataset (train and test rows)

        Returns:
            Mapping of column name to ordered categories
        """
        self.categories = {}

        for col in self.categorical_features:
            values = df[col]
            categories = list(pd.unique(values[values.notna()]))

            # Under "category" every block ends with the missing token, seen or not
            if self.missing_strategy == "category":
                if self.missing_token not in categories:
                    categories.append(self.missing_token)
            elif values.isna().any() and not categories:
                categories.append(self.missing_token)

            self.categories[col] = categories
            logger.debug(f"{col}: {categories}")

        return self.categories

    def _fill_missing(self, df: pd.DataFrame) -> pd.DataFrame:
        """Replace missing categorical values according to the missing strategy."""
        df = df.copy()

        for col in self.categorical_features:
            n_missing = int(df[col].isna().sum())
            if n_missing == 0:
                continue

            if self.missing_strategy == "first":
                fill_value = self.categories[col][0]
                logger.warning(
                    f"{col}: {n_missing} missing values mapped onto existing category '{fill_value}'"
                )
            else:
                fill_value = self.missing_token
                logger.debug(f"{col}: {n_missing} missing values encoded as '{fill_value}'")

            df[col] = df[col].astype(object).where(df[col].notna(), fill_value)

        return df

    def create_preprocessing_pipeline(self) -> ColumnTransformer:
        """
        Create sklearn preprocessing pipeline.

        Returns:
            ColumnTransformer with a numeric and a categorical branch
        """
        numerical_pipeline = Pipeline([
            ("imputer", SimpleImputer(strategy="median", keep_empty_features=True)),
            ("scaler", MinMaxScaler(clip=True)),
        ])

        categorical_encoder = OneHotEncoder(
            categories=[self.categories[col] for col in self.categorical_features],
            handle_unknown="error",
            sparse_output=False,
            dtype=np.float32,
        )

        self.preprocessor = ColumnTransformer(
            transformers=[
                ("numerical", numerical_pipeline, self.numerical_features),
                ("categorical", categorical_encoder, self.categorical_features),
            ],
            remainder="drop"
        )

        return self.preprocessor

    def fit(self, df: pd.DataFrame, vocabulary_df: Optional[pd.DataFrame] = None) -> "FeatureEncoder":
        """
        Fit category vocabulary and scaler.

        Args:
            df: Rows the imputer and scaler are fitted on
            vocabulary_df: Rows categories are collected from. Defaults to df

        Returns:
            self
        """
        self.build_vocabulary(vocabulary_df if vocabulary_df is not None else df)
        self.create_preprocessing_pipeline()
        self.preprocessor.fit(self._fill_missing(df))
        self._extract_feature_names()

        logger.info(f"Encoder fitted on {len(df)} rows, {len(self.feature_names)} features")
        return self

    def transform(self, df: pd.DataFrame) -> np.ndarray:
        """
        Encode rows using the fitted layout.

        Args:
            df: Input DataFrame

        Returns:
            Float32 matrix with one row per input row
        """
        if self.preprocessor is None:
            raise ValueError("Encoder not fitted. Call fit or encode first.")

        if len(df) == 0:
            return np.empty((0, len(self.feature_names)), dtype=np.float32)

        return self.preprocessor.transform(self._fill_missing(df)).astype(np.float32)

    def encode_labels(self, df: pd.DataFrame) -> np.ndarray:
        """
        One-hot encode the target column.

        Args:
            df: Input DataFrame

        Returns:
            Matrix of shape (n_rows, n_classes)
        """
        indices = df[self.target_col].map({label: i for i, label in enumerate(self.classes)})

        if indices.isna().any():
            unknown = sorted(map(str, df.loc[indices.isna(), self.target_col].unique()))
            logger.error(f"Unknown {self.target_col} values: {unknown}")
            raise DataSchemaError(f"Unknown {self.target_col} values: {unknown}")

        return np.eye(len(self.classes), dtype=np.float32)[indices.astype(int).to_numpy()]

    def split_index(self, n_rows: int) -> int:
        """Row index where the test partition starts."""
        return int((1 - self.test_size) * n_rows)

    def encode(self, df: pd.DataFrame) -> Partition:
        """
        Encode the full dataset and split it into train/test partitions.

        Rows keep their order; the first ``split_index`` rows train, the
        rest test.

        Args:
            df: Parsed dataset

        Returns:
            Partition with encoded features and labels
        """
        split_idx = self.split_index(len(df))
        train_df = df.iloc[:split_idx]
        test_df = df.iloc[split_idx:]

        if self.scaling_fit == "all":
            logger.warning("Scaler fitted on train and test rows; test statistics leak into training")
            fit_df = df
        else:
            fit_df = train_df

        self.fit(fit_df, vocabulary_df=df)

        y = self.encode_labels(df)
        partition = Partition(
            X_train=self.transform(train_df),
            X_test=self.transform(test_df),
            y_train=y[:split_idx],
            y_test=y[split_idx:],
            feature_names=list(self.feature_names),
        )

        logger.info(f"Train set: {partition.n_train} samples")
        logger.info(f"Test set: {partition.n_test} samples")
        return partition

    def _extract_feature_names(self):
        """Extract feature names after fitting."""
        self.feature_names = list(self.numerical_features)

        for col in self.categorical_features:
            self.feature_names.extend(f"{col}={category}" for category in self.categories[col])

    def get_feature_names(self) -> List[str]:
        """Get names of all features after transformation."""
        return self.feature_names

    def get_encoding_summary(self) -> Dict:
        """
        Get summary of encoding steps applied.

        Returns:
            Dictionary with encoding summary
        """
        return {
            "numerical_features": self.numerical_features,
            "categorical_features": self.categorical_features,
            "categories": self.categories,
            "missing_strategy": self.missing_strategy,
            "scaling_fit": self.scaling_fit,
            "total_features": len(self.feature_names),
        }
