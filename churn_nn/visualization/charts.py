"""
Descriptive Charts Module
=========================

Aggregates the raw dataset and renders descriptive Plotly figures.
"""

from typing import Dict, Optional, Tuple

import pandas as pd
import plotly.graph_objects as go
from loguru import logger

from config import get_config

CHURNED_COLOR = "mediumvioletred"
RETAINED_COLOR = "dodgerblue"

# Container ids of the report page, in render order
CHURN_CONTAINER = "churn-cont"
SEX_CHURN_CONTAINER = "sex-churn-cont"
SENIOR_CHURN_CONTAINER = "senior-churn-cont"
TENURE_CONTAINER = "tenure-cont"
MONTHLY_CHARGES_CONTAINER = "monthly-charges-cont"
TOTAL_CHARGES_CONTAINER = "total-charges-cont"
LOSS_CONTAINER = "loss-cont"
CONFUSION_MATRIX_CONTAINER = "confusion-matrix"

HISTOGRAMS = {
    TENURE_CONTAINER: ("tenure", "Tenure duration", "Tenure (months)"),
    MONTHLY_CHARGES_CONTAINER: ("MonthlyCharges", "Amount charged monthly", "Amount (USD)"),
    TOTAL_CHARGES_CONTAINER: ("TotalCharges", "Total amount charged", "Amount (USD)"),
}


class DescriptiveVisualizer:
    """Build descriptive charts of churned vs retained customers."""

    def __init__(self, config: Optional[dict] = None):
        """
        Initialize DescriptiveVisualizer.

        Args:
            config: Configuration dictionary
        """
        self.config = config or get_config()
        data_config = self.config.get("data", {})
        self.target_col = data_config.get("target_column", "Churn")
        self.positive_label = data_config.get("positive_label", "Yes")

    def split_by_churn(self, df: pd.DataFrame) -> Tuple[pd.DataFrame, pd.DataFrame]:
        """Return (churned, retained) rows."""
        mask = df[self.target_col] == self.positive_label
        return df[mask], df[~mask]

    def churn_counts(self, df: pd.DataFrame) -> Dict[str, int]:
        """Count churned and retained customers."""
        churned, retained = self.split_by_churn(df)
        return {"Churned": len(churned), "Retained": len(retained)}

    def group_counts(
        self,
        df: pd.DataFrame,
        column: str,
        positive
    ) -> Dict[str, Tuple[int, int]]:
        """
        Count rows matching ``positive`` in ``column`` per churn status.

        Args:
            df: Input DataFrame
            column: Column to partition on
            positive: Value counted as the first group

        Returns:
            {"Churned": (matching, other), "Retained": (matching, other)}
        """
        churned, retained = self.split_by_churn(df)
        counts = {}
        for name, part in (("Churned", churned), ("Retained", retained)):
            matching = int((part[column] == positive).sum())
            counts[name] = (matching, len(part) - matching)
        return counts

    def plot_churn_pie(self, df: pd.DataFrame) -> go.Figure:
        """Pie chart of churned vs retained customers."""
        counts = self.churn_counts(df)

        fig = go.Figure(go.Pie(
            labels=list(counts.keys()),
            values=list(counts.values()),
            opacity=0.6,
            marker=dict(colors=[CHURNED_COLOR, RETAINED_COLOR]),
        ))
        fig.update_layout(title="Churned vs Retained customers")
        return fig

    def plot_group_bars(
        self,
        df: pd.DataFrame,
        column: str,
        positive,
        group_labels: Tuple[str, str],
        title: str
    ) -> go.Figure:
        """
        Grouped bar chart of a binary split per churn status.

        Args:
            df: Input DataFrame
            column: Column to partition on
            positive: Value counted as the first group
            group_labels: X axis labels for (matching, other)
            title: Chart title

        Returns:
            Plotly figure
        """
        counts = self.group_counts(df, column, positive)

        fig = go.Figure()
        for name, color in (("Churned", CHURNED_COLOR), ("Retained", RETAINED_COLOR)):
            fig.add_trace(go.Bar(
                x=list(group_labels),
                y=list(counts[name]),
                name=name,
                opacity=0.6,
                marker=dict(color=color),
            ))
        fig.update_layout(barmode="group", title=title)
        return fig

    def plot_histogram(
        self,
        df: pd.DataFrame,
        column: str,
        title: str,
        x_label: str
    ) -> go.Figure:
        """Overlaid histograms of a numeric column for churned and retained customers."""
        churned, retained = self.split_by_churn(df)

        fig = go.Figure()
        for name, part, color in (
            ("Churned", churned, CHURNED_COLOR),
            ("Retained", retained, RETAINED_COLOR),
        ):
            fig.add_trace(go.Histogram(
                x=part[column].dropna(),
                name=name,
                opacity=0.35,
                marker=dict(color=color),
            ))
        fig.update_layout(
            barmode="overlay",
            title=title,
            xaxis=dict(title=x_label),
            yaxis=dict(title="Count"),
        )
        return fig

    def build_descriptive_figures(self, df: pd.DataFrame) -> Dict[str, go.Figure]:
        """
        Build every descriptive chart.

        Args:
            df: Parsed dataset

        Returns:
            Mapping of report container id to figure
        """
        figures = {
            CHURN_CONTAINER: self.plot_churn_pie(df),
            SEX_CHURN_CONTAINER: self.plot_group_bars(
                df, "gender", "Male", ("Male", "Female"), "Sex vs Churn Status"
            ),
            SENIOR_CHURN_CONTAINER: self.plot_group_bars(
                df, "SeniorCitizen", 1, ("Senior", "Non senior"), "Senior vs Churn Status"
            ),
        }

        for container_id, (column, title, x_label) in HISTOGRAMS.items():
            figures[container_id] = self.plot_histogram(df, column, title, x_label)

        logger.info(f"Built {len(figures)} descriptive charts")
        return figures
