"""Charts and report rendering."""

from .charts import (
    CHURN_CONTAINER,
    CONFUSION_MATRIX_CONTAINER,
    LOSS_CONTAINER,
    MONTHLY_CHARGES_CONTAINER,
    SENIOR_CHURN_CONTAINER,
    SEX_CHURN_CONTAINER,
    TENURE_CONTAINER,
    TOTAL_CHARGES_CONTAINER,
    DescriptiveVisualizer,
)
from .report import render_report, write_report

__all__ = [
    "CHURN_CONTAINER",
    "CONFUSION_MATRIX_CONTAINER",
    "LOSS_CONTAINER",
    "MONTHLY_CHARGES_CONTAINER",
    "SENIOR_CHURN_CONTAINER",
    "SEX_CHURN_CONTAINER",
    "TENURE_CONTAINER",
    "TOTAL_CHARGES_CONTAINER",
    "DescriptiveVisualizer",
    "render_report",
    "write_report",
]
