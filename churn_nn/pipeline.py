"""
Pipeline Module
===============

Runs the demo end to end:

    load -> descriptive charts
         -> encode -> train -> evaluate -> report
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

import pandas as pd
import plotly.graph_objects as go
from loguru import logger

from config import REPORTS_DIR, get_config
from churn_nn.data import DataLoader
from churn_nn.features import FeatureEncoder, Partition
from churn_nn.models import ChurnNetwork, ModelEvaluator, ModelTrainer
from churn_nn.visualization import (
    CONFUSION_MATRIX_CONTAINER,
    LOSS_CONTAINER,
    DescriptiveVisualizer,
    write_report,
)


@dataclass
class PipelineResult:
    """Everything a pipeline run produced."""

    data: pd.DataFrame
    partition: Partition
    network: ChurnNetwork
    metrics: Dict[str, float]
    figures: Dict[str, go.Figure]
    report_path: Optional[Path] = None
    model_path: Optional[Path] = None


def run_pipeline(
    config: Optional[dict] = None,
    data: Optional[pd.DataFrame] = None,
    url: Optional[str] = None,
    refresh: bool = False,
    epochs: Optional[int] = None,
    save_model: bool = False,
    save_confusion_png: bool = False,
    report_path: Optional[Path] = None
) -> PipelineResult:
    """
    Run loading, charting, encoding, training and evaluation in order.

    Args:
        config: Configuration dictionary
        data: Already parsed dataset. Skips the download when given
        url: Override for the dataset URL
        refresh: Download again even if a cached copy exists
        epochs: Override for the configured epoch count
        save_model: Persist the trained network
        save_confusion_png: Also save a static confusion matrix image
        report_path: Where to write the HTML report. Defaults to reports/

    Returns:
        PipelineResult
    """
    config = config or get_config()

    if data is None:
        data = DataLoader(config).load_data(url, force=refresh)

    figures = DescriptiveVisualizer(config).build_descriptive_figures(data)

    partition = FeatureEncoder(config).encode(data)

    trainer = ModelTrainer(config)
    network = trainer.train(partition.X_train, partition.y_train, epochs=epochs)
    figures[LOSS_CONTAINER] = trainer.plot_training_curves()

    evaluator = ModelEvaluator(config)
    metrics = evaluator.evaluate_model(network, partition.X_test, partition.y_test)
    figures[CONFUSION_MATRIX_CONTAINER] = evaluator.plot_confusion_matrix()
    logger.info(f"\nClassification report:\n{evaluator.get_classification_report()}")

    if save_confusion_png:
        evaluator.save_confusion_matrix_figure()

    if report_path is None:
        report_path = REPORTS_DIR / config.get("report", {}).get("filename", "churn_report.html")
    report_path = write_report(figures, report_path, metrics=metrics)

    model_path = trainer.save_model() if save_model else None

    return PipelineResult(
        data=data,
        partition=partition,
        network=network,
        metrics=metrics,
        figures=figures,
        report_path=report_path,
        model_path=model_path,
    )
