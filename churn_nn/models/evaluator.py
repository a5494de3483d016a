"""
Model Evaluator Module
======================

Test-set metrics and confusion matrix for the churn network.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import matplotlib.pyplot as plt
import numpy as np
import plotly.graph_objects as go
import seaborn as sns
from loguru import logger
from sklearn.metrics import classification_report, confusion_matrix

from config import FIGURES_DIR, ensure_dir, get_config


class ModelEvaluator:
    """Evaluate a trained classifier on the held-out partition."""

    def __init__(self, config: Optional[dict] = None):
        """
        Initialize ModelEvaluator.

        Args:
            config: Configuration dictionary
        """
        self.config = config or get_config()
        self.eval_config = self.config.get("evaluation", {})
        self.batch_size = self.eval_config.get("batch_size", 32)
        self.tick_labels = list(self.eval_config.get("tick_labels", ["Retained", "Churned"]))
        self.evaluation_results = {}

    @property
    def n_classes(self) -> int:
        return len(self.tick_labels)

    def predict_labels(
        self,
        model: Any,
        X: np.ndarray,
        y_true: np.ndarray
    ) -> Tuple[np.ndarray, np.ndarray]:
        """
        Derive class indices from probabilities and one-hot labels.

        Returns:
            Tuple of (true indices, predicted indices)
        """
        probabilities = np.asarray(model.predict(X, verbose=0))
        return np.asarray(y_true).argmax(axis=-1), probabilities.argmax(axis=-1)

    def get_confusion_matrix(self, labels: np.ndarray, predictions: np.ndarray) -> np.ndarray:
        """
        Confusion matrix with rows = actual, columns = predicted.

        Always ``n_classes x n_classes`` even if a class never occurs.
        """
        return confusion_matrix(labels, predictions, labels=list(range(self.n_classes)))

    def evaluate_model(
        self,
        model: Any,
        X_test: np.ndarray,
        y_test: np.ndarray,
        model_name: str = "churn_nn"
    ) -> Dict[str, float]:
        """
        Evaluate the model in test mode.

        Args:
            model: Trained model exposing ``evaluate`` and ``predict``
            X_test: Encoded test features
            y_test: One-hot test labels
            model_name: Key under which results are stored

        Returns:
            Dictionary with loss and accuracy
        """
        loss, accuracy = model.evaluate(X_test, y_test, batch_size=self.batch_size, verbose=0)
        labels, predictions = self.predict_labels(model, X_test, y_test)
        cm = self.get_confusion_matrix(labels, predictions)

        metrics = {"loss": float(loss), "accuracy": float(accuracy)}

        self.evaluation_results[model_name] = {
            "metrics": metrics,
            "y_true": labels,
            "y_pred": predictions,
            "confusion_matrix": cm,
        }

        logger.info(f"{model_name} - Test loss: {metrics['loss']:.4f}, Test accuracy: {metrics['accuracy']:.4f}")
        logger.debug(f"Confusion matrix:\n{cm}")

        return metrics

    def _results(self, model_name: str) -> dict:
        if model_name not in self.evaluation_results:
            raise ValueError(f"No evaluation results for {model_name}. Call evaluate_model first.")
        return self.evaluation_results[model_name]

    def get_classification_report(self, model_name: str = "churn_nn") -> str:
        """Classification report for an evaluated model."""
        results = self._results(model_name)
        return classification_report(
            results["y_true"],
            results["y_pred"],
            labels=list(range(self.n_classes)),
            target_names=self.tick_labels,
            zero_division=0,
        )

    def plot_confusion_matrix(self, model_name: str = "churn_nn") -> go.Figure:
        """Interactive confusion matrix heatmap."""
        cm = self._results(model_name)["confusion_matrix"]

        fig = go.Figure(go.Heatmap(
            z=cm,
            x=self.tick_labels,
            y=self.tick_labels,
            text=cm,
            texttemplate="%{text}",
            colorscale="Blues",
        ))
        fig.update_layout(
            title="Confusion Matrix",
            xaxis=dict(title="Predicted"),
            yaxis=dict(title="Actual", autorange="reversed"),
        )
        return fig

    def save_confusion_matrix_figure(
        self,
        model_name: str = "churn_nn",
        filepath: Optional[Path] = None,
        figsize: Tuple[int, int] = (8, 6)
    ) -> Path:
        """
        Save a static confusion matrix heatmap.

        Args:
            model_name: Name of evaluated model
            filepath: Output path. Defaults to the figures directory
            figsize: Figure size

        Returns:
            Path to the saved image
        """
        cm = self._results(model_name)["confusion_matrix"]

        fig, ax = plt.subplots(figsize=figsize)
        sns.heatmap(
            cm, annot=True, fmt="d", cmap="Blues",
            xticklabels=self.tick_labels,
            yticklabels=self.tick_labels,
            ax=ax
        )
        ax.set_title(f"{model_name} - Confusion Matrix")
        ax.set_xlabel("Predicted")
        ax.set_ylabel("Actual")
        plt.tight_layout()

        if filepath is None:
            filepath = FIGURES_DIR / f"confusion_matrix_{model_name.lower().replace(' ', '_')}.png"

        filepath = Path(filepath)
        ensure_dir(filepath.parent)
        fig.savefig(filepath, dpi=150, bbox_inches="tight")
        plt.close(fig)

        logger.info(f"Saved confusion matrix plot to {filepath}")
        return filepath

    def get_evaluation_summary(self) -> Dict[str, Dict[str, float]]:
        """Metrics of every evaluated model."""
        return {name: results["metrics"] for name, results in self.evaluation_results.items()}
