"""
Model Trainer Module
====================

Trains the churn network with a fixed recipe and reports per-epoch
loss/accuracy through loguru and, optionally, MLflow.
"""

from pathlib import Path
from typing import Dict, List, Optional, Sequence

import mlflow
import numpy as np
import plotly.graph_objects as go
from loguru import logger
from plotly.subplots import make_subplots
from tensorflow import keras

from config import MLFLOW_DIR, MODELS_DIR, ensure_dir, get_config
from churn_nn.utils import get_timestamp

from .network import ChurnNetwork

TRACKED_METRICS = ("loss", "val_loss", "accuracy", "val_accuracy")


class EpochLogger(keras.callbacks.Callback):
    """Log tracked metrics at the end of every epoch."""

    def __init__(self, metrics: Sequence[str] = TRACKED_METRICS, log_to_mlflow: bool = False):
        super().__init__()
        self.metrics = tuple(metrics)
        self.log_to_mlflow = log_to_mlflow
        self.epochs: List[Dict[str, float]] = []

    def on_epoch_end(self, epoch, logs=None):
        logs = logs or {}
        values = {name: float(logs[name]) for name in self.metrics if name in logs}
        self.epochs.append(values)

        formatted = ", ".join(f"{name}={value:.4f}" for name, value in values.items())
        logger.info(f"Epoch {epoch + 1}: {formatted}")

        if self.log_to_mlflow:
            mlflow.log_metrics(values, step=epoch)


class ModelTrainer:
    """Train the churn network."""

    def __init__(self, config: Optional[dict] = None):
        """
        Initialize ModelTrainer.

        Args:
            config: Configuration dictionary
        """
        self.config = config or get_config()
        self.training_config = self.config.get("training", {})
        self.mlflow_config = self.config.get("mlflow", {})
        self.n_classes = len(self.config.get("data", {}).get("classes", ["No", "Yes"]))

        self.network: Optional[ChurnNetwork] = None
        self.history: Dict[str, List[float]] = {}

        self.mlflow_enabled = self.mlflow_config.get("enabled", False)
        if self.mlflow_enabled:
            self._setup_mlflow()

    def _setup_mlflow(self):
        """Setup MLflow tracking."""
        tracking_uri = self.mlflow_config.get("tracking_uri", "mlflow_runs")
        mlflow_path = ensure_dir(MLFLOW_DIR / tracking_uri)

        mlflow.set_tracking_uri(f"file://{mlflow_path}")
        experiment_name = self.mlflow_config.get("experiment_name", "churn_nn")

        # Create experiment if it doesn't exist
        experiment = mlflow.get_experiment_by_name(experiment_name)
        if experiment is None:
            mlflow.create_experiment(experiment_name)
        mlflow.set_experiment(experiment_name)

        logger.info(f"MLflow tracking URI: {mlflow_path}")
        logger.info(f"MLflow experiment: {experiment_name}")

    def get_params(self, epochs: Optional[int] = None) -> dict:
        """Training hyperparameters, with config defaults applied."""
        return {
            "hidden_units": list(self.training_config.get("hidden_units", [32, 64])),
            "learning_rate": self.training_config.get("learning_rate", 0.001),
            "epochs": epochs if epochs is not None else self.training_config.get("epochs", 32),
            "batch_size": self.training_config.get("batch_size", 32),
            "validation_split": self.training_config.get("validation_split", 0.1),
            "shuffle": self.training_config.get("shuffle", True),
            "seed": self.training_config.get("seed", 42),
        }

    def build_model(self, input_dim: int) -> ChurnNetwork:
        """Create an untrained network for ``input_dim`` features."""
        params = self.get_params()
        return ChurnNetwork(
            input_dim=input_dim,
            hidden_units=params["hidden_units"],
            n_classes=self.n_classes,
            learning_rate=params["learning_rate"],
        )

    def train(
        self,
        X_train: np.ndarray,
        y_train: np.ndarray,
        epochs: Optional[int] = None
    ) -> ChurnNetwork:
        """
        Train a fresh network.

        Args:
            X_train: Encoded training features
            y_train: One-hot training labels
            epochs: Override for the configured epoch count

        Returns:
            Trained network
        """
        params = self.get_params(epochs)
        if params["epochs"] < 1:
            logger.error(f"Invalid epoch count: {params['epochs']}")
            raise ValueError(f"epochs must be at least 1, got {params['epochs']}")

        if params["seed"] is not None:
            keras.utils.set_random_seed(params["seed"])

        self.network = self.build_model(X_train.shape[1])
        callback = EpochLogger(log_to_mlflow=self.mlflow_enabled)

        logger.info(
            f"Training on {len(X_train)} samples: {params['epochs']} epochs, "
            f"batch size {params['batch_size']}"
        )

        fit_kwargs = dict(
            batch_size=params["batch_size"],
            epochs=params["epochs"],
            shuffle=params["shuffle"],
            validation_split=params["validation_split"],
            callbacks=[callback],
            verbose=0,
        )

        if self.mlflow_enabled:
            with mlflow.start_run(run_name=f"churn_nn_{get_timestamp()}"):
                mlflow.log_params(params)
                history = self.network.fit(X_train, y_train, **fit_kwargs)
        else:
            history = self.network.fit(X_train, y_train, **fit_kwargs)

        self.history = {name: [float(v) for v in values] for name, values in history.history.items()}
        logger.info(f"Training finished: loss={self.history['loss'][-1]:.4f}")

        return self.network

    def plot_training_curves(self, history: Optional[Dict[str, List[float]]] = None) -> go.Figure:
        """
        Plot loss and accuracy per epoch.

        Args:
            history: Keras history dictionary. Defaults to the last training run

        Returns:
            Plotly figure with a loss and an accuracy panel
        """
        history = history if history is not None else self.history
        if not history:
            raise ValueError("No training history. Call train first.")

        fig = make_subplots(rows=1, cols=2, subplot_titles=("Loss", "Accuracy"))

        for col, names in ((1, ("loss", "val_loss")), (2, ("accuracy", "val_accuracy"))):
            for name in names:
                if name not in history:
                    continue
                values = history[name]
                fig.add_trace(
                    go.Scatter(x=list(range(1, len(values) + 1)), y=values, mode="lines", name=name),
                    row=1, col=col
                )
            fig.update_xaxes(title_text="Epoch", row=1, col=col)

        fig.update_layout(title="Training curves")
        return fig

    def save_model(self, filepath: Optional[Path] = None) -> Path:
        """
        Save the trained network to disk.

        Args:
            filepath: Optional custom filepath

        Returns:
            Path to saved model
        """
        if self.network is None:
            raise ValueError("No trained model. Call train first.")

        if filepath is None:
            filepath = MODELS_DIR / "churn_nn.keras"

        self.network.save(filepath)
        logger.info(f"Model saved to {filepath}")

        return Path(filepath)

    def load_model(self, filepath: Optional[Path] = None) -> ChurnNetwork:
        """
        Load a network from disk.

        Args:
            filepath: Optional custom filepath

        Returns:
            Loaded network
        """
        if filepath is None:
            filepath = MODELS_DIR / "churn_nn.keras"

        filepath = Path(filepath)
        if not filepath.exists():
            logger.error(f"Model not found: {filepath}")
            raise FileNotFoundError(f"Model not found: {filepath}")

        self.network = ChurnNetwork.load(filepath)
        logger.info(f"Model loaded from {filepath}")

        return self.network
