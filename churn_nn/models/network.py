"""
Churn Network Module
====================

Feed-forward classifier: Dense(32, relu) -> Dense(64, relu) -> Dense(2, softmax).
"""

from pathlib import Path
from typing import List, Sequence, Union

import numpy as np
from tensorflow import keras


class ChurnNetwork:
    """Thin wrapper around a Keras ``Sequential`` stack of dense layers."""

    def __init__(
        self,
        input_dim: int,
        hidden_units: Sequence[int] = (32, 64),
        n_classes: int = 2,
        learning_rate: float = 0.001,
        model: keras.Model = None
    ):
        self.input_dim = input_dim
        self.n_classes = n_classes
        self.model = model if model is not None else self._build(hidden_units, learning_rate)

    def _build(self, hidden_units: Sequence[int], learning_rate: float) -> keras.Model:
        model = keras.Sequential(name="churn_nn")
        model.add(keras.Input(shape=(self.input_dim,)))
        for units in hidden_units:
            model.add(keras.layers.Dense(units, activation="relu"))
        model.add(keras.layers.Dense(self.n_classes, activation="softmax"))

        model.compile(
            optimizer=keras.optimizers.Adam(learning_rate=learning_rate),
            loss="categorical_crossentropy",
            metrics=["accuracy"],
        )
        return model

    @property
    def layer_units(self) -> List[int]:
        return [layer.units for layer in self.model.layers]

    def fit(self, X: np.ndarray, y: np.ndarray, **kwargs) -> keras.callbacks.History:
        return self.model.fit(X, y, **kwargs)

    def evaluate(self, X: np.ndarray, y: np.ndarray, batch_size: int = 32, verbose: int = 0) -> List[float]:
        """Return [loss, accuracy] on the given rows."""
        return self.model.evaluate(X, y, batch_size=batch_size, verbose=verbose)

    def predict(self, X: np.ndarray, verbose: int = 0) -> np.ndarray:
        """Class probabilities, shape (n_rows, n_classes)."""
        return self.model.predict(X, verbose=verbose)

    def predict_classes(self, X: np.ndarray) -> np.ndarray:
        return self.predict(X).argmax(axis=-1)

    def save(self, filepath: Union[str, Path]) -> Path:
        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)
        self.model.save(filepath)
        return filepath

    @classmethod
    def load(cls, filepath: Union[str, Path]) -> "ChurnNetwork":
        model = keras.models.load_model(filepath)
        return cls(
            input_dim=model.input_shape[-1],
            n_classes=model.output_shape[-1],
            model=model,
        )
