"""Tests for the network definition and the training recipe."""

import numpy as np
import pytest

from churn_nn.models import ChurnNetwork, ModelTrainer
from churn_nn.models.trainer import EpochLogger


@pytest.fixture
def training_data():
    rng = np.random.default_rng(0)
    X = rng.random((40, 6)).astype(np.float32)
    labels = (X[:, 0] > 0.5).astype(int)
    y = np.eye(2, dtype=np.float32)[labels]
    return X, y


def test_network_architecture():
    network = ChurnNetwork(input_dim=12)

    assert network.layer_units == [32, 64, 2]
    assert network.model.input_shape == (None, 12)
    assert network.model.layers[-1].get_config()["activation"] == "softmax"
    assert network.model.layers[0].get_config()["activation"] == "relu"


def test_build_model_uses_config(config):
    config["training"]["hidden_units"] = [8, 4]

    network = ModelTrainer(config).build_model(5)

    assert network.layer_units == [8, 4, 2]
    assert network.input_dim == 5


def test_train_records_history(config, training_data):
    X, y = training_data
    trainer = ModelTrainer(config)

    network = trainer.train(X, y, epochs=2)

    for name in ("loss", "val_loss", "accuracy", "val_accuracy"):
        assert len(trainer.history[name]) == 2

    probabilities = network.predict(X)
    assert probabilities.shape == (40, 2)
    np.testing.assert_allclose(probabilities.sum(axis=1), np.ones(40), rtol=1e-5)
    assert set(network.predict_classes(X)) <= {0, 1}


def test_epoch_logger_collects_metrics(config, training_data):
    X, y = training_data
    callback = EpochLogger()
    network = ChurnNetwork(input_dim=X.shape[1])

    network.fit(X, y, epochs=3, batch_size=32, validation_split=0.1, callbacks=[callback], verbose=0)

    assert len(callback.epochs) == 3
    assert set(callback.epochs[0]) == {"loss", "val_loss", "accuracy", "val_accuracy"}


def test_plot_training_curves(config, training_data):
    X, y = training_data
    trainer = ModelTrainer(config)
    trainer.train(X, y)

    fig = trainer.plot_training_curves()

    assert [trace.name for trace in fig.data] == ["loss", "val_loss", "accuracy", "val_accuracy"]


def test_plot_training_curves_requires_history(config):
    with pytest.raises(ValueError, match="train"):
        ModelTrainer(config).plot_training_curves()


def test_save_and_load_model(config, training_data, tmp_path):
    X, y = training_data
    trainer = ModelTrainer(config)
    network = trainer.train(X, y)

    path = trainer.save_model(tmp_path / "churn_nn.keras")
    loaded = ModelTrainer(config).load_model(path)

    assert loaded.layer_units == network.layer_units
    np.testing.assert_allclose(loaded.predict(X), network.predict(X), rtol=1e-5, atol=1e-6)


def test_save_model_requires_training(config, tmp_path):
    with pytest.raises(ValueError):
        ModelTrainer(config).save_model(tmp_path / "model.keras")


def test_load_missing_model(config, tmp_path):
    with pytest.raises(FileNotFoundError):
        ModelTrainer(config).load_model(tmp_path / "missing.keras")


def test_explicit_zero_epochs_is_not_replaced_by_config(config):
    trainer = ModelTrainer(config)

    assert trainer.get_params(epochs=0)["epochs"] == 0
    assert trainer.get_params()["epochs"] == config["training"]["epochs"]


def test_train_rejects_non_positive_epochs(config, training_data):
    X, y = training_data

    with pytest.raises(ValueError, match="epochs"):
        ModelTrainer(config).train(X, y, epochs=0)


def test_disabled_mlflow_creates_no_tracking_dir(config, tmp_path, monkeypatch):
    mlflow_dir = tmp_path / "mlflow"
    monkeypatch.setattr("churn_nn.models.trainer.MLFLOW_DIR", mlflow_dir)

    trainer = ModelTrainer(config)

    assert not trainer.mlflow_enabled
    assert not mlflow_dir.exists()
