"""Models module for training and evaluation."""

from .network import ChurnNetwork
from .trainer import ModelTrainer
from .evaluator import ModelEvaluator

__all__ = ["ChurnNetwork", "ModelTrainer", "ModelEvaluator"]
