"""
Configuration for the Churn NN demo.

Settings live in ``config.yaml`` next to this module. Set ``CHURN_NN_CONFIG``
to point at another YAML file. Paths below are only names; each is created
by the code that writes into it.
"""

import os
from pathlib import Path
from typing import Union

import yaml

ROOT_DIR = Path(__file__).parent.parent.absolute()
CONFIG_PATH = ROOT_DIR / "config" / "config.yaml"
CONFIG_ENV_VAR = "CHURN_NN_CONFIG"

DATA_DIR = ROOT_DIR / "data"
RAW_DATA_DIR = DATA_DIR / "raw"
MODELS_DIR = ROOT_DIR / "models" / "saved"
MLFLOW_DIR = ROOT_DIR / "models" / "mlflow"
REPORTS_DIR = ROOT_DIR / "reports"
FIGURES_DIR = REPORTS_DIR / "figures"
LOGS_DIR = ROOT_DIR / "logs"


def load_config(path: Union[str, Path] = CONFIG_PATH) -> dict:
    """Load configuration from a YAML file."""
    with open(path, "r") as f:
        return yaml.safe_load(f) or {}


def get_config() -> dict:
    """Get configuration dictionary, honouring ``CHURN_NN_CONFIG``."""
    return load_config(os.environ.get(CONFIG_ENV_VAR) or CONFIG_PATH)


def ensure_dir(path: Union[str, Path]) -> Path:
    """Create ``path`` (and parents) if needed and return it."""
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path
