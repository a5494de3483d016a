"""Shared fixtures: a small synthetic churn dataset and a test configuration."""

import copy

import numpy as np
import pandas as pd
import pytest

from config import get_config

N_ROWS = 40


def make_churn_frame(n_rows: int = N_ROWS, seed: int = 0) -> pd.DataFrame:
    """Synthetic rows with the Telco churn column schema."""
    rng = np.random.default_rng(seed)
    tenure = rng.integers(1, 72, n_rows)
    monthly = rng.uniform(18.0, 120.0, n_rows).round(2)
    yes_no = ["Yes", "No"]
    service = ["Yes", "No", "No internet service"]

    return pd.DataFrame({
        "customerID": [f"{i:04d}-TEST" for i in range(n_rows)],
        "gender": rng.choice(["Female", "Male"], n_rows),
        "SeniorCitizen": rng.integers(0, 2, n_rows),
        "Partner": rng.choice(yes_no, n_rows),
        "Dependents": rng.choice(yes_no, n_rows),
        "tenure": tenure,
        "PhoneService": rng.choice(yes_no, n_rows),
        "InternetService": rng.choice(["DSL", "Fiber optic", "No"], n_rows),
        "TechSupport": rng.choice(service, n_rows),
        "StreamingTV": rng.choice(service, n_rows),
        "Contract": rng.choice(["Month-to-month", "One year", "Two year"], n_rows),
        "PaperlessBilling": rng.choice(yes_no, n_rows),
        "PaymentMethod": rng.choice(
            ["Electronic check", "Mailed check", "Bank transfer (automatic)", "Credit card (automatic)"],
            n_rows
        ),
        "MonthlyCharges": monthly,
        "TotalCharges": (monthly * tenure).round(2),
        "Churn": ["Yes" if i % 3 == 0 else "No" for i in range(n_rows)],
    })


@pytest.fixture
def churn_df() -> pd.DataFrame:
    return make_churn_frame()


@pytest.fixture
def churn_csv_text(churn_df) -> str:
    """CSV text as served remotely: a blank TotalCharges value and a trailing newline."""
    df = churn_df.astype({"TotalCharges": object})
    df.loc[5, "TotalCharges"] = " "
    return df.to_csv(index=False) + "\n"


@pytest.fixture
def config() -> dict:
    config = copy.deepcopy(get_config())
    config["training"]["epochs"] = 1
    config["mlflow"]["enabled"] = False
    return config
