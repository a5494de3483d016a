"""
Streamlit Dashboard Application
===============================

Interactive view of the churn dataset and the neural network training run.
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

import pandas as pd
import streamlit as st

from config import get_config
from churn_nn.data import DataLoader
from churn_nn.features import FeatureEncoder
from churn_nn.models import ModelEvaluator, ModelTrainer
from churn_nn.visualization import (
    CHURN_CONTAINER,
    MONTHLY_CHARGES_CONTAINER,
    SENIOR_CHURN_CONTAINER,
    SEX_CHURN_CONTAINER,
    TENURE_CONTAINER,
    TOTAL_CHARGES_CONTAINER,
    DescriptiveVisualizer,
)

# Page config
st.set_page_config(
    page_title="Customer Churn",
    page_icon="📊",
    layout="wide",
    initial_sidebar_state="expanded"
)

CONFIG = get_config()


@st.cache_data(show_spinner="Loading dataset...")
def load_data(refresh: bool = False) -> pd.DataFrame:
    """Download (or reuse) and parse the dataset."""
    return DataLoader(CONFIG).load_data(force=refresh)


# Sidebar
with st.sidebar:
    st.markdown("## Customer Churn")
    refresh = st.checkbox("Re-download dataset", value=False)
    epochs = st.slider(
        "Epochs", min_value=1, max_value=64,
        value=CONFIG.get("training", {}).get("epochs", 32)
    )
    train_clicked = st.button("Train model", type="primary")

data = load_data(refresh)

st.title("Customer Churn")
col1, col2, col3 = st.columns(3)
with col1:
    st.metric("Customers", len(data))
with col2:
    counts = DescriptiveVisualizer(CONFIG).churn_counts(data)
    st.metric("Churned", counts["Churned"])
with col3:
    st.metric("Churn rate", f"{counts['Churned'] / max(len(data), 1):.1%}")

# Descriptive charts
figures = DescriptiveVisualizer(CONFIG).build_descriptive_figures(data)

col1, col2, col3 = st.columns(3)
for column, container_id in zip(
    (col1, col2, col3),
    (CHURN_CONTAINER, SEX_CHURN_CONTAINER, SENIOR_CHURN_CONTAINER)
):
    with column:
        st.plotly_chart(figures[container_id], use_container_width=True)

col1, col2, col3 = st.columns(3)
for column, container_id in zip(
    (col1, col2, col3),
    (TENURE_CONTAINER, MONTHLY_CHARGES_CONTAINER, TOTAL_CHARGES_CONTAINER)
):
    with column:
        st.plotly_chart(figures[container_id], use_container_width=True)

# Training
st.markdown("---")
st.subheader("Neural network")

if train_clicked:
    with st.spinner("Training..."):
        partition = FeatureEncoder(CONFIG).encode(data)
        trainer = ModelTrainer(CONFIG)
        network = trainer.train(partition.X_train, partition.y_train, epochs=epochs)

        evaluator = ModelEvaluator(CONFIG)
        metrics = evaluator.evaluate_model(network, partition.X_test, partition.y_test)

    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Features", partition.n_features)
    with col2:
        st.metric("Test loss", f"{metrics['loss']:.4f}")
    with col3:
        st.metric("Test accuracy", f"{metrics['accuracy']:.2%}")

    col1, col2 = st.columns(2)
    with col1:
        st.plotly_chart(trainer.plot_training_curves(), use_container_width=True)
    with col2:
        st.plotly_chart(evaluator.plot_confusion_matrix(), use_container_width=True)

    st.code(evaluator.get_classification_report())
else:
    st.info("Press 'Train model' in the sidebar to train the network.")
