"""
Churn NN Demo
=============

Loads the Telco customer-churn dataset, renders descriptive charts and
trains a small feed-forward network to predict churn.

Modules:
    - data: Dataset download, parsing and record schemas
    - features: One-hot encoding, scaling and train/test split
    - models: Network definition, training and evaluation
    - visualization: Descriptive charts and the HTML report
    - dashboard: Streamlit frontend
    - utils: Utility functions
"""

__version__ = "1.0.0"
