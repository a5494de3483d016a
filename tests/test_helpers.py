"""Tests for utility helpers."""

import re

from churn_nn.utils import format_metrics, get_timestamp


def test_format_metrics():
    assert format_metrics({"loss": 0.123456, "accuracy": 0.5}) == {"loss": "0.1235", "accuracy": "0.5000"}
    assert format_metrics({"loss": 0.123456}, precision=2) == {"loss": "0.12"}


def test_get_timestamp():
    assert re.fullmatch(r"\d{8}_\d{6}", get_timestamp())
    assert re.fullmatch(r"\d{4}", get_timestamp("%Y"))
