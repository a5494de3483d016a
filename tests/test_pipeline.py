"""End-to-end run on the synthetic dataset."""

from churn_nn.pipeline import run_pipeline

REPORT_CONTAINERS = [
    "churn-cont",
    "sex-churn-cont",
    "senior-churn-cont",
    "tenure-cont",
    "monthly-charges-cont",
    "total-charges-cont",
    "loss-cont",
    "confusion-matrix",
]


def test_run_pipeline(config, churn_df, tmp_path):
    result = run_pipeline(config, data=churn_df, report_path=tmp_path / "report.html")

    assert result.partition.n_train + result.partition.n_test == len(churn_df)
    assert set(result.metrics) == {"loss", "accuracy"}
    assert 0.0 <= result.metrics["accuracy"] <= 1.0
    assert list(result.figures) == REPORT_CONTAINERS
    assert result.model_path is None

    html = result.report_path.read_text(encoding="utf-8")
    for container_id in REPORT_CONTAINERS:
        assert f'id="{container_id}"' in html
