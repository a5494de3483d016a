"""Tests for dataset download, parsing and validation."""

from io import StringIO

import httpx
import pandas as pd
import pytest
from pydantic import ValidationError

from churn_nn.data import CustomerRecord, DataLoader, DataSchemaError

DATA_URL = "https://example.com/data/customer-churn.csv"


def make_client(text: str, status_code: int = 200):
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request.url)
        return httpx.Response(status_code, text=text)

    return httpx.Client(transport=httpx.MockTransport(handler)), calls


def test_parse_csv_coerces_numeric_columns(config, churn_csv_text):
    df = DataLoader(config).parse_csv(StringIO(churn_csv_text))

    assert len(df) == 40
    assert pd.api.types.is_float_dtype(df["TotalCharges"])
    assert pd.isna(df.loc[5, "TotalCharges"])
    assert df["TotalCharges"].isna().sum() == 1
    assert pd.api.types.is_integer_dtype(df["tenure"])


def test_parse_csv_drops_empty_rows(config, churn_df):
    text = churn_df.to_csv(index=False) + ",,,,,,,,,,,,,,,\n"

    df = DataLoader(config).parse_csv(StringIO(text))

    assert len(df) == len(churn_df)


def test_parse_csv_strips_whitespace(config, churn_df):
    churn_df.loc[0, "Contract"] = "  One year "

    df = DataLoader(config).parse_csv(StringIO(churn_df.to_csv(index=False)))

    assert df.loc[0, "Contract"] == "One year"


def test_parse_csv_missing_columns(config, churn_df):
    text = churn_df.drop(columns=["Contract", "tenure"]).to_csv(index=False)

    with pytest.raises(DataSchemaError, match="Contract"):
        DataLoader(config).parse_csv(StringIO(text))


def test_parse_csv_missing_file(config, tmp_path):
    with pytest.raises(FileNotFoundError):
        DataLoader(config).parse_csv(tmp_path / "nope.csv")


def test_fetch_csv_downloads_once(config, tmp_path, churn_csv_text):
    client, calls = make_client(churn_csv_text)
    loader = DataLoader(config, client=client, raw_data_path=tmp_path)

    first = loader.fetch_csv(DATA_URL)
    second = loader.fetch_csv(DATA_URL)

    assert first == second == loader.cache_path(DATA_URL)
    assert first.parent == tmp_path
    assert first.read_text(encoding="utf-8") == churn_csv_text
    assert len(calls) == 1


def test_fetch_csv_force_refresh(config, tmp_path, churn_csv_text):
    client, calls = make_client(churn_csv_text)
    loader = DataLoader(config, client=client, raw_data_path=tmp_path)

    loader.fetch_csv(DATA_URL)
    loader.fetch_csv(DATA_URL, force=True)

    assert len(calls) == 2


def test_fetch_csv_http_error(config, tmp_path):
    client, _ = make_client("not found", status_code=404)
    loader = DataLoader(config, client=client, raw_data_path=tmp_path)

    with pytest.raises(httpx.HTTPStatusError):
        loader.fetch_csv(DATA_URL)

    assert list(tmp_path.iterdir()) == []


def test_fetch_csv_configured_url_uses_configured_filename(config, tmp_path, churn_csv_text):
    client, calls = make_client(churn_csv_text)
    loader = DataLoader(config, client=client, raw_data_path=tmp_path)

    path = loader.fetch_csv()

    assert path == tmp_path / config["data"]["filename"]
    assert calls == [httpx.URL(config["data"]["url"])]


def test_fetch_csv_other_url_not_served_from_cache(config, tmp_path):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text=f"src\n{request.url.host}\n")

    client = httpx.Client(transport=httpx.MockTransport(handler))
    config["data"]["url"] = "https://default.example/customer-churn.csv"
    loader = DataLoader(config, client=client, raw_data_path=tmp_path)

    default_path = loader.fetch_csv()
    other_path = loader.fetch_csv("https://other.example/customer-churn.csv")

    assert other_path != default_path
    assert "default.example" in default_path.read_text(encoding="utf-8")
    assert "other.example" in other_path.read_text(encoding="utf-8")
    assert other_path.name.startswith("customer-churn-")
    assert other_path.suffix == ".csv"


def test_load_data(config, tmp_path, churn_csv_text):
    client, _ = make_client(churn_csv_text)
    loader = DataLoader(config, client=client, raw_data_path=tmp_path)

    df = loader.load_data(DATA_URL)

    assert len(df) == 40
    assert set(loader.required_columns) <= set(df.columns)


def test_to_records_are_immutable(config, churn_csv_text):
    loader = DataLoader(config)
    df = loader.parse_csv(StringIO(churn_csv_text))

    records = loader.to_records(df)

    assert len(records) == len(df)
    assert all(isinstance(r, CustomerRecord) for r in records)
    assert records[5].TotalCharges is None
    assert records[0].churned is (df.loc[0, "Churn"] == "Yes")

    with pytest.raises(ValidationError):
        records[0].tenure = 99


def test_record_rejects_unknown_label(churn_df):
    row = churn_df.iloc[0].to_dict()
    row["Churn"] = "Maybe"

    with pytest.raises(ValidationError):
        CustomerRecord(**{k: (v.item() if hasattr(v, "item") else v) for k, v in row.items()})


def test_validate_data(config, churn_df):
    results = DataLoader(config).validate_data(churn_df)

    assert results["total_rows"] == 40
    assert results["target_distribution"]["Yes"] == 14
    assert results["target_distribution"]["No"] == 26
    assert results["duplicates"] == 0
