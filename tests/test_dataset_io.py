import json

import pandas as pd
import pytest

from sensor_trends.core.dataset_io import (
    SampleLoadError,
    load_samples,
    samples_from_frame,
    samples_from_records,
)
from sensor_trends.core.pipeline import analyze_samples
from sensor_trends.core.types import Sample


def test_load_csv(samples_csv):
    samples = load_samples(samples_csv)
    assert len(samples) == 4
    assert samples[0].timestamp == "08:00"
    assert samples[3].temperature == "oops"


def test_load_json_wrapped_data(tmp_path):
    path = tmp_path / "samples.json"
    path.write_text(
        json.dumps(
            {
                "data": [
                    {"timestamp_TTL": "08:00", "temperature": "20.5", "humidity": 60},
                    {"timestamp": 1704096000, "temperature": 21},
                ]
            }
        ),
        encoding="utf-8",
    )
    samples = load_samples(path)
    assert samples[0] == Sample(timestamp="08:00", temperature="20.5", humidity=60)
    assert samples[1].timestamp == 1704096000
    assert samples[1].humidity is None


def test_non_mapping_records_become_empty_samples():
    samples = samples_from_records([{"timestamp": "08:00"}, 5])
    assert samples[1] == Sample()


def test_empty_csv(tmp_path):
    path = tmp_path / "empty.csv"
    path.write_text("", encoding="utf-8")
    assert load_samples(path) == []


@pytest.mark.parametrize(
    "name,content",
    [("bad.json", "{not json"), ("scalar.json", "42"), ("data.xlsx", "")],
)
def test_load_errors(tmp_path, name, content):
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")
    with pytest.raises(SampleLoadError):
        load_samples(path)


def test_missing_file(tmp_path):
    with pytest.raises(SampleLoadError, match="not found"):
        load_samples(tmp_path / "missing.csv")


def test_epoch_column_survives_a_malformed_row(tmp_path):
    path = tmp_path / "epochs.csv"
    path.write_text(
        "timestamp,temperature,humidity\n"
        "1704096000,20,60\n"
        "1704099600,22,58\n"
        "1704103200,24,56\n"
        "bad,oops,55\n",
        encoding="utf-8",
    )
    samples = load_samples(path)
    assert samples[0].timestamp == 1704096000
    assert samples[3].timestamp == "bad"

    report = analyze_samples(samples, {"timezone": "UTC"})
    assert report.parsed_timestamps == 3
    assert report.channels["temperature"].trend.headline.label == "11:00"


def test_clock_labels_stay_text_beside_epochs():
    frame = pd.DataFrame({"timestamp": ["08:00", "1704096000", None], "temperature": [1, 2, 3]})
    samples = samples_from_frame(frame)
    assert samples[0].timestamp == "08:00"
    assert samples[1].timestamp == 1704096000
    assert pd.isna(samples[2].timestamp)


def test_from_record_returns_sample():
    sample = Sample.from_record({"timestamp_TTL": "09:30", "humidity": "55"})
    assert isinstance(sample, Sample)
    assert sample.timestamp == "09:30"
