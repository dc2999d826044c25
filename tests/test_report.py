import json
import math

import sensor_trends.core.report as report_module
from sensor_trends.core.pipeline import analyze_samples
from sensor_trends.core.report import (
    build_legend,
    format_percent,
    format_stat,
    render_text,
    report_payload,
    report_schema,
)
from sensor_trends.core.utils import json_dumps


def test_format_placeholders():
    assert format_stat(math.nan) == "--"
    assert format_stat(None, "°C") == "--"
    assert format_stat(21.456, "°C") == "21.46°C"
    assert format_percent(math.nan) == "--"
    assert format_percent(2 / 3) == "66.67%"


def test_legend_lines(hourly_samples):
    report = analyze_samples(hourly_samples)
    legend = build_legend(report.channels["temperature"])
    assert legend[0] == "Mean: 22.00°C"
    assert legend[1] == "Median: 22.00°C"
    assert legend[2] == "Mode: 20.00°C"
    assert legend[3] == "Std dev: 2.00"
    assert legend[4] == "Skewness: 0.00"
    assert legend[5] == "Regression: 100.00%"
    assert legend[6] == "Forecast (1 h - 11:00): 26.00°C"
    assert legend[7].startswith("P(> 25.00°C): empirical 0.00%")


def test_legend_for_empty_channel():
    report = analyze_samples([])
    legend = build_legend(report.channels["humidity"])
    assert legend[0] == "Mean: --"
    assert legend[5] == "Regression: --"
    assert legend[6] == "Forecast (1 h - --): --"
    assert legend[7] == "P(> 25.00%): empirical 0.00%, distribution not normal"


def test_payload_is_strict_json(hourly_samples):
    payload = report_payload(analyze_samples(hourly_samples[:1]))
    temp = payload["channels"]["temperature"]
    assert temp["stats"]["std_dev"] is None
    assert temp["regression"]["r_squared"] is None
    assert temp["forecast"] is None
    assert temp["exceedance"]["normal_probability"] is None
    decoded = json.loads(json_dumps(payload))
    assert decoded["sample_count"] == 1


def test_payload_forecast_fields(hourly_samples):
    payload = report_payload(analyze_samples(hourly_samples))
    forecast = payload["channels"]["temperature"]["forecast"]
    assert forecast["label"] == "11:00"
    assert forecast["minute"] == 660
    assert len(payload["channels"]["humidity"]["forecast_series"]["points"]) == 5


def test_render_text(hourly_samples):
    text = render_text(analyze_samples(hourly_samples))
    assert text.startswith("# Sensor Summary")
    assert "## Temperature" in text
    assert "## Humidity" in text
    assert "- Next: 10:10 24.33°C" in text


def test_report_schema_is_read_once(hourly_samples, monkeypatch):
    calls = []
    original = report_module.read_json

    def counting_read_json(path):
        calls.append(path)
        return original(path)

    monkeypatch.setattr(report_module, "_schema_cache", {})
    monkeypatch.setattr(report_module, "read_json", counting_read_json)
    report = analyze_samples(hourly_samples)
    report_payload(report)
    report_payload(report)
    assert calls == [report_module.REPORT_SCHEMA_PATH]
    assert report_schema() is report_schema()
