from __future__ import annotations

from pathlib import Path

import pytest

from sensor_trends.core.types import Sample
from sensor_trends.core.utils import TIMEZONE_ENV


@pytest.fixture(autouse=True)
def _no_ambient_timezone(monkeypatch):
    monkeypatch.delenv(TIMEZONE_ENV, raising=False)


@pytest.fixture()
def hourly_samples() -> list[Sample]:
    return [
        Sample(timestamp="08:00", temperature=20, humidity=60),
        Sample(timestamp="09:00", temperature=22, humidity=58),
        Sample(timestamp="10:00", temperature=24, humidity=56),
    ]


def make_samples(rows: list[tuple]) -> list[Sample]:
    return [Sample(timestamp=ts, temperature=temp, humidity=hum) for ts, temp, hum in rows]


@pytest.fixture()
def samples_csv(tmp_path: Path) -> Path:
    path = tmp_path / "samples.csv"
    path.write_text(
        "timestamp_TTL,temperature,humidity\n"
        "08:00,20,60\n"
        "09:00,22,58\n"
        "10:00,24,56\n"
        "bad,oops,55\n",
        encoding="utf-8",
    )
    return path
