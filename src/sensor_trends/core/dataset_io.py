from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pandas as pd

from .types import TIMESTAMP_KEYS, Sample


class SampleLoadError(ValueError):
    pass


def _restore_epoch_values(df: pd.DataFrame) -> pd.DataFrame:
    # One malformed row turns a whole epoch column into strings; numeric-looking
    # entries go back to numbers while clock labels and junk stay as text.
    data = df.copy()
    for key in TIMESTAMP_KEYS:
        if key not in data.columns or data[key].dtype != object:
            continue
        numeric = pd.to_numeric(data[key], errors="coerce")
        data[key] = data[key].where(numeric.isna(), numeric).astype(object)
    return data


def samples_from_frame(df: pd.DataFrame) -> list[Sample]:
    data = _restore_epoch_values(df)
    return [Sample.from_record(record) for record in data.to_dict(orient="records")]


def samples_from_records(records: Any) -> list[Sample]:
    # Exports from the dashboard backend wrap the rows as {"data": [...]}.
    if isinstance(records, dict) and isinstance(records.get("data"), list):
        records = records["data"]
    if not isinstance(records, list):
        raise SampleLoadError("Expected a list of sample records")
    samples: list[Sample] = []
    for record in records:
        if isinstance(record, dict):
            samples.append(Sample.from_record(record))
        else:
            samples.append(Sample())
    return samples


def load_samples(path: Path) -> list[Sample]:
    if not path.exists():
        raise SampleLoadError(f"Input file not found: {path}")
    suffix = path.suffix.lower()
    try:
        if suffix == ".json":
            return samples_from_records(json.loads(path.read_text(encoding="utf-8")))
        if suffix in {".csv", ".txt"}:
            return samples_from_frame(pd.read_csv(path))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, pd.errors.ParserError) as exc:
        raise SampleLoadError(f"Unable to read {path}: {exc}") from exc
    except pd.errors.EmptyDataError:
        return []
    raise SampleLoadError(f"Unsupported input format: {path.suffix or path.name}")
