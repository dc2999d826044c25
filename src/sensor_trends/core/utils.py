from __future__ import annotations

import json
import math
import os
import sys
import uuid
from pathlib import Path
from typing import Any, Callable

_FLOAT_PRECISION = 10
TIMEZONE_ENV = "SENSOR_TRENDS_TIMEZONE"


def _canonicalize(value: Any) -> Any:
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        return round(value, _FLOAT_PRECISION)
    if isinstance(value, dict):
        return {key: _canonicalize(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_canonicalize(item) for item in value]
    return value


def json_ready(data: Any) -> Any:
    """Round floats and replace NaN/inf with None so the payload is strict JSON."""

    return _canonicalize(data)


def json_dumps(data: Any) -> str:
    return json.dumps(
        _canonicalize(data), ensure_ascii=False, indent=2, sort_keys=True, allow_nan=False
    )


def read_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


def atomic_write_text(path: Path, text: str, encoding: str = "utf-8") -> None:
    """Write to a temp file beside `path`, then os.replace it into place."""

    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(f".{path.name}.tmp.{uuid.uuid4().hex}")
    try:
        tmp_path.write_text(text, encoding=encoding)
        os.replace(tmp_path, path)
    finally:
        if tmp_path.exists():
            tmp_path.unlink()


def default_timezone() -> str | None:
    raw = os.environ.get(TIMEZONE_ENV, "").strip()
    return raw or None


def null_logger(msg: str) -> None:
    pass


def make_file_logger(path: Path) -> Callable[[str], None]:
    def logger(msg: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("a", encoding="utf-8") as handle:
            handle.write(msg + "\n")

    return logger


def stderr_logger(msg: str) -> None:
    print(msg, file=sys.stderr)
