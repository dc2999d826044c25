from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any, Callable

import yaml

from sensor_trends.core.dataset_io import SampleLoadError, load_samples
from sensor_trends.core.pipeline import analyze_samples
from sensor_trends.core.report import render_text, report_payload
from sensor_trends.core.series import DEFAULT_CONFIG, SettingsError, resolve_settings
from sensor_trends.core.utils import (
    atomic_write_text,
    json_dumps,
    make_file_logger,
    null_logger,
    stderr_logger,
)


def load_settings(path: str | None) -> dict[str, Any]:
    if not path:
        return {}
    settings_path = Path(path)
    if not settings_path.exists():
        raise SystemExit(f"Settings file not found: {path}")
    content = settings_path.read_text(encoding="utf-8")
    try:
        if path.endswith(".json"):
            loaded = json.loads(content)
        else:
            loaded = yaml.safe_load(content)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise SystemExit(f"Unable to parse settings {path}: {exc}") from exc
    return loaded if loaded is not None else {}


def _build_logger(log_file: str | None, verbose: bool) -> Callable[[str], None]:
    if log_file:
        file_logger = make_file_logger(Path(log_file))
        if not verbose:
            return file_logger

        def logger(msg: str) -> None:
            file_logger(msg)
            stderr_logger(msg)

        return logger
    return stderr_logger if verbose else null_logger


def cmd_analyze(
    file: str,
    settings_path: str | None,
    out: str | None,
    output_format: str,
    log_file: str | None = None,
    verbose: bool = False,
) -> None:
    settings = load_settings(settings_path)
    try:
        samples = load_samples(Path(file))
        report = analyze_samples(samples, settings, logger=_build_logger(log_file, verbose))
    except (SampleLoadError, SettingsError) as exc:
        raise SystemExit(str(exc)) from exc
    if output_format == "text":
        content = render_text(report)
    else:
        content = json_dumps(report_payload(report)) + "\n"
    if out:
        atomic_write_text(Path(out), content)
        print(f"Wrote {out}")
    else:
        print(content, end="")


def cmd_validate_settings(settings_path: str) -> None:
    try:
        resolved = resolve_settings(load_settings(settings_path))
    except SettingsError as exc:
        raise SystemExit(str(exc)) from exc
    print(json_dumps(resolved))


def cmd_show_defaults() -> None:
    print(json_dumps(DEFAULT_CONFIG))


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="sensor-trends")
    sub = parser.add_subparsers(dest="command", required=True)

    analyze_parser = sub.add_parser("analyze")
    analyze_parser.add_argument("--file", required=True)
    analyze_parser.add_argument("--settings")
    analyze_parser.add_argument("--out")
    analyze_parser.add_argument("--format", choices=["json", "text"], default="json")
    analyze_parser.add_argument("--log-file")
    analyze_parser.add_argument("--verbose", action="store_true")

    validate_parser = sub.add_parser("validate-settings")
    validate_parser.add_argument("--settings", required=True)

    sub.add_parser("show-defaults")

    args = parser.parse_args(argv)

    if args.command == "analyze":
        cmd_analyze(
            args.file,
            args.settings,
            args.out,
            args.format,
            log_file=args.log_file,
            verbose=bool(args.verbose),
        )
    elif args.command == "validate-settings":
        cmd_validate_settings(args.settings)
    elif args.command == "show-defaults":
        cmd_show_defaults()
    else:
        raise SystemExit(2)


if __name__ == "__main__":
    main()
