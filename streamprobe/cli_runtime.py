"""Headless CLI runtime wiring for StreamProbe."""

import argparse
import dataclasses
import json
import logging
import sys
from collections.abc import Sequence

from streamprobe.app_config import AppConfig
from streamprobe.batch import summarize_validation, validate_streams
from streamprobe.constants import BATCH_VALIDATION_TIMEOUT, SINGLE_VALIDATION_TIMEOUT
from streamprobe.stream_validator import validate_radio_stream


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="StreamProbe radio stream validator")
    parser.add_argument("--log-level", default=None, help="Logging level (defaults to LOG_LEVEL)")
    sub = parser.add_subparsers(dest="command", required=True)

    p_validate = sub.add_parser("validate", help="Validate a single stream URL")
    p_validate.add_argument("url", help="Stream URL")
    p_validate.add_argument("--timeout", type=int, default=SINGLE_VALIDATION_TIMEOUT, help="Timeout in ms")
    p_validate.add_argument(
        "--no-follow-redirects",
        dest="follow_redirects",
        action="store_false",
        help="Report redirects instead of following them",
    )
    p_validate.add_argument("--strict", action="store_true", help="Always sample audio bytes")

    p_batch = sub.add_parser("batch", help="Validate several stream URLs")
    p_batch.add_argument("urls", nargs="+", help="Stream URLs")
    p_batch.add_argument("--timeout", type=int, default=BATCH_VALIDATION_TIMEOUT, help="Timeout per stream in ms")
    p_batch.add_argument("--strict", action="store_true", help="Always sample audio bytes")
    return parser


def _configure_logging(level_name: str, log_file: str = ""):
    handlers = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    logging.basicConfig(
        level=getattr(logging, str(level_name or "").upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        handlers=handlers,
    )


def cmd_validate(config: AppConfig, url: str, timeout_ms: int, follow_redirects: bool) -> int:
    """Validate one stream and print the result as JSON."""
    result = validate_radio_stream(
        {"url": url, "timeout": timeout_ms, "followRedirects": follow_redirects},
        config=config,
    )
    print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    return 0 if result.success else 1


def cmd_batch(config: AppConfig, urls: Sequence[str], timeout_ms: int) -> int:
    """Validate several streams, one JSON summary line per URL."""
    results = validate_streams(urls, timeout_ms, config=config)
    for url, result in zip(urls, results):
        print(json.dumps({"url": url, **summarize_validation(result)}, ensure_ascii=False))
    return 0 if all(result.success for result in results) else 1


def run_cli(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    config = AppConfig.from_env()
    _configure_logging(args.log_level or config.log_level, config.log_file)
    if args.strict:
        config = dataclasses.replace(config, smart_skip=False)

    if args.command == "validate":
        return cmd_validate(config, args.url, args.timeout, args.follow_redirects)
    if args.command == "batch":
        return cmd_batch(config, args.urls, args.timeout)
    parser.error(f"Unknown command: {args.command}")


def main():
    sys.exit(run_cli())
