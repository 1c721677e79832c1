"""Validation helpers for callers that check many stations at once."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional

from streamprobe.app_config import AppConfig
from streamprobe.constants import BATCH_VALIDATION_TIMEOUT
from streamprobe.models import ValidationResult
from streamprobe.stream_validator import validate_radio_stream

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StationCheck:
    ok: bool
    result: ValidationResult
    message: str = ""


def validate_streams(
    urls: Iterable[str],
    timeout_ms: int = BATCH_VALIDATION_TIMEOUT,
    *,
    config: Optional[AppConfig] = None,
    max_workers: Optional[int] = None,
) -> list[ValidationResult]:
    """Validate several stream URLs concurrently, results in input order.

    Each URL gets its own independent validation with the smaller batch
    timeout so the total wait stays predictable.
    """
    url_list = list(urls)
    if not url_list:
        return []
    config = config or AppConfig()
    workers = max(1, min(max_workers or config.batch_workers, len(url_list)))
    logger.info("Validating %d streams with %d workers (timeout=%dms)", len(url_list), workers, timeout_ms)

    def _one(url: str) -> ValidationResult:
        return validate_radio_stream({"url": url, "timeout": timeout_ms}, config=config)

    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="streamprobe") as pool:
        return list(pool.map(_one, url_list))


def validate_before_add(
    url: str,
    timeout_ms: int = BATCH_VALIDATION_TIMEOUT,
    *,
    config: Optional[AppConfig] = None,
) -> StationCheck:
    """Gate a station creation on its stream validating."""
    result = validate_radio_stream({"url": url, "timeout": timeout_ms}, config=config)
    if result.success:
        return StationCheck(ok=True, result=result)
    message = f"Stream validation failed: {result.status}. Station was not added."
    logger.warning("%s (%s)", message, url)
    return StationCheck(ok=False, result=result, message=message)


def summarize_validation(result: ValidationResult) -> dict:
    return {
        "validated": True,
        "isValid": result.success,
        "status": "OK" if result.success else "FAIL",
        "duration": result.test_duration,
    }
