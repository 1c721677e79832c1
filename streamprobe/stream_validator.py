"""Radio stream validation: HEAD probe, optional byte sampling, verdict."""

from __future__ import annotations

import asyncio
import dataclasses
import logging
import time
from collections.abc import Mapping
from typing import Any, Optional

import httpx

from streamprobe.app_config import AppConfig
from streamprobe.audio_format import detect_audio_format
from streamprobe.constants import MIN_REMAINING_FOR_SAMPLE
from streamprobe.http_client import create_probe_client
from streamprobe.models import (
    STATUS_ERROR,
    STATUS_INVALID,
    STATUS_VALID,
    AudioDetectionResult,
    InvalidRequestError,
    SampleResult,
    ValidationChecks,
    ValidationContext,
    ValidationRequest,
    ValidationResult,
)
from streamprobe.network_probe import head_probe, sample_audio
from streamprobe.recommendations import generate_recommendations
from streamprobe.stream_headers import extract_streaming_headers, is_audio_content_type

logger = logging.getLogger(__name__)


def _elapsed_ms(start_time: float) -> int:
    return int((time.monotonic() - start_time) * 1000)


def _requested_url(args: Any) -> str:
    if isinstance(args, ValidationRequest):
        return str(args.url)
    if isinstance(args, Mapping) and args.get("url") is not None:
        return str(args["url"])
    return str(args)


def _invalid_request_result(args: Any, error: InvalidRequestError, start_time: float) -> ValidationResult:
    return ValidationResult(
        success=False,
        url=_requested_url(args),
        status=STATUS_ERROR,
        errors=(f"Invalid parameters: {error}",),
        recommendations=("❌ Please provide a valid URL",),
        test_duration=_elapsed_ms(start_time),
    )


def _same_url(left: str, right: httpx.URL) -> bool:
    try:
        return httpx.URL(left) == right
    except httpx.InvalidURL:
        return False


def validate_radio_stream(
    request: Any,
    *,
    config: Optional[AppConfig] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> ValidationResult:
    """Decide whether ``request.url`` is a playable radio stream.

    ``request`` is a ValidationRequest or a mapping with ``url``, optional
    ``timeout`` (ms) and ``followRedirects``. Expected failures are reported in
    the returned result, never raised. Pass ``client`` to reuse a caller-owned
    httpx.AsyncClient; otherwise one is created and closed for this call.

    Runs its own event loop; from async code await
    validate_radio_stream_async instead.
    """
    return asyncio.run(validate_radio_stream_async(request, config=config, client=client))


async def validate_radio_stream_async(
    request: Any,
    *,
    config: Optional[AppConfig] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> ValidationResult:
    start_time = time.monotonic()
    try:
        parsed = ValidationRequest.from_args(request)
    except InvalidRequestError as e:
        logger.info("Rejected validation request: %s", e)
        return _invalid_request_result(request, e, start_time)

    config = config or AppConfig()
    ctx = ValidationContext.start(parsed, start_time)

    if client is not None:
        return await _validate(ctx, client, config)
    async with create_probe_client() as owned_client:
        return await _validate(ctx, owned_client, config)


async def _validate(ctx: ValidationContext, client: httpx.AsyncClient, config: AppConfig) -> ValidationResult:
    errors: list[str] = []
    warnings: list[str] = []
    hard_error = False

    head = await head_probe(client, ctx, user_agent=config.user_agent)
    if head.error:
        warnings.append(head.error)
    head_response = head.response
    head_ok = head_response is not None and head_response.is_success

    content_type: Optional[str] = None
    streaming_headers: dict[str, str] = {}
    if head_ok:
        content_type = head_response.headers.get("content-type") or None
        streaming_headers = extract_streaming_headers(head_response.headers)

    skip_sampling = config.smart_skip and head_ok and (
        is_audio_content_type(content_type) or bool(streaming_headers)
    )

    sample: Optional[SampleResult] = None
    if skip_sampling:
        logger.debug("Skipping audio sampling for %s: headers are conclusive", ctx.url)
    else:
        remaining_ms = ctx.remaining_ms()
        if remaining_ms > MIN_REMAINING_FOR_SAMPLE:
            sample = await sample_audio(client, ctx.url, remaining_ms, user_agent=config.user_agent)
            sample_error = sample.error
        else:
            sample_error = "Insufficient time remaining for audio sampling"
        if sample_error:
            if head_response is None:
                errors.append(sample_error)
                hard_error = True
            else:
                warnings.append(sample_error)

    sample_ok = sample is not None and sample.ok
    if sample_ok and sample.headers is not None:
        if not content_type:
            content_type = sample.headers.get("content-type") or None
        for key, value in extract_streaming_headers(sample.headers).items():
            streaming_headers.setdefault(key, value)

    if head_response is not None:
        http_status: Optional[int] = head_response.status_code
    elif sample is not None:
        http_status = sample.status_code
    else:
        http_status = None

    final_url = None
    if head_response is not None and not _same_url(ctx.url, head_response.url):
        final_url = str(head_response.url)

    has_audio_content_type = is_audio_content_type(content_type)

    audio_format: Optional[AudioDetectionResult] = None
    audio_data_detected = False
    if sample is not None and sample.buffer:
        audio_format = detect_audio_format(sample.buffer)
        audio_data_detected = audio_format.detected
        if not audio_format.detected and has_audio_content_type:
            warnings.append("Could not detect audio format from data sample")
    elif skip_sampling:
        audio_data_detected = True

    checks = ValidationChecks(
        http_accessible=head_ok or sample_ok,
        has_audio_content_type=has_audio_content_type,
        has_streaming_headers=bool(streaming_headers),
        audio_data_detected=audio_data_detected,
    )
    success = checks.http_accessible and (
        checks.has_audio_content_type or checks.audio_data_detected or checks.has_streaming_headers
    )

    if content_type and not has_audio_content_type:
        (warnings if success else errors).append(f"Non-audio content type: {content_type}")
    if not success:
        if head_response is not None and head_response.status_code >= 400:
            errors.append(f"HTTP {head_response.status_code}: {head_response.reason_phrase}")
        if audio_format is not None and not audio_format.detected:
            errors.append("No audio signature found in sampled data")

    if success:
        status = STATUS_VALID
    elif hard_error:
        status = STATUS_ERROR
    else:
        status = STATUS_INVALID

    result = ValidationResult(
        success=success,
        url=ctx.url,
        status=status,
        streaming_headers=streaming_headers,
        validation=checks,
        errors=errors,
        warnings=warnings,
        final_url=final_url,
        http_status=http_status,
        content_type=content_type,
        audio_format=audio_format,
    )
    result = dataclasses.replace(
        result,
        recommendations=generate_recommendations(result),
        test_duration=ctx.elapsed_ms(),
    )
    logger.info(
        "Validated %s: status=%s http=%s duration=%dms",
        ctx.url,
        result.status,
        result.http_status,
        result.test_duration,
    )
    return result
