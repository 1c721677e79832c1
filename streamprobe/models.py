"""Typed request/result values shared by the probe, detector and orchestrator."""

from __future__ import annotations

import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Optional
from urllib.parse import urlsplit

import httpx

from streamprobe.constants import (
    MAX_VALIDATION_TIMEOUT,
    MIN_VALIDATION_TIMEOUT,
    SINGLE_VALIDATION_TIMEOUT,
)

STATUS_VALID = "valid"
STATUS_INVALID = "invalid"
STATUS_ERROR = "error"


class InvalidRequestError(ValueError):
    """Raised when validation arguments are malformed."""

    def __init__(self, problems: list[str]):
        self.problems = list(problems)
        super().__init__(", ".join(self.problems))


def _is_absolute_http_url(value: str) -> bool:
    try:
        parts = urlsplit(value.strip())
        httpx.URL(value.strip())
    except (ValueError, httpx.InvalidURL):
        return False
    return parts.scheme.lower() in ("http", "https") and bool(parts.hostname)


def _first_present(args: Mapping, keys: tuple[str, ...], default):
    for key in keys:
        if args.get(key) is not None:
            return args[key]
    return default


def _request_problems(url, timeout_ms, follow_redirects) -> list[str]:
    problems = []
    if not isinstance(url, str) or not _is_absolute_http_url(url):
        problems.append("URL must be a valid URL")
    if isinstance(timeout_ms, bool) or not isinstance(timeout_ms, (int, float)):
        problems.append("Timeout must be a number of milliseconds")
    elif isinstance(timeout_ms, float) and not timeout_ms.is_integer():
        problems.append("Timeout must be a whole number of milliseconds")
    elif not MIN_VALIDATION_TIMEOUT <= timeout_ms <= MAX_VALIDATION_TIMEOUT:
        problems.append(
            f"Timeout must be between {MIN_VALIDATION_TIMEOUT} and {MAX_VALIDATION_TIMEOUT}ms"
        )
    if not isinstance(follow_redirects, bool):
        problems.append("followRedirects must be a boolean")
    return problems


@dataclass(frozen=True)
class ValidationRequest:
    """Input for a single stream validation."""

    url: str
    timeout_ms: int = SINGLE_VALIDATION_TIMEOUT
    follow_redirects: bool = True

    @classmethod
    def from_args(cls, args: Any) -> "ValidationRequest":
        """Parse dispatch-layer arguments (``{url, timeout?, followRedirects?}``).

        Raises InvalidRequestError listing every problem found.
        """
        if isinstance(args, ValidationRequest):
            url, timeout_ms, follow = args.url, args.timeout_ms, args.follow_redirects
        elif isinstance(args, Mapping):
            url = args.get("url")
            timeout_ms = _first_present(args, ("timeout", "timeout_ms", "timeoutMs"), SINGLE_VALIDATION_TIMEOUT)
            follow = _first_present(args, ("followRedirects", "follow_redirects"), True)
        else:
            raise InvalidRequestError(["Arguments must be an object with a 'url' field"])

        problems = _request_problems(url, timeout_ms, follow)
        if problems:
            raise InvalidRequestError(problems)
        return cls(url=url.strip(), timeout_ms=int(timeout_ms), follow_redirects=follow)


@dataclass(frozen=True)
class ValidationContext:
    url: str
    start_time: float
    timeout_ms: int
    follow_redirects: bool

    @classmethod
    def start(cls, request: ValidationRequest, start_time: Optional[float] = None) -> "ValidationContext":
        return cls(
            url=request.url,
            start_time=time.monotonic() if start_time is None else start_time,
            timeout_ms=request.timeout_ms,
            follow_redirects=request.follow_redirects,
        )

    def elapsed_ms(self) -> int:
        return int((time.monotonic() - self.start_time) * 1000)

    def remaining_ms(self) -> int:
        return self.timeout_ms - self.elapsed_ms()


@dataclass(frozen=True)
class AudioDetectionResult:
    detected: bool
    format: Optional[str] = None
    mime: Optional[str] = None

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"detected": self.detected}
        if self.format:
            payload["format"] = self.format
        if self.mime:
            payload["mime"] = self.mime
        return payload


@dataclass(frozen=True)
class ValidationChecks:
    http_accessible: bool = False
    has_audio_content_type: bool = False
    has_streaming_headers: bool = False
    audio_data_detected: bool = False

    def to_dict(self) -> dict:
        return {
            "httpAccessible": self.http_accessible,
            "hasAudioContentType": self.has_audio_content_type,
            "hasStreamingHeaders": self.has_streaming_headers,
            "audioDataDetected": self.audio_data_detected,
        }


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of one validation call.

    ``streaming_headers``, ``errors``, ``warnings`` and ``recommendations`` are
    always present; ``audio_format`` is set only when a byte sample was
    inspected.
    """

    success: bool
    url: str
    status: str
    streaming_headers: Mapping[str, str] = field(default_factory=dict)
    validation: ValidationChecks = field(default_factory=ValidationChecks)
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    recommendations: tuple[str, ...] = ()
    test_duration: int = 0
    final_url: Optional[str] = None
    http_status: Optional[int] = None
    content_type: Optional[str] = None
    audio_format: Optional[AudioDetectionResult] = None

    def __post_init__(self):
        object.__setattr__(self, "streaming_headers", MappingProxyType(dict(self.streaming_headers)))
        object.__setattr__(self, "errors", tuple(self.errors))
        object.__setattr__(self, "warnings", tuple(self.warnings))
        object.__setattr__(self, "recommendations", tuple(self.recommendations))

    def to_dict(self) -> dict:
        """Render the camelCase JSON shape returned to tool callers."""
        payload: dict[str, Any] = {
            "success": self.success,
            "url": self.url,
        }
        if self.final_url:
            payload["finalUrl"] = self.final_url
        payload["status"] = self.status
        if self.http_status is not None:
            payload["httpStatus"] = self.http_status
        if self.content_type:
            payload["contentType"] = self.content_type
        payload["streamingHeaders"] = dict(self.streaming_headers)
        if self.audio_format is not None:
            payload["audioFormat"] = self.audio_format.to_dict()
        payload["validation"] = self.validation.to_dict()
        payload["errors"] = list(self.errors)
        payload["warnings"] = list(self.warnings)
        payload["recommendations"] = list(self.recommendations)
        payload["testDuration"] = self.test_duration
        return payload


@dataclass(frozen=True)
class HeadProbeResult:
    response: Optional[httpx.Response] = None
    error: Optional[str] = None
    timed_out: bool = False


@dataclass(frozen=True)
class SampleResult:
    buffer: Optional[bytes] = None
    headers: Optional[httpx.Headers] = None
    status_code: Optional[int] = None
    error: Optional[str] = None
    timed_out: bool = False
    read_timed_out: bool = False

    @property
    def ok(self) -> bool:
        return self.status_code in (200, 206)
