"""Public StreamProbe APIs for tool dispatchers and station pipelines."""

from streamprobe.app_config import AppConfig
from streamprobe.audio_format import detect_audio_format
from streamprobe.batch import StationCheck, summarize_validation, validate_before_add, validate_streams
from streamprobe.models import (
    AudioDetectionResult,
    InvalidRequestError,
    ValidationChecks,
    ValidationRequest,
    ValidationResult,
)
from streamprobe.network_probe import head_probe, sample_audio
from streamprobe.recommendations import generate_recommendations
from streamprobe.stream_headers import extract_streaming_headers, is_audio_content_type
from streamprobe.stream_validator import validate_radio_stream, validate_radio_stream_async

__all__ = [
    "AppConfig",
    "AudioDetectionResult",
    "InvalidRequestError",
    "StationCheck",
    "ValidationChecks",
    "ValidationRequest",
    "ValidationResult",
    "detect_audio_format",
    "extract_streaming_headers",
    "generate_recommendations",
    "head_probe",
    "is_audio_content_type",
    "sample_audio",
    "summarize_validation",
    "validate_before_add",
    "validate_radio_stream",
    "validate_radio_stream_async",
    "validate_streams",
]
