"""Content-type and ICY/SHOUTcast header classification."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Optional

VALID_AUDIO_MIMES = (
    "audio/mpeg",
    "audio/mp3",
    "audio/aac",
    "audio/aacp",
    "audio/ogg",
    "audio/opus",
    "audio/flac",
    "audio/x-flac",
    "audio/x-ms-wma",
    "application/ogg",
    "audio/webm",
    "audio/x-mpegurl",  # M3U playlist
    "audio/mpegurl",
    "audio/x-scpls",  # PLS playlist
    "application/vnd.apple.mpegurl",  # HLS
    "application/x-mpegurl",
)

STREAMING_HEADERS = frozenset(
    {
        "icy-name",
        "icy-br",
        "icy-metaint",
        "icy-genre",
        "icy-url",
        "icy-pub",
        "x-audiocast-name",
        "x-audiocast-genre",
        "x-audiocast-bitrate",
    }
)


def is_audio_content_type(content_type: Optional[str]) -> bool:
    if not content_type:
        return False
    normalized = content_type.lower()
    return any(mime in normalized for mime in VALID_AUDIO_MIMES)


def extract_streaming_headers(headers: Optional[Mapping[str, str]]) -> dict[str, str]:
    """Keep only ICY-style station headers, keyed by lower-cased name.

    Everything else is dropped so results stay small and carry no cookies or
    server internals.
    """
    if not headers:
        return {}
    stream_headers = {}
    for key, value in headers.items():
        lower_key = str(key).lower()
        if lower_key in STREAMING_HEADERS or lower_key.startswith("icy-"):
            stream_headers[lower_key] = value
    return stream_headers
