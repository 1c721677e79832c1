"""Helpers for lightweight audio format detection from raw bytes."""

from __future__ import annotations

import logging

import filetype

from streamprobe.models import AudioDetectionResult

logger = logging.getLogger(__name__)

# (prefix, format, mime) checked at offset 0 when the sniffing library has no answer
AUDIO_SIGNATURES = (
    (b"\xff\xfb", "mp3", "audio/mpeg"),
    (b"\xff\xf1", "aac", "audio/aac"),
    (b"\xff\xf9", "aac", "audio/aac"),
    (b"OggS", "ogg", "audio/ogg"),
)


def _sniff_with_library(head: bytes) -> AudioDetectionResult | None:
    try:
        kind = filetype.guess(head)
    except Exception as e:
        logger.debug("filetype could not inspect sample: %s", e)
        return None
    if kind is None or not str(kind.mime or "").startswith("audio/"):
        return None
    return AudioDetectionResult(detected=True, format=kind.extension, mime=kind.mime)


def detect_audio_format(audio_bytes: bytes) -> AudioDetectionResult:
    """Classify a sampled buffer as audio from container/frame signatures.

    Never raises; anything undecodable is reported as not detected.
    """
    if not audio_bytes:
        return AudioDetectionResult(detected=False)

    head = bytes(audio_bytes)
    sniffed = _sniff_with_library(head)
    if sniffed is not None:
        return sniffed

    for prefix, fmt, mime in AUDIO_SIGNATURES:
        if head.startswith(prefix):
            return AudioDetectionResult(detected=True, format=fmt, mime=mime)

    return AudioDetectionResult(detected=False)
