"""Operator-facing guidance derived from a validation outcome."""

from __future__ import annotations

from streamprobe.models import STATUS_INVALID, STATUS_VALID, ValidationResult


def generate_recommendations(result: ValidationResult) -> list[str]:
    """Build recommendation lines from status, flags and station headers.

    Pure: reads only the given result, so identical input gives identical
    output.
    """
    recommendations = []

    if result.status == STATUS_VALID:
        recommendations.append("✅ Stream validated successfully")

        station_name = result.streaming_headers.get("icy-name")
        if station_name:
            recommendations.append(f"🎵 Station: {station_name}")

        bitrate = result.streaming_headers.get("icy-br")
        if bitrate:
            recommendations.append(f"📊 Bitrate: {bitrate}kbps")

        if result.audio_format is not None and result.audio_format.format:
            recommendations.append(f"🎧 Format: {result.audio_format.format.upper()}")

        recommendations.append("✨ Ready to add as radio station")
    elif result.status == STATUS_INVALID:
        recommendations.append("❌ Stream validation failed")

        if result.http_status == 404:
            recommendations.append("🔍 Stream URL appears to be offline or moved")
            recommendations.append("💡 Check the station's official website for updated URLs")
        elif not result.validation.has_audio_content_type:
            recommendations.append("⚠️ URL does not serve audio content")
            recommendations.append("💡 Ensure you're using the stream URL, not the website URL")
        elif not result.validation.audio_data_detected:
            recommendations.append("⚠️ Could not detect valid audio data")
            recommendations.append("💡 The stream may be geo-restricted or require authentication")

        recommendations.append("🌐 Try finding alternative streams at radio-browser.info")
    else:
        recommendations.append("⚠️ Stream validation encountered an error")
        recommendations.append("🔄 Try again later or check your network connection")

    return recommendations
