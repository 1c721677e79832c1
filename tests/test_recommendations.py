"""Unit tests for recommendation generation."""

import unittest

from streamprobe.models import AudioDetectionResult, ValidationChecks, ValidationResult
from streamprobe.recommendations import generate_recommendations


def _result(status, **overrides):
    values = {
        "success": status == "valid",
        "url": "https://radio.example/stream",
        "status": status,
    }
    values.update(overrides)
    return ValidationResult(**values)


class ValidRecommendationTests(unittest.TestCase):
    def test_full_station_details(self):
        result = _result(
            "valid",
            streaming_headers={"icy-name": "Jazz24", "icy-br": "128"},
            audio_format=AudioDetectionResult(detected=True, format="mp3", mime="audio/mpeg"),
        )
        self.assertEqual(
            generate_recommendations(result),
            [
                "✅ Stream validated successfully",
                "🎵 Station: Jazz24",
                "📊 Bitrate: 128kbps",
                "🎧 Format: MP3",
                "✨ Ready to add as radio station",
            ],
        )

    def test_minimal_valid_result(self):
        result = _result("valid", streaming_headers={"icy-name": ""})
        self.assertEqual(
            generate_recommendations(result),
            ["✅ Stream validated successfully", "✨ Ready to add as radio station"],
        )


class InvalidRecommendationTests(unittest.TestCase):
    def test_not_found_branch(self):
        lines = generate_recommendations(_result("invalid", http_status=404))
        self.assertEqual(lines[0], "❌ Stream validation failed")
        self.assertIn("🔍 Stream URL appears to be offline or moved", lines)
        self.assertEqual(lines[-1], "🌐 Try finding alternative streams at radio-browser.info")

    def test_wrong_url_branch(self):
        lines = generate_recommendations(_result("invalid", http_status=200))
        self.assertIn("💡 Ensure you're using the stream URL, not the website URL", lines)

    def test_no_audio_data_branch(self):
        checks = ValidationChecks(http_accessible=True, has_audio_content_type=True)
        lines = generate_recommendations(_result("invalid", http_status=200, validation=checks))
        self.assertIn("💡 The stream may be geo-restricted or require authentication", lines)
        self.assertEqual(len(lines), 4)

    def test_all_signals_present_only_generic_lines(self):
        checks = ValidationChecks(
            http_accessible=False,
            has_audio_content_type=True,
            audio_data_detected=True,
        )
        lines = generate_recommendations(_result("invalid", validation=checks))
        self.assertEqual(
            lines,
            ["❌ Stream validation failed", "🌐 Try finding alternative streams at radio-browser.info"],
        )


class ErrorRecommendationTests(unittest.TestCase):
    def test_error_lines(self):
        self.assertEqual(
            generate_recommendations(_result("error")),
            [
                "⚠️ Stream validation encountered an error",
                "🔄 Try again later or check your network connection",
            ],
        )

    def test_repeatable_for_identical_input(self):
        result = _result(
            "valid",
            streaming_headers={"icy-name": "Test", "icy-br": "96"},
        )
        self.assertEqual(generate_recommendations(result), generate_recommendations(result))


if __name__ == "__main__":
    unittest.main()
