"""Unit tests for request parsing and result serialization."""

import unittest

from streamprobe.models import (
    AudioDetectionResult,
    InvalidRequestError,
    ValidationChecks,
    ValidationRequest,
    ValidationResult,
)


class ValidationRequestParsingTests(unittest.TestCase):
    def test_dispatch_arguments(self):
        request = ValidationRequest.from_args(
            {"url": " https://radio.example/live ", "timeout": 5000, "followRedirects": False}
        )
        self.assertEqual(request, ValidationRequest("https://radio.example/live", 5000, False))

    def test_snake_case_arguments(self):
        request = ValidationRequest.from_args({"url": "http://radio.example", "timeout_ms": 3000.0})
        self.assertEqual(request.timeout_ms, 3000)
        self.assertIsInstance(request.timeout_ms, int)

    def test_bounds_are_inclusive(self):
        self.assertEqual(ValidationRequest.from_args({"url": "http://r.example", "timeout": 1000}).timeout_ms, 1000)
        self.assertEqual(ValidationRequest.from_args({"url": "http://r.example", "timeout": 30000}).timeout_ms, 30000)

    def test_collects_every_problem(self):
        with self.assertRaises(InvalidRequestError) as ctx:
            ValidationRequest.from_args({"url": "nope", "timeout": True, "followRedirects": 1})
        self.assertEqual(len(ctx.exception.problems), 3)
        self.assertIsInstance(ctx.exception, ValueError)

    def test_fractional_timeout_rejected(self):
        with self.assertRaises(InvalidRequestError):
            ValidationRequest.from_args({"url": "http://r.example", "timeout": 1500.5})

    def test_constructed_request_is_revalidated(self):
        with self.assertRaises(InvalidRequestError):
            ValidationRequest.from_args(ValidationRequest(url="https://r.example", timeout_ms=100))


class ValidationResultSerializationTests(unittest.TestCase):
    def test_optional_fields_omitted(self):
        payload = ValidationResult(success=False, url="https://r.example", status="invalid").to_dict()
        self.assertEqual(
            set(payload),
            {
                "success",
                "url",
                "status",
                "streamingHeaders",
                "validation",
                "errors",
                "warnings",
                "recommendations",
                "testDuration",
            },
        )

    def test_optional_fields_rendered(self):
        result = ValidationResult(
            success=True,
            url="https://r.example/a",
            status="valid",
            final_url="https://r.example/b",
            http_status=200,
            content_type="audio/ogg",
            audio_format=AudioDetectionResult(detected=True, format="ogg", mime="audio/ogg"),
            validation=ValidationChecks(http_accessible=True, audio_data_detected=True),
            errors=["a"],
        )
        payload = result.to_dict()
        self.assertEqual(payload["finalUrl"], "https://r.example/b")
        self.assertEqual(payload["audioFormat"], {"detected": True, "format": "ogg", "mime": "audio/ogg"})
        self.assertEqual(payload["errors"], ["a"])
        self.assertEqual(result.errors, ("a",))

    def test_undetected_audio_format_renders_flag_only(self):
        self.assertEqual(AudioDetectionResult(detected=False).to_dict(), {"detected": False})


if __name__ == "__main__":
    unittest.main()
