"""Timeout, size and header constants for radio stream validation.

All durations are in milliseconds.
"""

# Request timeout bounds and per-caller defaults
MIN_VALIDATION_TIMEOUT = 1000
MAX_VALIDATION_TIMEOUT = 30000
SINGLE_VALIDATION_TIMEOUT = 8000
BATCH_VALIDATION_TIMEOUT = 3000
DISCOVERY_VALIDATION_TIMEOUT = 2000

# HEAD probe gets 60% of the budget, capped
HEAD_TIMEOUT_RATIO = 0.6
FALLBACK_HEAD_TIMEOUT = 4000

# Sampling GET
MIN_SAMPLE_TIMEOUT = 2000
MIN_REMAINING_FOR_SAMPLE = 1000
SAMPLE_BUFFER_SIZE = 8192
STREAM_READ_TIMEOUT = 3000

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; StreamProbe/1.0)"
ACCEPT_AUDIO = "audio/*"
