"""HTTP client factory for stream probes."""

import logging

import httpx

logger = logging.getLogger(__name__)


def create_probe_client() -> httpx.AsyncClient:
    """Create a short-lived httpx.AsyncClient for one validation call.

    Each validation owns its client so no pool or cookie jar is shared between
    concurrent calls. Per-request timeouts are set by the probe functions.
    """
    client = httpx.AsyncClient(
        limits=httpx.Limits(
            max_keepalive_connections=2,
            max_connections=4,
            keepalive_expiry=5.0,
        ),
    )
    logger.debug("Created probe HTTP client")
    return client
