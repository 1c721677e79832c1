"""Bounded-time HEAD probe and ranged sample read against a stream URL."""

from __future__ import annotations

import asyncio
import logging

import httpx

from streamprobe.constants import (
    ACCEPT_AUDIO,
    DEFAULT_USER_AGENT,
    FALLBACK_HEAD_TIMEOUT,
    HEAD_TIMEOUT_RATIO,
    MIN_SAMPLE_TIMEOUT,
    SAMPLE_BUFFER_SIZE,
    STREAM_READ_TIMEOUT,
)
from streamprobe.models import HeadProbeResult, SampleResult, ValidationContext

logger = logging.getLogger(__name__)


def head_timeout_ms(timeout_ms: int) -> int:
    return min(FALLBACK_HEAD_TIMEOUT, int(timeout_ms * HEAD_TIMEOUT_RATIO))


def sample_timeout_ms(remaining_timeout_ms: int) -> int:
    return max(MIN_SAMPLE_TIMEOUT, int(remaining_timeout_ms))


async def head_probe(
    client: httpx.AsyncClient,
    ctx: ValidationContext,
    user_agent: str = DEFAULT_USER_AGENT,
) -> HeadProbeResult:
    """Issue a HEAD request bounded by the HEAD share of the budget.

    The limit covers the whole exchange up to the response headers, so a
    server that trickles header lines is cut off too. Redirects are returned
    as-is when ``ctx.follow_redirects`` is false. Failures come back as
    messages, never as exceptions.
    """
    budget_ms = head_timeout_ms(ctx.timeout_ms)
    budget_s = budget_ms / 1000
    try:
        logger.debug("HEAD -> %s | timeout=%dms follow_redirects=%s", ctx.url, budget_ms, ctx.follow_redirects)
        response = await asyncio.wait_for(
            client.head(
                ctx.url,
                headers={"User-Agent": user_agent, "Accept": ACCEPT_AUDIO},
                follow_redirects=ctx.follow_redirects,
                timeout=budget_s,
            ),
            budget_s,
        )
    except (asyncio.TimeoutError, httpx.TimeoutException):
        logger.warning("HEAD %s timed out after %dms", ctx.url, budget_ms)
        return HeadProbeResult(error=f"HEAD request timeout after {budget_ms}ms", timed_out=True)
    except httpx.HTTPError as e:
        logger.warning("HEAD %s failed: %s", ctx.url, e)
        return HeadProbeResult(error=f"HEAD request failed: {e}")

    logger.debug("HEAD <- %s | status=%d", response.url, response.status_code)
    return HeadProbeResult(response=response)


async def _read_sample(response: httpx.Response) -> tuple[bytes, bool]:
    """Read at most SAMPLE_BUFFER_SIZE bytes, for at most STREAM_READ_TIMEOUT.

    The read ceiling starts with the first body read. Returns the bytes
    collected and whether the read ceiling was hit. Some servers ignore Range
    and stream forever, so the loop never waits for the body to end on its own.
    """
    collected = bytearray()

    async def fill():
        async for chunk in response.aiter_bytes():
            collected.extend(chunk)
            if len(collected) >= SAMPLE_BUFFER_SIZE:
                break

    read_timed_out = False
    try:
        await asyncio.wait_for(fill(), STREAM_READ_TIMEOUT / 1000)
    except (asyncio.TimeoutError, httpx.TimeoutException):
        read_timed_out = True
    return bytes(collected[:SAMPLE_BUFFER_SIZE]), read_timed_out


async def sample_audio(
    client: httpx.AsyncClient,
    url: str,
    remaining_timeout_ms: int,
    user_agent: str = DEFAULT_USER_AGENT,
) -> SampleResult:
    """Fetch the first bytes of the stream with a ranged GET.

    Connecting and receiving the response headers are bounded together by the
    sample timeout, which is never less than MIN_SAMPLE_TIMEOUT. Body reads are
    capped separately by STREAM_READ_TIMEOUT and SAMPLE_BUFFER_SIZE; the
    connection is released as soon as either ceiling is reached. ``error`` is
    set only when nothing usable came back.
    """
    budget_ms = sample_timeout_ms(remaining_timeout_ms)
    budget_s = budget_ms / 1000
    request = client.build_request(
        "GET",
        url,
        headers={
            "Range": f"bytes=0-{SAMPLE_BUFFER_SIZE - 1}",
            "User-Agent": user_agent,
            "Accept": ACCEPT_AUDIO,
        },
        # headers are bounded by wait_for below; body reads by _read_sample
        timeout=httpx.Timeout(budget_s, read=max(budget_s, STREAM_READ_TIMEOUT / 1000)),
    )
    try:
        logger.debug("GET (sample) -> %s | timeout=%dms", url, budget_ms)
        response = await asyncio.wait_for(client.send(request, stream=True, follow_redirects=True), budget_s)
    except (asyncio.TimeoutError, httpx.TimeoutException):
        logger.warning("Sampling %s timed out after %dms", url, budget_ms)
        return SampleResult(error=f"Audio sampling timeout after {budget_ms}ms", timed_out=True)
    except httpx.HTTPError as e:
        logger.warning("Sampling %s failed: %s", url, e)
        return SampleResult(error=f"Audio sampling failed: {e}")

    try:
        if response.status_code not in (200, 206):
            return SampleResult(
                headers=response.headers,
                status_code=response.status_code,
                error=f"HTTP {response.status_code}: {response.reason_phrase}",
            )
        buffer, read_timed_out = await _read_sample(response)
    except httpx.HTTPError as e:
        logger.warning("Sampling %s failed: %s", url, e)
        return SampleResult(error=f"Audio sampling failed: {e}")
    finally:
        await response.aclose()

    logger.debug(
        "GET (sample) <- %s | status=%d bytes=%d read_timed_out=%s",
        url,
        response.status_code,
        len(buffer),
        read_timed_out,
    )
    if buffer:
        return SampleResult(
            buffer=buffer,
            headers=response.headers,
            status_code=response.status_code,
            read_timed_out=read_timed_out,
        )
    if read_timed_out:
        error = f"Read timeout after {STREAM_READ_TIMEOUT}ms with no data"
    else:
        error = "No data received from stream"
    return SampleResult(
        headers=response.headers,
        status_code=response.status_code,
        error=error,
        timed_out=read_timed_out,
        read_timed_out=read_timed_out,
    )
