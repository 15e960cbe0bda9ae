"""Exponential backoff helpers for retrying API calls."""

from __future__ import annotations

import asyncio
import dataclasses
import random
from dataclasses import dataclass
from datetime import timedelta
from typing import Awaitable, Callable, TypeVar

T = TypeVar("T")

_NETWORK_MARKERS = ("connection", "timeout", "network")
_SERVER_MARKERS = ("500", "502", "503")
_RATE_LIMIT_MARKERS = ("429", "rate limit", "529")


@dataclass
class RetryConfig:
    """How many times to retry and how long to wait between attempts."""

    max_retries: int = 3
    base_delay_ms: int = 1000
    max_delay_ms: int = 30000
    jitter: bool = True

    def without_jitter(self) -> "RetryConfig":
        return dataclasses.replace(self, jitter=False)


def calculate_delay(attempt: int, config: RetryConfig) -> timedelta:
    """Delay before retry number ``attempt`` (0-based), capped, plus up to 25% jitter."""
    delay = int(min(config.base_delay_ms * 2.0**attempt, float(config.max_delay_ms)))
    jitter_amount = int(delay * 0.25 * random.randrange(100) / 100.0) if config.jitter else 0
    return timedelta(milliseconds=delay + jitter_amount)


async def retry_with_backoff(config: RetryConfig, func: Callable[[], Awaitable[T]]) -> T:
    """Await ``func()`` until it succeeds, retrying any exception up to ``max_retries`` times."""
    attempt = 0
    while True:
        try:
            return await func()
        except Exception:
            if attempt >= config.max_retries:
                raise
        await asyncio.sleep(calculate_delay(attempt, config).total_seconds())
        attempt += 1


def _is_transient(error: Exception) -> bool:
    text = str(error)
    return any(marker in text for marker in _NETWORK_MARKERS + _SERVER_MARKERS + _RATE_LIMIT_MARKERS)


async def retry_api_call(config: RetryConfig, func: Callable[[], Awaitable[T]]) -> T:
    """Like :func:`retry_with_backoff`, but only network, server and rate-limit errors are retried."""
    attempt = 0
    while True:
        attempt += 1
        try:
            return await func()
        except Exception as exc:
            if not _is_transient(exc) or attempt > config.max_retries:
                raise
        await asyncio.sleep(calculate_delay(attempt - 1, config).total_seconds())