import asyncio
import logging
import math
import time
from collections.abc import Awaitable, Callable
from typing import Any

from musicgate.errors import PollTimeoutError
from musicgate.models.job import TaskStatus

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = 300_000
MAX_TIMEOUT_MS = 900_000

DEFAULT_POLL_INTERVAL_MS = 5_000
MIN_POLL_INTERVAL_MS = 1_000
MAX_POLL_INTERVAL_MS = 30_000


def _as_number(raw: Any) -> float | None:
    if isinstance(raw, list):
        raw = raw[0] if raw else None
    if raw is None or isinstance(raw, bool):
        return None
    try:
        n = float(raw)
    except (TypeError, ValueError):
        return None
    return n if math.isfinite(n) else None


def parse_timeout_ms(raw: Any) -> int:
    """Polling budget from caller input. Junk or non-positive input means the default."""
    n = _as_number(raw)
    if n is None or n <= 0:
        return DEFAULT_TIMEOUT_MS
    return int(min(n, MAX_TIMEOUT_MS))


def parse_poll_interval_ms(raw: Any) -> int:
    """Delay between status reads, clamped to [1s, 30s]."""
    n = _as_number(raw)
    if n is None or n <= 0:
        return DEFAULT_POLL_INTERVAL_MS
    return int(min(max(n, MIN_POLL_INTERVAL_MS), MAX_POLL_INTERVAL_MS))


async def poll_until_done(
    fetch: Callable[[str], Awaitable[dict[str, Any]]],
    status_url: str,
    job_id: str | None = None,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
    interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    clock: Callable[[], float] = time.monotonic,
) -> TaskStatus:
    """Read ``status_url`` until the job is done and ok, or the budget runs out.

    Upstream errors from ``fetch`` propagate immediately; only a well-formed
    non-terminal status leads to another read. On timeout the last decoded
    status is attached to the raised ``PollTimeoutError``.
    """
    started = clock()
    last: dict[str, Any] | None = None
    polls = 0

    while (clock() - started) * 1000 < timeout_ms:
        last = await fetch(status_url)
        polls += 1
        status = TaskStatus.from_upstream(last)
        if status.is_done:
            logger.info(f"Job {job_id} done after {polls} poll(s)")
            return status

        logger.info(f"Job {job_id} status: {status.status}, waiting {interval_ms}ms...")
        await sleep(interval_ms / 1000)

    logger.warning(f"Job {job_id} still not done after {timeout_ms}ms ({polls} polls)")
    raise PollTimeoutError(job_id, status_url, last)
