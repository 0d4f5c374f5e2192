from __future__ import annotations

import time
import uuid
from typing import Any, Awaitable, Callable


def _content(resp: Any) -> str:
    content = getattr(resp, "content", None)
    if content is None:
        content = resp if isinstance(resp, str) else str(resp)
    return content


async def timed_generate(
    logger, *, label: str, fn: Callable[[], Awaitable[Any]]
) -> str:
    """
    Await one model call and return its text.

    Every call is logged with a short request id and its latency. Failures
    are logged the same way and re-raised untouched; there is no retry.
    """
    request_id = str(uuid.uuid4())[:8]
    start = time.time()

    try:
        resp = await fn()
    except Exception as e:
        latency = int((time.time() - start) * 1000)
        logger.error(
            f"request_id={request_id} call={label} model_call_failed "
            f"latency_ms={latency} err={type(e).__name__}:{e}"
        )
        raise

    latency = int((time.time() - start) * 1000)
    logger.debug(f"request_id={request_id} call={label} model_call_ok latency_ms={latency}")
    return _content(resp)
