"""
HTTP helpers shared by the check functions
"""

import asyncio
import time

from typing import Optional

import aiohttp

from ragcheck.logging_config import get_logger

# Anything a check turns into a failed result instead of raising.
# pydantic's ValidationError and UnicodeDecodeError are both ValueErrors.
REQUEST_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError, ValueError)

logger = get_logger(__name__)


class Fetched:
    """A completed HTTP exchange"""
    def __init__(self, url: str, status: int, text: str, elapsed: float):
        self.url = url
        self.status = status
        self.text = text
        self.elapsed = elapsed

    @property
    def is_success(self) -> bool:
        return 200 <= self.status < 300

    @property
    def is_http_error(self) -> bool:
        # curl -f treats 400 and above as a failed transfer
        return self.status >= 400

    def record(self) -> dict:
        """Fields for a CheckResult"""
        return {"url": self.url, "status_code": self.status, "response_time": self.elapsed}


async def fetch(session: aiohttp.ClientSession, method: str, url: str,
                headers: Optional[dict] = None, json: Optional[dict] = None) -> Fetched:
    start_time = time.time()
    logger.debug(f"{method} {url}")

    async with session.request(method, url, headers=headers, json=json) as response:
        # Undecodable bytes are echoed replaced, like curl prints whatever arrived
        text = await response.text(errors="replace")
        elapsed = time.time() - start_time
        logger.debug(f"{method} {url} -> {response.status} ({elapsed:.3f}s)")
        return Fetched(url, response.status, text, elapsed)


def describe_error(exc: BaseException) -> str:
    message = str(exc)
    if not message:
        return type(exc).__name__
    return f"{type(exc).__name__}: {message}"


def first_line(text: str, limit: int = 200) -> str:
    text = text.strip().splitlines()[0] if text.strip() else ""
    if len(text) > limit:
        return text[:limit] + "..."
    return text
