"""Base JSON-RPC client with retry logic and a shared session"""

import asyncio
import itertools
from typing import Any, List, Optional
from abc import ABC, abstractmethod
import aiohttp
from tenacity import (
    AsyncRetrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)
from tenacity.wait import wait_base
from loguru import logger

from ..exceptions import RPCError

RETRYABLE_STATUSES = {429, 502, 503, 504}


def _is_transient(exc: BaseException) -> bool:
    """Connection drops, timeouts and throttling are retried; everything else is not"""
    if isinstance(exc, aiohttp.ClientResponseError):
        return exc.status in RETRYABLE_STATUSES
    return isinstance(exc, (aiohttp.ClientConnectionError, asyncio.TimeoutError))


class BaseRPCClient(ABC):
    """Base class for JSON-RPC clients sharing one HTTP session"""

    def __init__(
        self,
        rpc_url: str,
        timeout: int = 30,
        max_retries: int = 3,
        max_concurrency: int = 10,
        session: Optional[aiohttp.ClientSession] = None,
        retry_wait: Optional[wait_base] = None,
    ):
        self.rpc_url = rpc_url
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self.retry_wait = retry_wait or wait_exponential(multiplier=1, min=2, max=10)
        self._session = session
        self._owns_session = session is None
        self._semaphore = asyncio.Semaphore(max_concurrency)
        self._ids = itertools.count(1)

    def _get_session(self) -> aiohttp.ClientSession:
        """Lazily open the session shared by every call of this client"""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            )
            self._owns_session = True
        return self._session

    async def close(self):
        """Close the HTTP session if this client opened it"""
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    async def _post(self, payload: dict) -> dict:
        async with self._semaphore:
            session = self._get_session()
            async with session.post(self.rpc_url, json=payload) as response:
                if response.status == 429:
                    logger.warning(f"Rate limited by {self.rpc_url}")
                response.raise_for_status()
                return await response.json(content_type=None)

    async def _request(self, method: str, params: Optional[List[Any]] = None) -> Any:
        """Send a JSON-RPC request, retrying transient transport failures"""
        payload = {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": method,
            "params": params or [],
        }

        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.max_retries),
            wait=self.retry_wait,
            retry=retry_if_exception(_is_transient),
            reraise=True,
        ):
            with attempt:
                try:
                    body = await self._post(payload)
                except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                    logger.error(f"RPC {method} failed: {e!r}")
                    raise

        if not isinstance(body, dict):
            raise RPCError(-32603, f"Malformed JSON-RPC response: {body!r}")
        error = body.get("error")
        if error:
            if not isinstance(error, dict):
                raise RPCError(-32603, str(error))
            raise RPCError(error.get("code", -1), error.get("message", "unknown error"))
        return body.get("result")

    @abstractmethod
    async def eth_call(self, to: str, data: bytes, block: str = "latest") -> bytes:
        """Execute a read-only contract call"""
        pass
