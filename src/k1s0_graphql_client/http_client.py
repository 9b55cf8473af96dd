"""GraphQL HTTP client implementation."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import AsyncIterator, Coroutine
from typing import Any, TypeVar

import httpx

from .client import HTTP_OK, GraphQlClient, check_cancelled, interpret_response
from .codec import encode_request
from .config import GraphQlClientConfig
from .exceptions import CancellationError, ResponseReadError, TransportError
from .request import GraphQlRequest

T = TypeVar("T")
R = TypeVar("R")

JSON_MEDIA_TYPE = "application/json; charset=utf-8"

logger = logging.getLogger(__name__)


class HttpGraphQlClient(GraphQlClient):
    """GraphQL client that POSTs JSON envelopes with httpx.

    Each :meth:`run` makes exactly one HTTP call; nothing is retried.
    """

    def __init__(self, config: GraphQlClientConfig) -> None:
        self._config = config

    @property
    def config(self) -> GraphQlClientConfig:
        return self._config

    @contextlib.asynccontextmanager
    async def _make_client(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._config.transport is not None:
            yield self._config.transport
            return
        async with httpx.AsyncClient(timeout=self._config.timeout_seconds) as client:
            yield client

    def _build_headers(self, request: GraphQlRequest) -> list[tuple[str, str]]:
        headers = [("Content-Type", JSON_MEDIA_TYPE), ("Accept", JSON_MEDIA_TYPE)]
        if self._config.close_connection:
            headers.append(("Connection", "close"))
        headers.extend(request.headers)
        return headers

    async def run(
        self,
        request: GraphQlRequest,
        result_type: type[T] | None = None,
        *,
        cancel: asyncio.Event | None = None,
    ) -> T | None:
        check_cancelled(cancel)

        body = encode_request(request)
        headers = self._build_headers(request)

        async with self._make_client() as client:
            try:
                http_request = client.build_request(
                    "POST", self._config.endpoint, content=body, headers=headers
                )
                logger.debug("POST %s (%d bytes)", self._config.endpoint, len(body))
                response = await _race(
                    client.send(http_request, stream=True),
                    cancel,
                    "request cancelled while in flight",
                )
            except (httpx.HTTPError, httpx.InvalidURL) as e:
                raise TransportError(e) from e

            try:
                content = await _race(
                    response.aread(),
                    cancel,
                    "request cancelled while reading the response",
                )
            except httpx.HTTPError as e:
                raise ResponseReadError(e) from e
            finally:
                await response.aclose()

        logger.debug("%s responded with status %d", self._config.endpoint, response.status_code)
        if response.status_code != HTTP_OK:
            logger.warning(
                "GraphQL endpoint %s returned status %d",
                self._config.endpoint,
                response.status_code,
            )
        return interpret_response(response.status_code, content, result_type)


async def _race(
    work: Coroutine[Any, Any, R],
    cancel: asyncio.Event | None,
    message: str,
) -> R:
    """Await ``work`` unless ``cancel`` is set first.

    Raises:
        CancellationError: If ``cancel`` fired while ``work`` was pending.
    """
    if cancel is None:
        return await work

    work_task = asyncio.ensure_future(work)
    cancel_task = asyncio.ensure_future(cancel.wait())
    try:
        await asyncio.wait({work_task, cancel_task}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        cancel_task.cancel()
        in_flight = not work_task.done()
        if in_flight:
            work_task.cancel()
            await _reap(work_task)

    if in_flight:
        raise CancellationError(message)
    return work_task.result()


async def _reap(task: asyncio.Future[Any]) -> None:
    """Wait for a task cancelled by :func:`_race` to finish unwinding."""
    try:
        await task
    except asyncio.CancelledError:
        current = asyncio.current_task()
        if current is not None and current.cancelling():
            raise
    except httpx.HTTPError:
        # superseded by CancellationError
        pass
