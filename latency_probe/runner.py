"""
Batch runner: drive a list of descriptors through :func:`execute`.

* ``run_sequential`` awaits each request before starting the next one.
* ``run_concurrent`` launches every request at once and joins them all.

Both return one :class:`ResultRecord` per descriptor, in input order, plus the
wall-clock time of the whole batch. One ``httpx.AsyncClient`` is shared by all
requests of a batch; the header mapping is only ever read.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Mapping, Optional, Sequence

import httpx

from latency_probe.executor import execute
from latency_probe.model import BatchMode, BatchOutcome, RequestDescriptor, ResultRecord

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


def _client(timeout: Optional[float], transport: Optional[httpx.AsyncBaseTransport]) -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=timeout, transport=transport)


async def run_sequential(
    descriptors: Sequence[RequestDescriptor],
    headers: Mapping[str, str],
    *,
    timeout: Optional[float] = DEFAULT_TIMEOUT,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> BatchOutcome:
    """Execute *descriptors* one at a time, in order."""
    logger.info("sequential batch: %d requests", len(descriptors))
    results: list[ResultRecord] = []
    async with _client(timeout, transport) as client:
        start = time.perf_counter()
        for item in descriptors:
            results.append(await execute(client, item, headers))
        total = time.perf_counter() - start
    return _finish(BatchMode.SEQUENTIAL, results, total)


async def run_concurrent(
    descriptors: Sequence[RequestDescriptor],
    headers: Mapping[str, str],
    *,
    timeout: Optional[float] = DEFAULT_TIMEOUT,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> BatchOutcome:
    """Execute all *descriptors* together and wait for every one of them."""
    logger.info("concurrent batch: %d requests", len(descriptors))
    async with _client(timeout, transport) as client:
        start = time.perf_counter()
        # gather keeps launch order in its result list
        results = await asyncio.gather(*(execute(client, item, headers) for item in descriptors))
        total = time.perf_counter() - start
    return _finish(BatchMode.CONCURRENT, list(results), total)


async def run_batch(
    mode: BatchMode,
    descriptors: Sequence[RequestDescriptor],
    headers: Mapping[str, str],
    **kwargs,
) -> BatchOutcome:
    if mode is BatchMode.SEQUENTIAL:
        return await run_sequential(descriptors, headers, **kwargs)
    return await run_concurrent(descriptors, headers, **kwargs)


def _finish(mode: BatchMode, results: list[ResultRecord], total: float) -> BatchOutcome:
    outcome = BatchOutcome(mode=mode, results=results, total=total)
    logger.info(
        "%s batch done in %.3fs: %d success, %d fail",
        mode.value, total, outcome.succeeded, outcome.failed,
    )
    return outcome
