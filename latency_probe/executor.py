"""
Request executor: one descriptor in, one :class:`ResultRecord` out.

``execute`` never raises for a per-request problem. Bad descriptors, transport
errors and non-JSON bodies all end up as ``Status.FAIL`` with the elapsed time
still recorded. The response body is parsed only to confirm it is JSON and is
then dropped.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Mapping, Optional, Union

import httpx

from latency_probe.model import (
    DescriptorError,
    GetRequest,
    PostRequest,
    RequestDescriptor,
    ResultRecord,
    Status,
)

logger = logging.getLogger(__name__)


def _build_request(
    client: httpx.AsyncClient, call: Union[GetRequest, PostRequest], headers: Mapping[str, str]
) -> httpx.Request:
    if isinstance(call, GetRequest):
        return client.build_request("GET", call.url, headers=headers)
    req_headers = httpx.Headers(headers)
    req_headers.setdefault("Content-Type", "application/json")
    # ``null`` is sent when the payload is absent
    return client.build_request(
        "POST", call.url, headers=req_headers, content=json.dumps(call.body).encode()
    )


async def execute(
    client: httpx.AsyncClient,
    descriptor: RequestDescriptor,
    headers: Mapping[str, str],
) -> ResultRecord:
    """Perform the call described by *descriptor* and time it."""
    start = time.perf_counter()
    try:
        call = descriptor.resolve()
    except DescriptorError as exc:
        return _record(descriptor, start, Status.FAIL, error=str(exc))

    try:
        response = await client.send(_build_request(client, call, headers))
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        return _record(descriptor, start, Status.FAIL, error=f"{type(exc).__name__}: {exc}")

    try:
        response.json()
    except (ValueError, RecursionError):  # bad or too deeply nested JSON
        return _record(
            descriptor, start, Status.FAIL,
            status_code=response.status_code, error="response body is not JSON",
        )
    return _record(descriptor, start, Status.SUCCESS, status_code=response.status_code)


def _record(
    descriptor: RequestDescriptor,
    start: float,
    status: Status,
    *,
    status_code: Optional[int] = None,
    error: Optional[str] = None,
) -> ResultRecord:
    dur = time.perf_counter() - start
    logger.debug(
        "%s %s -> %s in %.3fs%s",
        descriptor.method, descriptor.url, status.value, dur,
        f" ({error})" if error else "",
    )
    return ResultRecord(
        request=descriptor, dur=dur, status=status, status_code=status_code, error=error
    )
