"""
Core data-model classes for the latency probe.

Includes:
* **RequestDescriptor** as loaded from the config file, and its typed form
  **GetRequest** / **PostRequest**.
* **ProbeConfig** (request lists plus the shared header set).
* **ResultRecord** and **BatchOutcome** produced by a batch run.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator

# RFC 7230 token
_HEADER_NAME = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")
# visible ASCII, space and tab only
_HEADER_VALUE_BAD = re.compile(r"[^\t\x20-\x7e]")


class DescriptorError(ValueError):
    """Descriptor cannot be turned into an HTTP call (bad url or method)."""


# Enums

class Status(str, Enum):
    SUCCESS = "success"
    FAIL = "fail"


class BatchMode(str, Enum):
    SEQUENTIAL = "sequential"
    CONCURRENT = "concurrent"


# Typed request variants

class GetRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    method: Literal["get"] = "get"
    url: str


class PostRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    method: Literal["post"] = "post"
    url: str
    body: Any = None  # opaque JSON payload


class RequestDescriptor(BaseModel):
    """One configured request exactly as it appears in the config file.

    Fields are loosely typed on purpose: a wrong ``url`` type or an unknown
    ``method`` is a per-request failure, not a config error.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    url: Any = None
    method: Any = None
    data: Any = None

    def resolve(self) -> Union[GetRequest, PostRequest]:
        """Return the typed request or raise :class:`DescriptorError`."""
        if not isinstance(self.url, str):
            raise DescriptorError(f"url type error: {type(self.url).__name__}")
        if self.method == "get":
            return GetRequest(url=self.url)
        if self.method == "post":
            return PostRequest(url=self.url, body=self.data)
        raise DescriptorError(f"method error: {self.method!r}")

    def as_dict(self) -> Dict[str, Any]:
        """Descriptor with only the keys present in the config file."""
        return self.model_dump(exclude_unset=True)


class ProbeConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    sync_list: List[RequestDescriptor]
    async_list: List[RequestDescriptor]
    headers: Dict[str, str]

    @field_validator("headers")
    @classmethod
    def _check_headers(cls, value: Dict[str, str]) -> Dict[str, str]:
        for name, val in value.items():
            if not _HEADER_NAME.match(name):
                raise ValueError(f"invalid header name {name!r}")
            if _HEADER_VALUE_BAD.search(val):
                raise ValueError(f"invalid value for header {name!r}")
        return value


# Run results

class ResultRecord(BaseModel):
    request: RequestDescriptor
    dur: float  # seconds
    status: Status
    status_code: Optional[int] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is Status.SUCCESS


class BatchOutcome(BaseModel):
    mode: BatchMode
    results: List[ResultRecord] = []
    total: float = 0.0

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.results if r.ok)

    @property
    def failed(self) -> int:
        return len(self.results) - self.succeeded

    def slow(self, threshold: float) -> List[ResultRecord]:
        """Records whose duration exceeds *threshold* seconds."""
        return [r for r in self.results if r.dur > threshold]
