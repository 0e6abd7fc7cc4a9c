"""
Unit tests for descriptor resolution, header validation and outcome helpers.
"""

import pytest
from pydantic import ValidationError

from latency_probe.model import (
    BatchMode,
    BatchOutcome,
    DescriptorError,
    GetRequest,
    PostRequest,
    ProbeConfig,
    RequestDescriptor,
    ResultRecord,
    Status,
)


def test_resolve_get():
    call = RequestDescriptor(url="http://example.test/ok", method="get").resolve()
    assert call == GetRequest(url="http://example.test/ok")


def test_resolve_post_keeps_payload():
    payload = {"a": [1, 2, {"b": None}]}
    call = RequestDescriptor(url="http://example.test/echo", method="post", data=payload).resolve()
    assert isinstance(call, PostRequest)
    assert call.body == payload


@pytest.mark.parametrize("method", ["put", "GET", None, 3])
def test_resolve_rejects_unsupported_method(method):
    with pytest.raises(DescriptorError, match="method error"):
        RequestDescriptor(url="http://example.test/ok", method=method).resolve()


@pytest.mark.parametrize("url", [None, 42, ["http://example.test"], {"u": 1}])
def test_resolve_rejects_non_string_url(url):
    with pytest.raises(DescriptorError, match="url type error"):
        RequestDescriptor(url=url, method="get").resolve()


def test_as_dict_is_exactly_the_input():
    raw = {"url": "http://example.test/ok", "method": "get", "note": "extra key"}
    assert RequestDescriptor.model_validate(raw).as_dict() == raw


def test_headers_validated():
    ok = ProbeConfig(sync_list=[], async_list=[], headers={"X-Token": "abc\tdef"})
    assert ok.headers == {"X-Token": "abc\tdef"}

    with pytest.raises(ValidationError, match="invalid header name"):
        ProbeConfig(sync_list=[], async_list=[], headers={"Bad Header": "x"})
    with pytest.raises(ValidationError, match="invalid value"):
        ProbeConfig(sync_list=[], async_list=[], headers={"X-Token": "a\r\nInjected: 1"})


def test_outcome_helpers():
    d = RequestDescriptor(url="http://example.test/ok", method="get")
    outcome = BatchOutcome(
        mode=BatchMode.SEQUENTIAL,
        results=[
            ResultRecord(request=d, dur=0.1, status=Status.SUCCESS),
            ResultRecord(request=d, dur=0.9, status=Status.FAIL, error="boom"),
            ResultRecord(request=d, dur=1.2, status=Status.SUCCESS),
        ],
        total=2.2,
    )
    assert outcome.succeeded == 2
    assert outcome.failed == 1
    assert [r.dur for r in outcome.slow(0.8)] == [0.9, 1.2]
