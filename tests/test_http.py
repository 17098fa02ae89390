import json
from typing import List

import anyio
import httpx
import pytest

from img2code.http import HttpClient, RetryStrategy


def flaky_transport(failures: int, calls: List[httpx.Request]) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        if len(calls) <= failures:
            return httpx.Response(503, json={'message': 'unavailable'})
        return httpx.Response(200, json={'ok': True})

    return httpx.MockTransport(handler)


def test_post_without_retry_raises() -> None:
    calls: List[httpx.Request] = []
    client = HttpClient(transport=flaky_transport(1, calls))
    with pytest.raises(httpx.HTTPStatusError):
        client.post({'url': 'http://test.local/generate', 'json': {}, 'headers': {}})
    assert len(calls) == 1


def test_post_with_retry() -> None:
    calls: List[httpx.Request] = []
    retry = RetryStrategy(min_wait_seconds=0, max_wait_seconds=0, max_attempt=3)
    client = HttpClient(retry=retry, transport=flaky_transport(2, calls))

    response = client.post({'url': 'http://test.local/generate', 'json': {}, 'headers': {}})

    assert response.json() == {'ok': True}
    assert len(calls) == 3


def test_retry_gives_up_with_original_error() -> None:
    calls: List[httpx.Request] = []
    retry = RetryStrategy(min_wait_seconds=0, max_wait_seconds=0, max_attempt=2)
    client = HttpClient(retry=retry, transport=flaky_transport(5, calls))
    with pytest.raises(httpx.HTTPStatusError):
        client.post({'url': 'http://test.local/generate', 'json': {}, 'headers': {}})
    assert len(calls) == 2


def test_retry_setter() -> None:
    client = HttpClient()
    assert client.retry is None
    client.retry = True
    assert client.retry == RetryStrategy()
    client.timeout = 10
    assert client.client.timeout.connect == 10


def test_async_post() -> None:
    calls: List[httpx.Request] = []
    client = HttpClient(transport=flaky_transport(0, calls))
    response = anyio.run(client.async_post, {'url': 'http://test.local/generate', 'json': {'a': 1}, 'headers': {}})
    assert response.json() == {'ok': True}
    assert json.loads(calls[0].content) == {'a': 1}
