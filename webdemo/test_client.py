"""Tests for the pooled outbound HTTP client."""

import os

import httpx
import pytest

from webdemo.client import ClientPool, acquire_client, get_string, release_client


def _example_handler(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, text="<h1>Example Domain</h1>")


@pytest.fixture
def pool():
    p = ClientPool(max_idle=1, transport=httpx.MockTransport(_example_handler))
    yield p
    p.close()


def test_get_string(pool):
    client = pool.acquire()
    try:
        status, body = get_string(client, "https://example.com")
    finally:
        pool.release(client)
    assert status == 200
    assert "Example Domain" in body


def test_released_client_is_reused(pool):
    first = pool.acquire()
    pool.release(first)
    assert pool.idle_count() == 1
    assert pool.acquire() is first


def test_release_beyond_max_idle_closes_client(pool):
    a, b = pool.acquire(), pool.acquire()
    pool.release(a)
    pool.release(b)
    assert pool.idle_count() == 1
    assert b.is_closed
    assert not a.is_closed


def test_closed_client_is_not_pooled(pool):
    client = pool.acquire()
    client.close()
    pool.release(client)
    assert pool.idle_count() == 0


def test_close_empties_pool(pool):
    client = pool.acquire()
    pool.release(client)
    pool.close()
    assert pool.idle_count() == 0
    assert client.is_closed


def test_transport_errors_propagate():
    def refuse(request):
        raise httpx.ConnectError("refused", request=request)

    p = ClientPool(transport=httpx.MockTransport(refuse))
    client = p.acquire()
    try:
        with pytest.raises(httpx.ConnectError):
            get_string(client, "https://example.com")
    finally:
        p.release(client)
        p.close()


@pytest.mark.skipif(
    os.getenv("WEBDEMO_NETWORK_TESTS") != "1",
    reason="set WEBDEMO_NETWORK_TESTS=1 to hit example.com",
)
def test_client_example_com():
    client = acquire_client()
    try:
        status, body = get_string(client, "https://example.com")
    finally:
        release_client(client)
    assert status == 200
    assert "Example Domain" in body
