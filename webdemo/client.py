"""
Outbound HTTP client pool.

httpx.Client already keeps a connection pool per instance; ClientPool keeps a
small free list of those instances so callers can acquire one, use it and
hand it back instead of building a fresh client per request.
"""

import threading

import httpx

DEFAULT_TIMEOUT = 10.0
MAX_IDLE_CLIENTS = 4


class ClientPool:
    def __init__(self, max_idle: int = MAX_IDLE_CLIENTS, **client_kwargs):
        self.max_idle = max_idle
        self.client_kwargs = client_kwargs
        self.client_kwargs.setdefault("timeout", DEFAULT_TIMEOUT)
        self.client_kwargs.setdefault("follow_redirects", True)
        self._idle: list[httpx.Client] = []
        self._lock = threading.Lock()

    def acquire(self) -> httpx.Client:
        with self._lock:
            while self._idle:
                client = self._idle.pop()
                if not client.is_closed:
                    return client
        return httpx.Client(**self.client_kwargs)

    def release(self, client: httpx.Client) -> None:
        if client.is_closed:
            return
        with self._lock:
            if len(self._idle) < self.max_idle:
                self._idle.append(client)
                return
        client.close()

    def idle_count(self) -> int:
        with self._lock:
            return len(self._idle)

    def close(self) -> None:
        with self._lock:
            idle, self._idle = self._idle, []
        for client in idle:
            client.close()


_default_pool = ClientPool()


def acquire_client() -> httpx.Client:
    return _default_pool.acquire()


def release_client(client: httpx.Client) -> None:
    _default_pool.release(client)


def get_string(client: httpx.Client, url: str) -> tuple[int, str]:
    """GET ``url`` and return (status code, body text). Transport errors propagate."""
    resp = client.get(url)
    return resp.status_code, resp.text
