"""Redis-backed implementation of CounterStore."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import redis

from storefront.domain.exceptions import StoreUnavailable
from storefront.domain.repository.counter_store import CounterStore


@contextmanager
def _store_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except redis.RedisError as exc:
        raise StoreUnavailable(f"Redis {operation} failed: {exc}") from exc


class RedisCounterStore(CounterStore):

    def __init__(self, client: redis.Redis) -> None:
        self._client = client

    @classmethod
    def connect(
        cls,
        url: str | None = None,
        *,
        host: str = "localhost",
        port: int = 6379,
        username: str | None = None,
        password: str | None = None,
        socket_timeout: float = 0.5,
    ) -> RedisCounterStore:
        """Build a client with short timeouts. No connection is made yet."""
        options = dict(
            socket_timeout=socket_timeout,
            socket_connect_timeout=socket_timeout,
            decode_responses=True,
        )
        if url:
            client = redis.Redis.from_url(url, **options)
        else:
            client = redis.Redis(
                host=host, port=port, username=username, password=password, **options
            )
        return cls(client)

    # --- CounterStore interface -----------------------------------------------

    def get(self, key: str) -> str | None:
        with _store_errors("GET"):
            value = self._client.get(key)
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        return value

    def set(self, key: str, value: str, ttl_seconds: int, only_if_absent: bool = False) -> bool:
        with _store_errors("SET"):
            written = self._client.set(key, value, ex=ttl_seconds, nx=only_if_absent)
        return bool(written)

    def increment(self, key: str, ttl_seconds: int) -> int:
        # EXPIRE NX only touches a key without an expiry, i.e. one INCR just created.
        with _store_errors("INCR"):
            with self._client.pipeline(transaction=True) as pipe:
                pipe.incr(key)
                pipe.expire(key, ttl_seconds, nx=True)
                count, _ = pipe.execute()
        return int(count)

    def delete(self, key: str) -> None:
        with _store_errors("DEL"):
            self._client.delete(key)

    def ttl_remaining(self, key: str) -> int | None:
        with _store_errors("TTL"):
            ttl = self._client.ttl(key)
        # -2: no such key, -1: no expiry
        if ttl is None or ttl < 0:
            return None
        return int(ttl)
