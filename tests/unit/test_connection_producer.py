"""
Unit tests for ConnectionProducer.
"""

import threading
import time

import pytest
from vault_planetscale.adapters.connection_producer import ConnectionProducer, default_client_factory
from vault_planetscale.adapters.memory_passwords import MemoryPasswordAdapter
from vault_planetscale.adapters.planetscale_passwords import PlanetScalePasswordAdapter
from vault_planetscale.domain.config import ConnectionConfig
from vault_planetscale.domain.errors import (
    ClientError,
    ConfigValidationError,
    NotInitializedError,
)


VALID = {
    "organization": "acme",
    "database": "db1",
    "service_token": "tok",
    "token_name": "name",
}


class CountingFactory:
    """Client factory that counts constructions."""

    def __init__(self, delay: float = 0.0):
        self.count = 0
        self.delay = delay
        self._lock = threading.Lock()

    def __call__(self, config):
        with self._lock:
            self.count += 1
        # Widen the window for racing callers
        time.sleep(self.delay)
        return MemoryPasswordAdapter()


def test_init_creates_client():
    factory = CountingFactory()
    producer = ConnectionProducer(client_factory=factory)

    raw = producer.init(ConnectionConfig.from_dict(VALID))

    assert raw == VALID
    assert producer.initialized
    assert factory.count == 1
    assert producer.get_client() is not None
    assert factory.count == 1  # cached


@pytest.mark.parametrize("missing", ["organization", "database", "service_token", "token_name"])
def test_init_rejects_incomplete_config(missing):
    factory = CountingFactory()
    producer = ConnectionProducer(client_factory=factory)

    with pytest.raises(ConfigValidationError):
        producer.init(ConnectionConfig.from_dict({**VALID, missing: ""}))

    assert not producer.initialized
    assert factory.count == 0
    with pytest.raises(NotInitializedError):
        producer.get_client()


def test_get_client_before_init():
    producer = ConnectionProducer(client_factory=CountingFactory())

    with pytest.raises(NotInitializedError):
        producer.get_client()


def test_close_then_recreate():
    """close() forgets the client but leaves it usable for callers holding it."""
    factory = CountingFactory()
    producer = ConnectionProducer(client_factory=factory)
    producer.init(ConnectionConfig.from_dict(VALID))
    first = producer.get_client()

    producer.close()
    producer.close()  # idempotent

    assert not first.closed
    assert producer.initialized
    second = producer.get_client()
    assert second is not first
    assert factory.count == 2


def test_close_without_client():
    producer = ConnectionProducer(client_factory=CountingFactory())
    producer.close()


def test_concurrent_get_client_builds_once():
    """Racing first-time callers observe a single construction."""
    factory = CountingFactory(delay=0.05)
    producer = ConnectionProducer(client_factory=factory)
    producer.init(ConnectionConfig.from_dict(VALID))
    producer.close()
    factory.count = 0

    barrier = threading.Barrier(8)
    results = []

    def worker():
        barrier.wait()
        results.append(producer.get_client())

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert factory.count == 1
    assert len(results) == 8
    assert all(client is results[0] for client in results)


def test_factory_failure_becomes_client_error():
    def broken(config):
        raise RuntimeError("no network")

    producer = ConnectionProducer(client_factory=broken)

    with pytest.raises(ClientError) as exc_info:
        producer.init(ConnectionConfig.from_dict(VALID))

    assert "failed to create planetscale client" in str(exc_info.value)
    assert not producer.initialized


def test_verify_connection_calls_client():
    client = MemoryPasswordAdapter()
    producer = ConnectionProducer(client_factory=lambda config: client)

    producer.init(ConnectionConfig.from_dict(VALID), verify_connection=True)

    assert client.calls_to("verify") == [{"organization": "acme"}]


def test_verify_connection_failure():
    client = MemoryPasswordAdapter(fail_on={"verify": RuntimeError("401 unauthorized")})
    producer = ConnectionProducer(client_factory=lambda config: client)

    with pytest.raises(ClientError):
        producer.init(ConnectionConfig.from_dict(VALID), verify_connection=True)

    assert client.closed
    assert not producer.initialized


def test_redaction_map():
    producer = ConnectionProducer(client_factory=CountingFactory())
    producer.init(ConnectionConfig.from_dict(VALID))

    assert producer.redaction_map() == {"tok": "[ServiceToken]"}
    assert producer.redaction_map() == {"tok": "[ServiceToken]"}


def test_default_factory_builds_http_adapter():
    client = default_client_factory(ConnectionConfig.from_dict(VALID))
    try:
        assert isinstance(client, PlanetScalePasswordAdapter)
    finally:
        client.close()
