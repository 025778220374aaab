"""Test doubles for unit testing.

Test doubles are fake implementations of interfaces used for testing.
They're faster and more reliable than mocking, and they implement the
actual interface contracts.

We primarily use Fakes because they:
- Actually implement the interface
- Can be reused across many tests
- Provide realistic behavior (a shared in-memory store, lifecycle events)

Example:
    >>> from tests.doubles.fake_store_client import FakeClientFactory
    >>> factory = FakeClientFactory()
    >>> manager = RedisConnectionManager(client_factory=factory)
    >>> await manager.connect()
    >>> assert factory.last_client.is_open
"""
