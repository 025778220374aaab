"""Infrastructure layer for the Redis singleton connector.

The infrastructure layer contains implementations of domain interfaces:
- Redis client adapter (redis.asyncio)
- Connection lifecycle manager and its state machine
- Error handling and connection guard decorators

This layer depends on:
- Domain layer (interfaces, exceptions, codecs)
- External libraries (redis)

But domain layer does NOT depend on infrastructure.
"""
