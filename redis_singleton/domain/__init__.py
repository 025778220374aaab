"""Domain layer for the Redis singleton connector.

The domain layer holds the contracts and rules that do not depend on the
redis library:
- Error taxonomy
- Store client and connection manager interfaces
- Value codec strategies
"""
