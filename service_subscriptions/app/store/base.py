"""
Store boundary for serialized subscription records.
"""

from typing import Protocol, Union


class RecordNotFound(LookupError):
    """Raised by a store when no record exists under the requested key."""

    def __init__(self, namespace: str, key: str):
        self.namespace = namespace
        self.key = key
        super().__init__(f"{namespace}: no record for key {key!r}")


class SubscriptionStore(Protocol):
    """Read access to subscription records grouped under a namespace."""

    def get_record(self, namespace: str, key: str) -> Union[bytes, str]:
        """Return the raw record or raise RecordNotFound."""
        ...
