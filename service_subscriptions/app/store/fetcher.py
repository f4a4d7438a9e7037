"""
Record fetcher for Subscriptions Service.
"""

from typing import Optional

from shared.config import DEFAULT_SUBSCRIPTION_NAMESPACE
from shared.logging import get_logger
from ..errors import FailureKind, SubscriptionValidationError
from ..rules.models import SubscriptionRecord
from .base import RecordNotFound, SubscriptionStore


class SubscriptionFetcher:
    """Resolves a (customer number, service name) query to a verified record."""

    def __init__(
        self,
        store: Optional[SubscriptionStore],
        namespace: str = DEFAULT_SUBSCRIPTION_NAMESPACE,
        key_delimiter: str = ""
    ):
        self.store = store
        self.namespace = namespace
        self.key_delimiter = key_delimiter
        self.logger = get_logger("subscriptions.fetcher")

    def composite_key(self, customer_number: str, service_name: str) -> str:
        # With the default empty delimiter "ab"+"c" and "a"+"bc" share a key;
        # the identity check after decoding catches such collisions.
        return f"{customer_number}{self.key_delimiter}{service_name}"

    def fetch(self, customer_number: str, service_name: str) -> SubscriptionRecord:
        """Fetch and verify the subscription record for a customer and service."""
        if self.store is None or not customer_number or not service_name:
            raise SubscriptionValidationError(FailureKind.INVALID_PARAMS)

        key = self.composite_key(customer_number, service_name)

        try:
            raw = self.store.get_record(self.namespace, key)
        except RecordNotFound:
            raise SubscriptionValidationError(
                FailureKind.UNREGISTERED,
                details={"customer_number": customer_number, "service_name": service_name}
            )

        try:
            record = SubscriptionRecord.from_raw(raw)
        except ValueError as e:
            self.logger.error("Failed to decode subscription record", key=key, error=str(e))
            raise SubscriptionValidationError(FailureKind.WRONG_DATA, details={"key": key})

        if record is None:
            self.logger.error("Subscription record is empty", key=key)
            raise SubscriptionValidationError(FailureKind.WRONG_DATA, details={"key": key})

        if record.customer_number != customer_number or record.service_name != service_name:
            self.logger.warning(
                "Subscription record identity mismatch",
                key=key,
                record_customer_number=record.customer_number,
                record_service_name=record.service_name
            )
            raise SubscriptionValidationError(FailureKind.WRONG_CUSTOMER, details={"key": key})

        self.logger.debug("Subscription record fetched", key=key, uuid=record.uuid)
        return record
