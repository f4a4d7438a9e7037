"""
Subscription validation entry point.
"""

import time
from datetime import datetime
from typing import Optional

from shared.config import BaseConfig
from shared.logging import get_logger, set_subscription_context
from shared.metrics import MetricsCollector
from .errors import FailureKind, SubscriptionValidationError
from .rules.engine import SubscriptionRuleEngine
from .store.base import SubscriptionStore
from .store.fetcher import SubscriptionFetcher


class SubscriptionValidator:
    """Fetches a customer's subscription and judges the remaining allowance."""

    def __init__(
        self,
        store: Optional[SubscriptionStore],
        config: Optional[BaseConfig] = None,
        engine: Optional[SubscriptionRuleEngine] = None,
        metrics: Optional[MetricsCollector] = None
    ):
        config = config or BaseConfig()
        self.fetcher = SubscriptionFetcher(
            store,
            namespace=config.subscription_namespace,
            key_delimiter=config.subscription_key_delimiter
        )
        self.engine = engine or SubscriptionRuleEngine()
        self.metrics = metrics
        self.logger = get_logger("subscriptions.validator")

    def validate(self, customer_number: str, service_name: str, now: Optional[datetime] = None) -> int:
        """Return the allowance left for the customer on the service.

        Raises SubscriptionValidationError for every rejection; store errors
        other than a missing record propagate unchanged.
        """
        start_time = time.time()
        outcome = "error"
        set_subscription_context(customer_number, service_name)

        try:
            record = self.fetcher.fetch(customer_number, service_name)
            allowance = self.engine.evaluate(record, now)
            if allowance <= 0:
                raise SubscriptionValidationError(FailureKind.EXPIRED)

            outcome = "granted"
            self.logger.info("Subscription validated", allowance=allowance)
            return allowance

        except SubscriptionValidationError as e:
            outcome = e.code
            self.logger.info("Subscription validation failed", code=e.code)
            raise

        finally:
            set_subscription_context(None, None)
            if self.metrics is not None:
                self.metrics.record_validation(outcome, time.time() - start_time)


def validate(
    store: Optional[SubscriptionStore],
    customer_number: str,
    service_name: str,
    now: Optional[datetime] = None
) -> int:
    """Validate a subscription against ``store`` with default settings."""
    return SubscriptionValidator(store).validate(customer_number, service_name, now)
