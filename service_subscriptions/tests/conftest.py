"""
Shared fixtures and factories for Subscriptions Service tests.
"""

import json
import uuid
import pytest
from typing import Dict, Any, Optional, Union
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from service_subscriptions.app.rules.models import (
    BillingModel, SubscriptionRecord, SubscriptionStatus
)
from service_subscriptions.app.store.base import RecordNotFound


FIXED_NOW = datetime(2024, 3, 10, 12, 0, tzinfo=timezone.utc)


class SubscriptionRecordFactory:
    """Factory for creating subscription records."""

    @staticmethod
    def create(
        customer_number: str = "CUST-001",
        service_name: str = "voice",
        billing_model: Union[BillingModel, int] = BillingModel.QUOTA_ONLY,
        **overrides
    ) -> SubscriptionRecord:
        fields: Dict[str, Any] = {
            "uuid": str(uuid.uuid4()),
            "package_id": "PKG-001",
            "customer_number": customer_number,
            "service_name": service_name,
            "billing_model": int(billing_model),
            "status": int(SubscriptionStatus.ACTIVE),
            "base_price": Decimal("9.99"),
            "quota": 10,
        }
        fields.update(overrides)
        return SubscriptionRecord(**fields)

    @classmethod
    def quota_only(cls, quota: int = 10, **overrides) -> SubscriptionRecord:
        return cls.create(billing_model=BillingModel.QUOTA_ONLY, quota=quota, **overrides)

    @classmethod
    def time_window(
        cls,
        now: datetime = FIXED_NOW,
        hours_before: int = 10,
        hours_after: int = 10,
        duration_hours: int = 5,
        **overrides
    ) -> SubscriptionRecord:
        overrides.setdefault("start_date", now - timedelta(hours=hours_before))
        overrides.setdefault("end_date", now + timedelta(hours=hours_after))
        return cls.create(
            billing_model=BillingModel.TIME_WINDOW,
            duration_hours=duration_hours,
            **overrides
        )

    @classmethod
    def interval_recurring(
        cls,
        now: datetime = FIXED_NOW,
        hours_before: int = 240,
        hours_after: int = 480,
        interval_months: int = 1,
        duration_hours: int = 3,
        **overrides
    ) -> SubscriptionRecord:
        overrides.setdefault("start_date", now - timedelta(hours=hours_before))
        overrides.setdefault("end_date", now + timedelta(hours=hours_after))
        return cls.create(
            billing_model=BillingModel.INTERVAL_RECURRING,
            interval_months=interval_months,
            duration_hours=duration_hours,
            **overrides
        )

    @staticmethod
    def create_payload(**fields) -> Dict[str, Any]:
        """Create a record payload in the persisted shape."""
        payload = {
            "uuid": "6f1c2b9e-0000-4000-8000-000000000001",
            "package_id": "PKG-001",
            "start_date": "2024-03-01T00:00:00Z",
            "end_date": "2024-04-01T00:00:00Z",
            "type": int(BillingModel.QUOTA_ONLY),
            "meta": None,
            "duration": 0,
            "interval_time": 0,
            "quota": 10,
            "old_price": 9.99,
            "customer_number": "CUST-001",
            "service": "voice",
            "status": int(SubscriptionStatus.ACTIVE),
            "have_trial_package": False,
            "trial_duration": 0,
        }
        payload.update(fields)
        return payload


class InMemorySubscriptionStore:
    """Dictionary-backed store for tests."""

    def __init__(self, records: Optional[Dict[str, Dict[str, Union[bytes, str]]]] = None):
        self.records = records or {}
        self.calls = []

    def put(self, namespace: str, key: str, value: Union[SubscriptionRecord, Dict[str, Any], bytes, str]):
        if isinstance(value, SubscriptionRecord):
            value = value.to_raw()
        elif isinstance(value, dict):
            value = json.dumps(value)
        self.records.setdefault(namespace, {})[key] = value

    def get_record(self, namespace: str, key: str) -> Union[bytes, str]:
        self.calls.append((namespace, key))
        try:
            return self.records[namespace][key]
        except KeyError:
            raise RecordNotFound(namespace, key)


@pytest.fixture
def now():
    """Fixed evaluation time (the 10th of the month)."""
    return FIXED_NOW


@pytest.fixture
def record_factory():
    """Subscription record factory."""
    return SubscriptionRecordFactory


@pytest.fixture
def store():
    """Empty in-memory subscription store."""
    return InMemorySubscriptionStore()
