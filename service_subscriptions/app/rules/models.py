"""
Subscription data models for Subscriptions Service.
"""

import json
from typing import Dict, Any, Optional, Union
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from enum import IntEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class BillingModel(IntEnum):
    """Billing model codes as written by the provisioning system."""
    TIME_WINDOW = 1         # quota + fixed window, duration <= end - start
    QUOTA_ONLY = 2          # quota only, never expires
    INTERVAL_RECURRING = 3  # quota re-granted every N months inside the window


class SubscriptionStatus(IntEnum):
    """Subscription status codes."""
    PENDING = 1
    ACTIVE = 2
    CANCELLED = 3
    SUSPENDED = 4


class SubscriptionRecord(BaseModel):
    """Snapshot of one customer's entitlement to one service.

    Field aliases follow the persisted record; Python names are used in code.
    Billing model and status are kept as raw codes so that an unknown code
    reaches the rule engine instead of failing decode. Hour, month and trial
    counts are unsigned; a negative value fails decode.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    uuid: str = ""
    package_id: str = ""
    start_date: datetime = EPOCH
    end_date: datetime = EPOCH
    billing_model: int = Field(0, alias="type")
    meta: Dict[str, Any] = Field(default_factory=dict)
    duration_hours: int = Field(0, ge=0, alias="duration")
    interval_months: int = Field(0, ge=0, alias="interval_time")
    quota: int = 0
    base_price: Decimal = Field(Decimal("0"), alias="old_price")
    customer_number: str = ""
    service_name: str = Field("", alias="service")
    status: int = 0
    has_trial: bool = Field(False, alias="have_trial_package")
    trial_allowance: int = Field(0, ge=0, alias="trial_duration")

    @field_validator("start_date", "end_date")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        # A null field keeps its zero value, as the provisioning system writes it
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data

    @property
    def billing_kind(self) -> Optional[BillingModel]:
        """The billing model, or None for an unknown code."""
        try:
            return BillingModel(self.billing_model)
        except ValueError:
            return None

    @property
    def is_active(self) -> bool:
        return self.status == SubscriptionStatus.ACTIVE

    @property
    def window_hours(self) -> int:
        """Length of the subscription window in whole hours, truncated toward zero."""
        return int((self.end_date - self.start_date).total_seconds() / 3600)

    @classmethod
    def from_raw(cls, raw: Union[bytes, str]) -> Optional["SubscriptionRecord"]:
        """Decode a stored payload. Returns None when the payload is JSON null.

        Raises ValueError (json or pydantic) for malformed payloads.
        """
        payload = json.loads(raw)
        if payload is None:
            return None
        return cls.model_validate(payload)

    def to_raw(self) -> str:
        """Encode in the persisted shape."""
        return self.model_dump_json(by_alias=True)


@dataclass
class EvaluationResult:
    """Result of rule evaluation."""
    allowance: int
    billing_model: BillingModel
    effective_duration_hours: Optional[int] = None
    evaluation_time_ms: float = 0.0
