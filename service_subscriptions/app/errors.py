"""
Failure kinds raised by subscription validation.
"""

from enum import Enum
from typing import Dict, Any, Optional

from shared.errors import AccessLayerException, ErrorCategory


class FailureKind(str, Enum):
    """Why a subscription did not grant an allowance."""
    INVALID_PARAMS = "validate:invalidParams"
    UNREGISTERED = "validate:unregistered"
    WRONG_CUSTOMER = "validate:wrongCustomer"
    WRONG_DATA = "validate:wrongData"
    INACTIVE_SUBSCRIPTION = "validate:inactiveSubscription"
    INVALID_PRICE = "validate:invalidPrice"
    INVALID_QUOTA = "validate:invalidQuota"
    INVALID_DURATION = "validate:invalidDuration"
    INVALID_INTERVAL_TIME = "validate:invalidIntervalTime"
    INVALID_DATE = "validate:invalidDate"
    INVALID_TRIAL_DURATION = "validate:invalidTrialDuration"
    INVALID_TYPE = "validate:invalidType"
    EXPIRED = "validate:expired"

    @property
    def category(self) -> ErrorCategory:
        return _KIND_CATEGORY.get(self, ErrorCategory.FORBIDDEN)


_KIND_CATEGORY = {
    FailureKind.INVALID_PARAMS: ErrorCategory.BAD_REQUEST,
    FailureKind.WRONG_CUSTOMER: ErrorCategory.BAD_REQUEST,
    FailureKind.WRONG_DATA: ErrorCategory.INTERNAL_SERVER_ERROR,
}

_KIND_MESSAGE = {
    FailureKind.INVALID_PARAMS: "Customer number and service name are required",
    FailureKind.UNREGISTERED: "Customer has no subscription to this service",
    FailureKind.WRONG_CUSTOMER: "Stored subscription belongs to another customer or service",
    FailureKind.WRONG_DATA: "Stored subscription could not be decoded",
    FailureKind.INACTIVE_SUBSCRIPTION: "Subscription is not active",
    FailureKind.INVALID_PRICE: "Subscription price is not positive",
    FailureKind.INVALID_QUOTA: "Subscription quota is not positive",
    FailureKind.INVALID_DURATION: "Subscription duration is invalid",
    FailureKind.INVALID_INTERVAL_TIME: "Subscription interval is invalid",
    FailureKind.INVALID_DATE: "Subscription is outside its validity window",
    FailureKind.INVALID_TRIAL_DURATION: "Trial package has no allowance",
    FailureKind.INVALID_TYPE: "Unknown billing model",
    FailureKind.EXPIRED: "Subscription has no allowance left",
}


class SubscriptionValidationError(AccessLayerException):
    """A subscription check failed with a specific kind."""

    def __init__(self, kind: FailureKind, message: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        self.kind = kind
        super().__init__(kind.value, message or _KIND_MESSAGE[kind], details)

    @property
    def category(self) -> ErrorCategory:
        return self.kind.category

    def __repr__(self) -> str:
        return f"SubscriptionValidationError({self.kind.value!r})"
