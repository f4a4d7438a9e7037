"""
Rule evaluation engine for Subscriptions Service.
"""

import time
from datetime import datetime, timezone
from typing import Optional

from shared.logging import get_logger
from ..errors import FailureKind, SubscriptionValidationError
from .models import BillingModel, EvaluationResult, SubscriptionRecord


def _utc(now: Optional[datetime]) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now


class SubscriptionRuleEngine:
    """Judges a subscription snapshot under its billing model.

    The engine holds no state between calls: the same record and the same
    ``now`` always produce the same allowance or the same failure.
    """

    def __init__(self):
        self.logger = get_logger("subscriptions.rule_engine")

    def evaluate(self, record: SubscriptionRecord, now: Optional[datetime] = None) -> int:
        """Return the allowance granted by ``record`` at ``now``."""
        return self.evaluate_detailed(record, now).allowance

    def evaluate_detailed(self, record: SubscriptionRecord, now: Optional[datetime] = None) -> EvaluationResult:
        """Evaluate ``record`` and report the billing model and effective duration."""
        start_time = time.time()
        now = _utc(now)

        try:
            self._check_preconditions(record)

            billing_model = record.billing_kind
            if billing_model == BillingModel.QUOTA_ONLY:
                allowance, effective = self._evaluate_quota(record), None
            elif billing_model == BillingModel.TIME_WINDOW:
                allowance, effective = self._evaluate_time_window(record, now)
            elif billing_model == BillingModel.INTERVAL_RECURRING:
                allowance, effective = self._evaluate_interval(record, now)
            else:
                raise self._reject(FailureKind.INVALID_TYPE, billing_model=record.billing_model)

        except SubscriptionValidationError as e:
            self.logger.warning(
                "Subscription rejected",
                uuid=record.uuid,
                code=e.code,
                details=e.details
            )
            raise

        result = EvaluationResult(
            allowance=allowance,
            billing_model=billing_model,
            effective_duration_hours=effective,
            evaluation_time_ms=(time.time() - start_time) * 1000
        )

        self.logger.debug(
            "Subscription evaluation result",
            uuid=record.uuid,
            billing_model=billing_model.name,
            allowance=result.allowance,
            effective_duration_hours=result.effective_duration_hours
        )

        return result

    def _check_preconditions(self, record: SubscriptionRecord):
        """Checks shared by every billing model, in order."""
        if not record.is_active:
            raise self._reject(FailureKind.INACTIVE_SUBSCRIPTION, status=record.status)

        if record.base_price <= 0:
            raise self._reject(FailureKind.INVALID_PRICE, base_price=str(record.base_price))

        if record.quota <= 0:
            raise self._reject(FailureKind.INVALID_QUOTA, quota=record.quota)

    def _evaluate_quota(self, record: SubscriptionRecord) -> int:
        """Quota-only subscriptions never expire; time fields must be unset."""
        if record.duration_hours != 0:
            raise self._reject(FailureKind.INVALID_DURATION, duration_hours=record.duration_hours)

        if record.interval_months != 0:
            raise self._reject(FailureKind.INVALID_INTERVAL_TIME, interval_months=record.interval_months)

        allowance = record.quota
        if record.has_trial:
            allowance += self._trial_allowance(record)

        return allowance

    def _evaluate_time_window(self, record: SubscriptionRecord, now: datetime):
        """Fixed window: the duration must fit inside [start_date, end_date]."""
        self._check_window(record, now)

        if record.interval_months != 0:
            raise self._reject(FailureKind.INVALID_INTERVAL_TIME, interval_months=record.interval_months)

        if record.duration_hours <= 0:
            raise self._reject(FailureKind.INVALID_DURATION, duration_hours=record.duration_hours)

        effective = record.duration_hours
        if record.has_trial:
            effective += self._trial_allowance(record)

        window_hours = record.window_hours
        if record.duration_hours > window_hours:
            raise self._reject(
                FailureKind.INVALID_DURATION,
                duration_hours=record.duration_hours,
                window_hours=window_hours
            )

        # The quota is the granted allowance; the trial-adjusted duration is informational.
        return record.quota, effective

    def _evaluate_interval(self, record: SubscriptionRecord, now: datetime):
        """Recurring: duration must equal the number of intervals in the window."""
        self._check_window(record, now)

        if record.interval_months <= 0:
            raise self._reject(FailureKind.INVALID_INTERVAL_TIME, interval_months=record.interval_months)

        range_hours = record.window_hours
        interval_hours = record.interval_months * now.day * 24
        intervals = range_hours // interval_hours

        if record.duration_hours <= 0 or record.duration_hours != intervals:
            raise self._reject(
                FailureKind.INVALID_DURATION,
                duration_hours=record.duration_hours,
                computed_intervals=intervals
            )

        return record.quota, intervals

    def _check_window(self, record: SubscriptionRecord, now: datetime):
        if record.start_date > now or record.end_date < now or record.end_date < record.start_date:
            raise self._reject(
                FailureKind.INVALID_DATE,
                start_date=record.start_date.isoformat(),
                end_date=record.end_date.isoformat(),
                now=now.isoformat()
            )

    def _trial_allowance(self, record: SubscriptionRecord) -> int:
        if record.trial_allowance == 0:
            raise self._reject(FailureKind.INVALID_TRIAL_DURATION)
        return record.trial_allowance

    @staticmethod
    def _reject(kind: FailureKind, **details) -> SubscriptionValidationError:
        return SubscriptionValidationError(kind, details=details)
