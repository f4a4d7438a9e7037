"""
Subscriptions service for the Payment Access Layer.
"""

from typing import Dict, Optional

from fastapi import Path
from pydantic import BaseModel, Field

from shared.base_service import BaseService
from shared.config import ServiceConfig
from .store.base import SubscriptionStore
from .store.redis_store import RedisSubscriptionStore
from .validator import SubscriptionValidator


class ValidationResponse(BaseModel):
    """Response model for a granted subscription check."""
    customer_number: str = Field(..., description="Customer number")
    service_name: str = Field(..., description="Service name")
    allowance: int = Field(..., ge=1, description="Remaining quota or hours")


class SubscriptionsService(BaseService):
    """Subscriptions service implementation."""

    def __init__(self, store: Optional[SubscriptionStore] = None, config: Optional[ServiceConfig] = None):
        super().__init__("subscriptions", 8013, config=config)

        self.store = store if store is not None else RedisSubscriptionStore.from_config(self.config)
        self.validator = SubscriptionValidator(self.store, config=self.config, metrics=self.metrics)

        self._setup_subscription_routes()

    def _setup_subscription_routes(self):
        """Set up subscription-specific routes."""

        @self.app.get("/")
        def root():
            """Root endpoint."""
            return {
                "service": "subscriptions",
                "message": "Payment Access Layer - Subscriptions Service",
                "version": "1.0.0",
                "capabilities": ["quota_only", "time_window", "interval_recurring"]
            }

        @self.app.get(
            "/subscriptions/{customer_number}/{service_name}/validate",
            response_model=ValidationResponse
        )
        def validate_subscription(
            customer_number: str = Path(..., description="Customer number"),
            service_name: str = Path(..., description="Service name")
        ):
            """Check whether the customer may use the service right now."""
            allowance = self.validator.validate(customer_number, service_name)
            return ValidationResponse(
                customer_number=customer_number,
                service_name=service_name,
                allowance=allowance
            )

    def _check_dependencies(self) -> Dict[str, str]:
        health_check = getattr(self.store, "health_check", None)
        if health_check is None:
            return {}
        return {"redis": "ok" if health_check() else "error"}


def create_app(store: Optional[SubscriptionStore] = None, config: Optional[ServiceConfig] = None):
    """Create subscriptions service application."""
    service = SubscriptionsService(store=store, config=config)
    return service.app


if __name__ == "__main__":
    service = SubscriptionsService()
    service.run()
