"""
Subscriptions Service package for the Payment Access Layer.

This package decides whether a customer's subscription to a named service
currently entitles them to use it, and how much allowance remains. It
provides:

- app.validator: The validate operation (fetch, evaluate, judge expiry).
- app.rules: Subscription record model and the billing-model rule engine.
- app.store: Key-value store boundary, Redis store and record fetcher.
- app.errors: Failure kinds and their transport categories.
- app.main: HTTP surface for validation checks and health.

Guidelines:
- The service is read-only; subscriptions are provisioned elsewhere.
- Every call reads a fresh snapshot; nothing is cached between calls.
"""
