"""
Subscription rules package.

Defines the subscription record model and the rule engine that judges a
record under its billing model, returning the remaining allowance or a
specific failure kind.

Modules of interest:
- models: SubscriptionRecord, BillingModel, SubscriptionStatus and results.
- engine: Precondition checks and per-billing-model evaluation.
"""
