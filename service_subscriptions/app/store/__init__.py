"""
Store package for Subscriptions Service.

Provides the key-value store boundary used to read serialized subscription
records, a Redis-backed implementation, and the fetcher that turns a
(customer number, service name) query into a verified record.
"""
