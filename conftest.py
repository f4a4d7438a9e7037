"""
Root pytest configuration: makes `shared` and the service packages importable
from a source checkout.
"""
