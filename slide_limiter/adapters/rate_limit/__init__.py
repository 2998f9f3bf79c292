"""Rate limit store adapters.

Stores share one abstract interface so callers can start with the in-process
store and move to Redis without changing call sites.
"""
