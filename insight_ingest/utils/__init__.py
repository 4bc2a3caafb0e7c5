"""
Utilities
=========

Error types, structured logging, Prometheus metrics and input
materialization.
"""
