"""
Observability module.

Provides structured logging, correlation ID tracking and request logging
middleware.
"""
