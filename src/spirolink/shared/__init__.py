"""Shared utilities: logging, exceptions, middleware."""
