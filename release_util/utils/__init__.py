"""
Shared utilities - datetime/duration helpers and structured error handling.
"""
