"""Executor adapters for async database drivers."""
