"""Executor base for bundled adapters."""

from sqlbind.driver._async import AsyncDriverAdapterBase, rows_as_dicts

__all__ = ("AsyncDriverAdapterBase", "rows_as_dicts")
