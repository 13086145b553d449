from sqlbind.adapters.asyncpg.driver import AsyncpgDriver, AsyncpgExceptionHandler, parse_status

__all__ = ("AsyncpgDriver", "AsyncpgExceptionHandler", "parse_status")
