from sqlbind.adapters.aiosqlite.driver import AiosqliteCursor, AiosqliteDriver, AiosqliteExceptionHandler

__all__ = ("AiosqliteCursor", "AiosqliteDriver", "AiosqliteExceptionHandler")
