from sqlbind.adapters.asyncmy.driver import AsyncmyDriver, AsyncmyExceptionHandler, AsyncmyPoolDriver

__all__ = ("AsyncmyDriver", "AsyncmyExceptionHandler", "AsyncmyPoolDriver")
