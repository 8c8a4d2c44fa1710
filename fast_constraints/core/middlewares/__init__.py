from .handle_exceptions_middleware import HandleExceptionsMiddleware

__all__ = [
    "HandleExceptionsMiddleware",
]
