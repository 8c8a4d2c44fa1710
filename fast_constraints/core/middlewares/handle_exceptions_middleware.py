import logging
import os
from functools import wraps
from typing import Any, Awaitable, Callable

from fast_constraints.exceptions import (
    AppException,
    CallbackFaultException,
    ConstraintConfigurationException,
    HttpException,
    ServerErrorException,
    ValidationFailedException,
)


class HandleExceptionsMiddleware:
    """Converts validation outcomes and failures raised by a handler into JSON responses.

    - `HttpException` and `ValidationFailedException` are returned as-is (422 for violations).
    - Faulty callbacks and unresolvable declarations are developer errors: they are
      logged and answered with a generic 500. With `ENV=debug` they are re-raised.
    """

    async def handle(self, next_handler: Callable[..., Awaitable[Any]], *args, **kwargs) -> Any:
        try:
            return await next_handler(*args, **kwargs)
        except HttpException as e:
            return e.to_response()
        except ValidationFailedException as e:
            return e.to_response()
        except (CallbackFaultException, ConstraintConfigurationException) as e:
            logging.exception("Callback constraint failed while handling request", exc_info=e)
            if os.getenv("ENV") == "debug":
                raise e

            return ServerErrorException(error_type=e.error_type).to_response()
        except AppException as e:
            logging.exception("Application exception while handling request", exc_info=e)
            if os.getenv("ENV") == "debug":
                raise e

            return e.to_response()
        except Exception as e:
            logging.exception("Unhandled exception while handling request", exc_info=e)
            if os.getenv("ENV") == "debug":
                raise e

            return ServerErrorException().to_response()

    def __call__(self, func: Callable[..., Awaitable[Any]]) -> Callable[..., Awaitable[Any]]:
        """Make the middleware usable as a route decorator"""
        @wraps(func)
        async def wrapper(*args, **kwargs):
            return await self.handle(func, *args, **kwargs)
        return wrapper
