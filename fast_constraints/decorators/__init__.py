from .callback_decorator import callback, constrained

__all__ = [
    "callback",
    "constrained",
]
