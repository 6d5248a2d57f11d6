"""Custom middleware components."""

from recipe_generator.core.middleware.logging import LoggingMiddleware
from recipe_generator.core.middleware.request_id import RequestIDMiddleware
from recipe_generator.core.middleware.timing import TimingMiddleware


__all__ = [
    "LoggingMiddleware",
    "RequestIDMiddleware",
    "TimingMiddleware",
]
