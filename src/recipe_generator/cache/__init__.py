"""Request rate limiting."""

from recipe_generator.cache.rate_limit import (
    limiter,
    rate_limit_exceeded_handler,
    rate_limit_generation,
    setup_rate_limiting,
)


__all__ = [
    "limiter",
    "rate_limit_exceeded_handler",
    "rate_limit_generation",
    "setup_rate_limiting",
]
