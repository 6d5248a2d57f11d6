"""Application lifecycle events."""

from recipe_generator.core.events.lifespan import lifespan


__all__ = ["lifespan"]
