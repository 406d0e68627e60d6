"""Core business logic layer.

Subpackages:
- menu: heuristic weekly menu generation and per-slot regeneration
- recipes: recipe builder for generated meals and the ingredient assistant
- shopping: shopping list aggregation and cleanup
- gamification: challenge selection and achievement rules
"""
__all__ = ["menu", "recipes", "shopping", "gamification"]
