"""Core business logic layer.

Subpackages:
- units: unit conversion, rounding and display formatting
- recipes: sub-recipe graph analysis, ingredient resolution, recipe import
- shopping: grocery list aggregation and list helpers
"""
__all__ = ["units", "recipes", "shopping"]
