"""Core business logic layer.

Subpackages:
- shopping: requirement aggregation, pantry shortfall, shopping list reconciliation
- matching: recipe / pantry match scoring
- pantry: pantry analysis helpers
"""
__all__ = ["shopping", "matching", "pantry"]
