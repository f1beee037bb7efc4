"""
Service layer for the user discovery feature.
"""

from .aggregation_engine import AggregationEngine

__all__ = ["AggregationEngine"]
