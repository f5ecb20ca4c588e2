"""
Data processing components for the fraud view dashboard.
"""

from .feature_engine import FeatureEngine
from .transaction_filter import (
    filter_by_region,
    filter_by_risk_level,
    risk_levels,
    summarize,
)

__all__ = [
    "FeatureEngine",
    "filter_by_region",
    "filter_by_risk_level",
    "risk_levels",
    "summarize",
]
