"""
Data models for the fraud view dashboard.
"""

from .transaction import ScoredTransaction, DEFAULT_REGIONS, TRANSACTION_COLUMNS
from .fraud_score import RiskLevel

__all__ = ["ScoredTransaction", "DEFAULT_REGIONS", "TRANSACTION_COLUMNS", "RiskLevel"]
