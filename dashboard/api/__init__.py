"""
Dashboard API package for the fraud view dashboard.
"""

from .charts_api import ChartsAPI, charts_bp
from .transactions_api import TransactionsAPI, transactions_bp

__all__ = ["ChartsAPI", "TransactionsAPI", "charts_bp", "transactions_bp"]
