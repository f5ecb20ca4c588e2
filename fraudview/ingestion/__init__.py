"""
Synthetic data generation for the fraud view dashboard.
"""

from .data_simulator import TransactionSimulator

__all__ = ["TransactionSimulator"]
