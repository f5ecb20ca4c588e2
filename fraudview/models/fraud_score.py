"""
Fraud score risk bands.
"""

from enum import Enum
from typing import Dict


class RiskLevel(Enum):
    """Risk level enumeration."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @classmethod
    def from_probability(cls, fraud_probability: float) -> "RiskLevel":
        """Map a fraud probability onto its risk band."""
        if fraud_probability < 0.3:
            return cls.LOW
        elif fraud_probability < 0.5:
            return cls.MEDIUM
        elif fraud_probability < 0.8:
            return cls.HIGH
        else:
            return cls.CRITICAL

    @classmethod
    def empty_distribution(cls) -> Dict[str, int]:
        """Zero count for every band, in band order."""
        return {level.value: 0 for level in cls}
