"""
Transaction data model for the fraud view dashboard.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .fraud_score import RiskLevel

# First label is the reference category dropped by the one-hot encoder
DEFAULT_REGIONS: Tuple[str, ...] = ("APAC", "EMEA", "LATAM", "NA")

TRANSACTION_COLUMNS = [
    "amount",
    "region",
    "oauth_valid",
    "two_fa_passed",
    "fraud_label",
    "fraud_probability",
]


@dataclass
class ScoredTransaction:
    """A synthetic transaction, optionally carrying its fraud probability."""

    amount: float
    region: str
    oauth_valid: bool
    two_fa_passed: bool
    fraud_label: bool
    fraud_probability: Optional[float] = None

    def __post_init__(self):
        """Validate transaction data after initialization."""
        if not self.amount > 0:
            raise ValueError(f"Transaction amount must be positive: {self.amount}")

        if self.fraud_probability is not None:
            if math.isnan(self.fraud_probability) or not (
                0.0 <= self.fraud_probability <= 1.0
            ):
                raise ValueError(
                    f"Fraud probability outside [0, 1]: {self.fraud_probability}"
                )

    @property
    def is_scored(self) -> bool:
        return self.fraud_probability is not None

    @property
    def risk_level(self) -> Optional[RiskLevel]:
        """Risk band of the fraud probability, None before scoring."""
        if self.fraud_probability is None:
            return None
        return RiskLevel.from_probability(self.fraud_probability)

    def to_dict(self) -> Dict[str, Any]:
        """Convert transaction to dictionary for serialization."""
        risk_level = self.risk_level
        return {
            "amount": self.amount,
            "region": self.region,
            "oauth_valid": self.oauth_valid,
            "two_fa_passed": self.two_fa_passed,
            "fraud_label": self.fraud_label,
            "fraud_probability": self.fraud_probability,
            "risk_level": risk_level.value if risk_level else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScoredTransaction":
        """Create transaction from dictionary."""
        fraud_probability = data.get("fraud_probability")
        if fraud_probability is not None:
            fraud_probability = float(fraud_probability)
            # pandas stores unscored rows as NaN
            if math.isnan(fraud_probability):
                fraud_probability = None

        return cls(
            amount=float(data["amount"]),
            region=str(data["region"]),
            oauth_valid=bool(data.get("oauth_valid", False)),
            two_fa_passed=bool(data.get("two_fa_passed", False)),
            fraud_label=bool(data.get("fraud_label", False)),
            fraud_probability=fraud_probability,
        )
