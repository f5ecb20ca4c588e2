"""
Data simulator for generating synthetic authentication-aware transactions.
"""

import logging
import math
import numbers
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd

from ..exceptions import GenerationError
from ..models.transaction import (
    DEFAULT_REGIONS,
    TRANSACTION_COLUMNS,
    ScoredTransaction,
)


class TransactionSimulator:
    """Generates a fixed-size synthetic transaction set with a minority fraud label."""

    def __init__(self, config: Dict[str, Any] = None):
        """Initialize the transaction simulator."""
        self.config = config or {}
        self.logger = logging.getLogger(__name__)

        # Run defaults
        self.count = self.config.get("count", 1000)
        self.seed = self.config.get("seed", 2025)
        self.fraud_rate = self.config.get("fraud_rate", 0.1)

        # Category set, labels held as strings like the generated column
        self.regions = tuple(
            str(region) for region in self.config.get("regions", DEFAULT_REGIONS)
        )
        if not self.regions:
            raise GenerationError("Simulator needs at least one region")
        if len(set(self.regions)) != len(self.regions):
            raise GenerationError(f"Duplicate region labels: {list(self.regions)}")

        # Amount mixture
        self.amount_params = self._load_amount_params()

        # Authentication coin flips
        self.oauth_valid_rate = self.config.get("oauth_valid_rate", 0.9)
        self.two_fa_pass_rate = self.config.get("two_fa_pass_rate", 0.85)

        # Fraud sampling weights
        self.risk_weights = self._define_risk_weights()

        self._validate_settings()

    def _load_amount_params(self) -> Dict[str, float]:
        """Load log-normal mixture parameters for transaction amounts."""
        defaults = {
            "normal_mean": 3.5,  # ~33 USD median
            "normal_sigma": 0.6,
            "outlier_mean": 6.0,  # ~400 USD median
            "outlier_sigma": 0.8,
            "outlier_share": 0.05,
        }
        return {**defaults, **self.config.get("amount", {})}

    def _define_risk_weights(self) -> Dict[str, float]:
        """Relative weights used when picking which records carry the fraud label."""
        defaults = {
            "outlier_amount": 6.0,
            "oauth_invalid": 4.0,
            "two_fa_failed": 3.0,
        }
        return {**defaults, **self.config.get("risk_weights", {})}

    @staticmethod
    def _is_number(value: Any) -> bool:
        return (
            isinstance(value, numbers.Real)
            and not isinstance(value, bool)
            and math.isfinite(value)
        )

    def _validate_settings(self):
        """Reject distribution settings that cannot produce a valid frame."""
        rates = {
            "outlier_share": self.amount_params["outlier_share"],
            "oauth_valid_rate": self.oauth_valid_rate,
            "two_fa_pass_rate": self.two_fa_pass_rate,
        }
        for name, rate in rates.items():
            if not self._is_number(rate) or not 0.0 <= rate <= 1.0:
                raise GenerationError(f"{name} must be within [0, 1], got {rate!r}")

        for name, weight in self.risk_weights.items():
            if not self._is_number(weight) or weight <= 0:
                raise GenerationError(
                    f"risk_weights.{name} must be positive, got {weight!r}"
                )

    @staticmethod
    def fraud_count(count: int, fraud_rate: float) -> int:
        """Exact number of positive labels for a run."""
        return int(round(count * fraud_rate))

    def _validate_arguments(self, count: Any, seed: Any, fraud_rate: Any):
        """Reject invalid generation arguments at call time."""
        if isinstance(count, bool) or not isinstance(count, numbers.Integral):
            raise GenerationError(f"count must be an integer, got {count!r}")
        if count <= 0:
            raise GenerationError(f"count must be positive, got {count}")

        if isinstance(seed, bool) or not isinstance(seed, numbers.Integral):
            raise GenerationError(f"seed must be an integer, got {seed!r}")
        if seed < 0:
            raise GenerationError(f"seed must be non-negative, got {seed}")

        if isinstance(fraud_rate, bool) or not isinstance(fraud_rate, numbers.Real):
            raise GenerationError(f"fraud_rate must be a number, got {fraud_rate!r}")
        if math.isnan(fraud_rate) or not 0.0 <= fraud_rate <= 1.0:
            raise GenerationError(f"fraud_rate must be within [0, 1], got {fraud_rate}")

    def generate_frame(
        self,
        count: Optional[int] = None,
        seed: Optional[int] = None,
        fraud_rate: Optional[float] = None,
    ) -> pd.DataFrame:
        """Generate an unscored transaction frame."""
        count = self.count if count is None else count
        seed = self.seed if seed is None else seed
        fraud_rate = self.fraud_rate if fraud_rate is None else fraud_rate
        self._validate_arguments(count, seed, fraud_rate)

        rng = np.random.default_rng(int(seed))
        params = self.amount_params

        # Amounts from a two-component log-normal mixture
        is_outlier = rng.random(count) < params["outlier_share"]
        normal = rng.lognormal(params["normal_mean"], params["normal_sigma"], count)
        outlier = rng.lognormal(params["outlier_mean"], params["outlier_sigma"], count)
        amounts = np.maximum(np.round(np.where(is_outlier, outlier, normal), 2), 0.01)

        regions = rng.choice(np.array(self.regions, dtype=object), size=count)
        oauth_valid = rng.random(count) < self.oauth_valid_rate
        two_fa_passed = rng.random(count) < self.two_fa_pass_rate

        fraud_label = self._assign_fraud_labels(
            rng, count, fraud_rate, is_outlier, oauth_valid, two_fa_passed
        )

        frame = pd.DataFrame(
            {
                "amount": amounts,
                "region": regions.astype(str).astype(object),
                "oauth_valid": oauth_valid,
                "two_fa_passed": two_fa_passed,
                "fraud_label": fraud_label,
                "fraud_probability": np.full(count, np.nan),
            },
            columns=TRANSACTION_COLUMNS,
        )

        self.logger.info(
            f"Generated {count} transactions (seed={seed}, "
            f"fraud={int(fraud_label.sum())}, rate={fraud_rate:.3f})"
        )
        return frame

    def _assign_fraud_labels(
        self,
        rng: np.random.Generator,
        count: int,
        fraud_rate: float,
        is_outlier: np.ndarray,
        oauth_valid: np.ndarray,
        two_fa_passed: np.ndarray,
    ) -> np.ndarray:
        """Pick exactly round(count * fraud_rate) positives, biased toward risky records."""
        labels = np.zeros(count, dtype=bool)
        n_fraud = self.fraud_count(count, fraud_rate)
        if n_fraud == 0:
            return labels

        weights = np.ones(count)
        weights[is_outlier] *= self.risk_weights["outlier_amount"]
        weights[~oauth_valid] *= self.risk_weights["oauth_invalid"]
        weights[~two_fa_passed] *= self.risk_weights["two_fa_failed"]

        fraud_indices = rng.choice(
            count, size=n_fraud, replace=False, p=weights / weights.sum()
        )
        labels[fraud_indices] = True
        return labels

    def generate_transactions(
        self,
        count: Optional[int] = None,
        seed: Optional[int] = None,
        fraud_rate: Optional[float] = None,
    ) -> List[ScoredTransaction]:
        """Generate multiple transactions as model objects."""
        frame = self.generate_frame(count=count, seed=seed, fraud_rate=fraud_rate)
        return [
            ScoredTransaction.from_dict(record)
            for record in frame.to_dict(orient="records")
        ]
