"""
Read-side filtering and summaries over the scored transaction frame.
"""

from typing import Any, Dict, Optional, Sequence

import numpy as np
import pandas as pd

from ..exceptions import UnknownCategoryError
from ..models.fraud_score import RiskLevel


def filter_by_region(
    frame: pd.DataFrame, region: str, categories: Optional[Sequence[str]] = None
) -> pd.DataFrame:
    """Rows whose region equals the selection, in their original order.

    When a category set is given, a label outside it raises
    UnknownCategoryError. A known label with no rows yields an empty frame.
    """
    if categories is not None and region not in categories:
        raise UnknownCategoryError([region], categories)

    return frame[frame["region"] == region]


def risk_levels(frame: pd.DataFrame) -> pd.Series:
    """Risk band label per row; unscored rows map to None."""
    return frame["fraud_probability"].map(
        lambda p: None if pd.isna(p) else RiskLevel.from_probability(p).value
    )


def filter_by_risk_level(frame: pd.DataFrame, risk_level: str) -> pd.DataFrame:
    """Rows whose fraud probability falls in the given risk band."""
    level = RiskLevel(risk_level)
    return frame[risk_levels(frame) == level.value]


def summarize(frame: pd.DataFrame) -> Dict[str, Any]:
    """Headline statistics for a (possibly empty) scored frame."""
    distribution = RiskLevel.empty_distribution()
    for level, count in risk_levels(frame).value_counts().items():
        distribution[level] = int(count)

    if frame.empty:
        return {
            "transaction_count": 0,
            "fraud_count": 0,
            "fraud_rate": 0.0,
            "mean_fraud_probability": None,
            "amount_statistics": {
                "total_amount": 0.0,
                "average_amount": 0.0,
                "min_amount": 0.0,
                "max_amount": 0.0,
            },
            "risk_distribution": distribution,
        }

    amounts = frame["amount"]
    probabilities = frame["fraud_probability"].dropna()
    return {
        "transaction_count": int(len(frame)),
        "fraud_count": int(frame["fraud_label"].sum()),
        "fraud_rate": float(frame["fraud_label"].mean()),
        "mean_fraud_probability": float(probabilities.mean())
        if not probabilities.empty
        else None,
        "amount_statistics": {
            "total_amount": float(np.round(amounts.sum(), 2)),
            "average_amount": float(amounts.mean()),
            "min_amount": float(amounts.min()),
            "max_amount": float(amounts.max()),
        },
        "risk_distribution": distribution,
    }
