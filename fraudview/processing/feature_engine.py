"""
Feature engineering for fraud scoring.
"""

import logging
from typing import Any, Dict, Iterable, Sequence

import numpy as np
import pandas as pd
from sklearn.preprocessing import OneHotEncoder

from ..exceptions import UnknownCategoryError
from ..models.transaction import DEFAULT_REGIONS, ScoredTransaction


class FeatureEngine:
    """One-hot encodes the region and passes the numeric/boolean fields through."""

    numeric_features = ["amount", "oauth_valid", "two_fa_passed"]
    categorical_feature = "region"

    def __init__(self, categories: Sequence[str] = DEFAULT_REGIONS):
        """Initialize the feature engine with a fixed category set."""
        self.logger = logging.getLogger(__name__)

        self.categories = list(categories)
        if not self.categories:
            raise ValueError("Category set must not be empty")
        if len(set(self.categories)) != len(self.categories):
            raise ValueError(f"Duplicate labels in category set: {self.categories}")

        # Fit on the category set alone so the encoding never depends on the data
        self.encoder = OneHotEncoder(
            categories=[self.categories],
            drop="first",
            handle_unknown="error",
            sparse_output=False,
            dtype=np.float64,
        )
        self.encoder.fit(pd.DataFrame({self.categorical_feature: self.categories}))

        self.region_features = list(self.encoder.get_feature_names_out())
        self.feature_names = self.numeric_features + self.region_features

    @property
    def reference_category(self) -> str:
        """Label encoded as all zeros."""
        return self.categories[0]

    def validate_categories(self, values: Iterable[Any]):
        """Fail fast on labels outside the configured category set."""
        unknown = set(values) - set(self.categories)
        if unknown:
            raise UnknownCategoryError(unknown, self.categories)

    def build_features(self, frame: pd.DataFrame) -> pd.DataFrame:
        """Build the feature matrix for a transaction frame."""
        missing = [
            column
            for column in self.numeric_features + [self.categorical_feature]
            if column not in frame.columns
        ]
        if missing:
            raise KeyError(f"Transaction frame is missing columns: {missing}")

        self.validate_categories(frame[self.categorical_feature].unique())

        numeric = frame[self.numeric_features].astype(np.float64)
        encoded = pd.DataFrame(
            self.encoder.transform(frame[[self.categorical_feature]]),
            columns=self.region_features,
            index=frame.index,
        )
        return pd.concat([numeric, encoded], axis=1)

    def calculate_features(self, transaction: ScoredTransaction) -> Dict[str, float]:
        """Calculate all features for a single transaction."""
        frame = pd.DataFrame([transaction.to_dict()])
        row = self.build_features(frame).iloc[0]
        return {name: float(row[name]) for name in self.feature_names}

    def get_feature_info(self) -> Dict[str, Any]:
        return {
            "feature_names": list(self.feature_names),
            "categories": list(self.categories),
            "reference_category": self.reference_category,
        }
