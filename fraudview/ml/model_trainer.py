"""
ML model trainer and scoring pipeline for fraud detection.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd
from sklearn.ensemble import RandomForestClassifier
from sklearn.metrics import (
    average_precision_score,
    confusion_matrix,
    roc_auc_score,
)
import xgboost as xgb

from ..exceptions import DegenerateLabelError, ModelNotTrainedError
from ..ingestion.data_simulator import TransactionSimulator
from ..processing.feature_engine import FeatureEngine


class FraudDetectionModelTrainer:
    """Trainer for the fraud probability classifier."""

    def __init__(self, config: Dict[str, Any] = None):
        """Initialize the model trainer."""
        self.config = config or {}
        self.logger = logging.getLogger(__name__)

        # Model configuration
        self.model_type = self.config.get("model_type", "xgboost")
        self.random_state = self.config.get("random_state", 42)

        # Model parameters
        self.model_params = self.config.get("model_params", {})

        self.model = None
        self.effective_params: Dict[str, Any] = {}
        self.feature_names: List[str] = []
        self.training_results: Dict[str, Any] = {}

    def _create_model(self):
        """Create model based on configuration."""
        if self.model_type == "xgboost":
            default_params = {
                "n_estimators": 10,
                "max_depth": 4,
                "learning_rate": 0.3,
                "random_state": self.random_state,
                "eval_metric": "logloss",
                "n_jobs": 1,
            }
            params = {**default_params, **self.model_params}
            self.effective_params = params
            return xgb.XGBClassifier(**params)

        elif self.model_type == "random_forest":
            default_params = {
                "n_estimators": 100,
                "max_depth": 10,
                "min_samples_split": 2,
                "min_samples_leaf": 1,
                "random_state": self.random_state,
                "n_jobs": 1,
            }
            params = {**default_params, **self.model_params}
            self.effective_params = params
            return RandomForestClassifier(**params)

        else:
            raise ValueError(f"Unsupported model type: {self.model_type}")

    def _validate_labels(self, X: np.ndarray, y: np.ndarray):
        """Reject label sets that cannot train a binary classifier."""
        if len(y) == 0:
            raise DegenerateLabelError("Cannot train on an empty label set")

        if len(X) != len(y):
            raise DegenerateLabelError(
                f"Feature rows ({len(X)}) and labels ({len(y)}) differ in length"
            )

        classes = np.unique(y)
        if len(classes) < 2:
            raise DegenerateLabelError(
                f"Labels contain a single class ({classes[0]!r}); "
                f"need both fraud and non-fraud examples"
            )

    def train_model(self, X: pd.DataFrame, y: pd.Series) -> Dict[str, Any]:
        """Fit the classifier on the full set and report in-sample metrics."""
        X_values = np.asarray(X, dtype=np.float64)
        y_values = np.asarray(y).astype(int)
        self._validate_labels(X_values, y_values)

        if isinstance(X, pd.DataFrame):
            self.feature_names = [str(column) for column in X.columns]
        else:
            self.feature_names = [f"f{i}" for i in range(X_values.shape[1])]

        self.logger.info(
            f"Training {self.model_type} model on {len(y_values)} samples "
            f"with {X_values.shape[1]} features"
        )

        # Training and inference share the same rows
        self.model = self._create_model()
        self.model.fit(X_values, y_values)

        y_pred_proba = self.predict_proba(X_values)
        y_pred = (y_pred_proba >= 0.5).astype(int)

        metrics = self._calculate_metrics(y_values, y_pred, y_pred_proba)

        self.training_results = {
            "model_type": self.model_type,
            "train_score": metrics["accuracy"],
            "metrics": metrics,
            "feature_importance": self._get_feature_importance(),
            "training_date": datetime.utcnow().isoformat(),
            "n_samples": int(len(y_values)),
            "n_features": int(X_values.shape[1]),
            "fraud_rate": float(np.mean(y_values)),
        }

        self.logger.info(
            f"Training completed. In-sample accuracy: {metrics['accuracy']:.3f}, "
            f"ROC AUC: {metrics['roc_auc']:.3f}"
        )

        return self.training_results

    def _calculate_metrics(
        self, y_true: np.ndarray, y_pred: np.ndarray, y_pred_proba: np.ndarray
    ) -> Dict[str, float]:
        """Calculate model performance metrics."""
        metrics = {}

        # Basic metrics
        metrics["accuracy"] = float(np.mean(y_true == y_pred))
        metrics["precision"] = float(
            np.sum((y_true == 1) & (y_pred == 1)) / max(1, np.sum(y_pred == 1))
        )
        metrics["recall"] = float(
            np.sum((y_true == 1) & (y_pred == 1)) / max(1, np.sum(y_true == 1))
        )
        metrics["f1_score"] = (
            2
            * (metrics["precision"] * metrics["recall"])
            / max(1e-8, metrics["precision"] + metrics["recall"])
        )

        # AUC metrics
        metrics["roc_auc"] = float(roc_auc_score(y_true, y_pred_proba))
        metrics["average_precision"] = float(
            average_precision_score(y_true, y_pred_proba)
        )

        # Confusion matrix
        tn, fp, fn, tp = confusion_matrix(y_true, y_pred, labels=[0, 1]).ravel()
        metrics["true_negatives"] = int(tn)
        metrics["false_positives"] = int(fp)
        metrics["false_negatives"] = int(fn)
        metrics["true_positives"] = int(tp)

        # Additional metrics
        metrics["false_positive_rate"] = float(fp / max(1, fp + tn))
        metrics["false_negative_rate"] = float(fn / max(1, fn + tp))

        return metrics

    def _get_feature_importance(self) -> Dict[str, float]:
        """Get feature importance scores."""
        if self.model is None or not hasattr(self.model, "feature_importances_"):
            return {}

        importance = self.model.feature_importances_
        feature_importance = {
            feature_name: float(importance[i])
            for i, feature_name in enumerate(self.feature_names)
        }

        # Sort by importance
        return dict(
            sorted(feature_importance.items(), key=lambda x: x[1], reverse=True)
        )

    def predict_proba(self, features) -> np.ndarray:
        """Fraud probability per row, clipped to [0, 1]."""
        if self.model is None:
            raise ModelNotTrainedError("Model not trained")

        probabilities = self.model.predict_proba(
            np.asarray(features, dtype=np.float64)
        )[:, 1]
        return np.clip(probabilities.astype(np.float64), 0.0, 1.0)

    def get_model_info(self) -> Dict[str, Any]:
        """Get information about the current model."""
        if self.model is None:
            return {"status": "no_model"}

        return {
            "status": "trained",
            "model_type": self.model_type,
            "model_params": self.effective_params,
            "feature_names": self.feature_names,
            "n_features": len(self.feature_names),
        }


@dataclass
class ScoredDataset:
    """The scored transaction frame held for the lifetime of the process."""

    frame: pd.DataFrame
    categories: List[str]
    training_results: Dict[str, Any] = field(default_factory=dict)
    model_info: Dict[str, Any] = field(default_factory=dict)

    @property
    def size(self) -> int:
        return len(self.frame)


class ScoringPipeline:
    """Generate, encode, train and score once at start-up."""

    def __init__(self, config: Dict[str, Any] = None):
        """Initialize the scoring pipeline."""
        self.config = config or {}
        self.logger = logging.getLogger(__name__)

        simulator_config = self.config.get("simulator", {})
        self.simulator = TransactionSimulator(simulator_config)
        self.feature_engine = FeatureEngine(self.simulator.regions)
        self.trainer = FraudDetectionModelTrainer(self.config.get("model", {}))

        self.dataset: Optional[ScoredDataset] = None

    def run(
        self,
        count: Optional[int] = None,
        seed: Optional[int] = None,
        fraud_rate: Optional[float] = None,
    ) -> ScoredDataset:
        """Complete pipeline from synthetic data to a scored frame."""
        self.logger.info("Starting scoring pipeline")

        frame = self.simulator.generate_frame(
            count=count, seed=seed, fraud_rate=fraud_rate
        )

        # Train on the full frame
        features = self.feature_engine.build_features(frame)
        training_results = self.trainer.train_model(features, frame["fraud_label"])

        scored = frame.copy()
        scored["fraud_probability"] = self.trainer.predict_proba(features)

        self.dataset = ScoredDataset(
            frame=scored,
            categories=list(self.feature_engine.categories),
            training_results=training_results,
            model_info=self.trainer.get_model_info(),
        )

        self.logger.info(
            f"Scoring pipeline completed: {self.dataset.size} transactions, "
            f"mean fraud probability {scored['fraud_probability'].mean():.3f}"
        )
        return self.dataset

    def score(self, frame: pd.DataFrame) -> pd.DataFrame:
        """Score a frame with the fitted model, returning a scored copy."""
        features = self.feature_engine.build_features(frame)
        scored = frame.copy()
        scored["fraud_probability"] = self.trainer.predict_proba(features)
        return scored
