"""
Model training and scoring for the fraud view dashboard.
"""

from .model_trainer import FraudDetectionModelTrainer, ScoredDataset, ScoringPipeline

__all__ = ["FraudDetectionModelTrainer", "ScoredDataset", "ScoringPipeline"]
