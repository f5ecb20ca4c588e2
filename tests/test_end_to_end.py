import numpy as np

from fraudview.ingestion.data_simulator import TransactionSimulator
from fraudview.ml.model_trainer import FraudDetectionModelTrainer
from fraudview.processing.feature_engine import FeatureEngine
from fraudview.processing.transaction_filter import filter_by_region


def test_generate_score_filter():
    simulator = TransactionSimulator()
    frame = simulator.generate_frame(count=1000, seed=2025, fraud_rate=0.1)
    assert int(frame["fraud_label"].sum()) == 100

    engine = FeatureEngine(simulator.regions)
    features = engine.build_features(frame)
    trainer = FraudDetectionModelTrainer()
    trainer.train_model(features, frame["fraud_label"])

    scored = frame.assign(fraud_probability=trainer.predict_proba(features))
    probabilities = scored["fraud_probability"].to_numpy()
    assert np.isfinite(probabilities).all()
    assert ((probabilities >= 0.0) & (probabilities <= 1.0)).all()

    subset = filter_by_region(scored, "EMEA", engine.categories)
    assert not subset.empty
    assert (subset["region"] == "EMEA").all()


def test_scored_fraud_ranks_above_legitimate(scored_dataset):
    frame = scored_dataset.frame
    fraud = frame.loc[frame["fraud_label"], "fraud_probability"]
    legit = frame.loc[~frame["fraud_label"], "fraud_probability"]

    assert len(fraud) == 100
    assert fraud.mean() > legit.mean()
    assert scored_dataset.training_results["metrics"]["roc_auc"] > 0.5
