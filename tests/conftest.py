import pandas as pd
import pytest

from dashboard.app import create_dashboard_app
from fraudview.ingestion.data_simulator import TransactionSimulator
from fraudview.ml.model_trainer import ScoringPipeline
from fraudview.processing.feature_engine import FeatureEngine

PIPELINE_CONFIG = {
    "simulator": {"count": 1000, "seed": 2025, "fraud_rate": 0.1},
    "model": {"model_type": "xgboost"},
}


@pytest.fixture
def simulator():
    """Simulator with default regions and distribution settings."""
    return TransactionSimulator({"count": 200, "seed": 7, "fraud_rate": 0.1})


@pytest.fixture
def feature_engine():
    return FeatureEngine()


@pytest.fixture
def sample_frame():
    """Hand-written unscored frame covering every region."""
    return pd.DataFrame(
        {
            "amount": [12.5, 48.0, 950.0, 22.1, 31.7, 7.99],
            "region": ["APAC", "EMEA", "LATAM", "NA", "EMEA", "APAC"],
            "oauth_valid": [True, True, False, True, False, True],
            "two_fa_passed": [True, False, False, True, True, True],
            "fraud_label": [False, False, True, False, True, False],
            "fraud_probability": [float("nan")] * 6,
        }
    )


@pytest.fixture(scope="session")
def scoring_pipeline():
    """Pipeline run once for the whole session: 1000 records, seed 2025."""
    pipeline = ScoringPipeline(PIPELINE_CONFIG)
    pipeline.run()
    return pipeline


@pytest.fixture(scope="session")
def scored_dataset(scoring_pipeline):
    return scoring_pipeline.dataset


@pytest.fixture
def client(scored_dataset):
    """Flask test client over the session's scored dataset."""
    app = create_dashboard_app(PIPELINE_CONFIG, scored_dataset)
    app.config["TESTING"] = True
    with app.test_client() as test_client:
        yield test_client
