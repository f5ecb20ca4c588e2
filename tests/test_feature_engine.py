import numpy as np
import pandas as pd
import pytest

from fraudview.exceptions import UnknownCategoryError
from fraudview.models.transaction import ScoredTransaction
from fraudview.processing.feature_engine import FeatureEngine


def test_feature_names_drop_reference_region(feature_engine):
    assert feature_engine.reference_category == "APAC"
    assert feature_engine.feature_names == [
        "amount",
        "oauth_valid",
        "two_fa_passed",
        "region_EMEA",
        "region_LATAM",
        "region_NA",
    ]


def test_build_features_one_hot(feature_engine, sample_frame):
    features = feature_engine.build_features(sample_frame)

    assert list(features.columns) == feature_engine.feature_names
    assert features.index.equals(sample_frame.index)
    assert (features.dtypes == np.float64).all()

    region_columns = feature_engine.region_features
    # Reference rows encode to all zeros, every other row has exactly one flag
    apac = sample_frame["region"] == "APAC"
    assert (features.loc[apac, region_columns].sum(axis=1) == 0).all()
    assert (features.loc[~apac, region_columns].sum(axis=1) == 1).all()
    assert features.loc[2, "region_LATAM"] == 1.0
    assert features.loc[3, "region_NA"] == 1.0


def test_booleans_and_amount_pass_through(feature_engine, sample_frame):
    features = feature_engine.build_features(sample_frame)

    assert features["amount"].tolist() == sample_frame["amount"].tolist()
    assert features["oauth_valid"].tolist() == [1.0, 1.0, 0.0, 1.0, 0.0, 1.0]
    assert features["two_fa_passed"].tolist() == [1.0, 0.0, 0.0, 1.0, 1.0, 1.0]


def test_encoding_is_pure(feature_engine):
    transaction = ScoredTransaction(
        amount=120.0,
        region="LATAM",
        oauth_valid=False,
        two_fa_passed=True,
        fraud_label=False,
    )

    first = feature_engine.calculate_features(transaction)
    second = feature_engine.calculate_features(transaction)

    assert first == second
    assert first["region_LATAM"] == 1.0
    assert first["oauth_valid"] == 0.0


def test_single_record_matches_frame_encoding(feature_engine, sample_frame):
    features = feature_engine.build_features(sample_frame)
    record = ScoredTransaction.from_dict(sample_frame.iloc[1].to_dict())

    assert feature_engine.calculate_features(record) == features.iloc[1].to_dict()


def test_encoding_does_not_depend_on_frame_contents(feature_engine, sample_frame):
    full = feature_engine.build_features(sample_frame)
    subset = feature_engine.build_features(sample_frame.iloc[[1]])

    pd.testing.assert_frame_equal(full.iloc[[1]], subset)


def test_unknown_category_fails_fast(feature_engine, sample_frame):
    frame = sample_frame.copy()
    frame.loc[0, "region"] = "MARS"

    with pytest.raises(UnknownCategoryError) as excinfo:
        feature_engine.build_features(frame)

    assert excinfo.value.unknown == ["MARS"]
    assert "MARS" in str(excinfo.value)
    assert isinstance(excinfo.value, ValueError)


def test_unknown_category_single_record(feature_engine):
    transaction = ScoredTransaction(
        amount=5.0,
        region="ANTARCTICA",
        oauth_valid=True,
        two_fa_passed=True,
        fraud_label=False,
    )

    with pytest.raises(UnknownCategoryError):
        feature_engine.calculate_features(transaction)


def test_missing_column_raises(feature_engine, sample_frame):
    with pytest.raises(KeyError):
        feature_engine.build_features(sample_frame.drop(columns=["oauth_valid"]))


@pytest.mark.parametrize("categories", [[], ["A", "B", "A"]])
def test_invalid_category_sets(categories):
    with pytest.raises(ValueError):
        FeatureEngine(categories)


def test_custom_category_set():
    engine = FeatureEngine(["low", "mid", "high"])

    assert engine.feature_names[-2:] == ["region_mid", "region_high"]
    assert engine.get_feature_info()["reference_category"] == "low"
