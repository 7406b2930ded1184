"""Tests for sampling.py - DataSampler."""

import numpy as np
import pandas as pd
import pytest

from tree_surrogate import DataSampler
from tree_surrogate.sampling import as_frame


@pytest.fixture()
def frame():
    rng = np.random.RandomState(0)
    return pd.DataFrame(rng.normal(size=(50, 3)), columns=["a", "b", "c"])


class TestDataSampler:
    def test_array_gets_default_names(self):
        sampler = DataSampler(np.zeros((10, 2)))
        assert sampler.feature_names == ("x0", "x1")
        assert sampler.n_rows == 10

    def test_array_with_names(self):
        sampler = DataSampler(np.zeros((10, 2)), feature_names=["u", "v"])
        assert sampler.feature_names == ("u", "v")

    def test_name_count_mismatch(self):
        with pytest.raises(ValueError, match="feature names"):
            DataSampler(np.zeros((10, 2)), feature_names=["u"])

    def test_frame_column_selection(self, frame):
        sampler = DataSampler(frame, feature_names=["c", "a"])
        assert sampler.feature_names == ("c", "a")

    def test_empty_dataset(self):
        with pytest.raises(ValueError, match="no rows"):
            DataSampler(pd.DataFrame({"a": []}))

    def test_sample_size_and_index(self, frame):
        sample = DataSampler(frame).sample(20, random_state=1)
        assert len(sample) == 20
        assert list(sample.index) == list(range(20))
        assert list(sample.columns) == ["a", "b", "c"]

    def test_without_replacement_by_default(self, frame):
        sample = DataSampler(frame).sample(50, random_state=1)
        assert not sample.duplicated().any()

    def test_with_replacement_when_larger(self, frame):
        sample = DataSampler(frame).sample(120, random_state=1)
        assert len(sample) == 120

    def test_same_seed_same_rows(self, frame):
        sampler = DataSampler(frame)
        pd.testing.assert_frame_equal(
            sampler.sample(15, random_state=7), sampler.sample(15, random_state=7)
        )

    def test_invalid_size(self, frame):
        with pytest.raises(ValueError, match="sample size"):
            DataSampler(frame).sample(0)

    def test_does_not_modify_input(self, frame):
        original = frame.copy()
        DataSampler(frame).sample(10, random_state=0)
        pd.testing.assert_frame_equal(frame, original)

    def test_integer_columns_become_strings(self):
        sampler = DataSampler(pd.DataFrame(np.zeros((10, 3))))
        assert sampler.feature_names == ("0", "1", "2")
        assert list(sampler.sample(5, random_state=0).columns) == ["0", "1", "2"]


class TestAsFrame:
    def test_integer_columns_match_string_names(self):
        X = pd.DataFrame(np.arange(12.0).reshape(4, 3))
        frame = as_frame(X, ("2", "0"))
        assert list(frame.columns) == ["2", "0"]
        np.testing.assert_allclose(frame["2"], X[2])

    def test_keeps_index(self, frame):
        subset = frame.iloc[5:8]
        assert list(as_frame(subset, ("a",)).index) == [5, 6, 7]
