"""Reference-data sampling for the surrogate fit."""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np
import pandas as pd
from loguru import logger
from numpy.typing import ArrayLike


def as_frame(X, feature_names: Optional[Sequence[str]] = None) -> pd.DataFrame:
    """Coerce *X* to a DataFrame with string column names.

    Array columns are named ``x0..x{p-1}`` unless *feature_names* is given.
    DataFrame columns are matched against *feature_names* by their string
    form, so a frame with integer columns selects ``"0"``, ``"1"``, ...
    """
    if feature_names is not None:
        feature_names = [str(name) for name in feature_names]
    if isinstance(X, pd.DataFrame):
        frame = X.rename(columns=str)
        if feature_names is not None:
            frame = frame.loc[:, feature_names]
        return frame
    arr = np.asarray(X)
    if arr.ndim == 1:
        arr = arr.reshape(-1, 1)
    if arr.ndim != 2:
        raise ValueError(f"X must be 2-dimensional, got shape {arr.shape}")
    if feature_names is None:
        feature_names = [f"x{i}" for i in range(arr.shape[1])]
    if len(feature_names) != arr.shape[1]:
        raise ValueError(
            f"Got {len(feature_names)} feature names for {arr.shape[1]} columns."
        )
    return pd.DataFrame(arr, columns=list(feature_names))


class DataSampler:
    """Holds the reference dataset and draws row samples from it.

    Parameters
    ----------
    X : DataFrame or array-like of shape (n_rows, n_features)
        Reference data the surrogate sample is drawn from.
    feature_names : sequence of str, optional
        Column names for array input, or a column selection for a DataFrame.
    """

    def __init__(
        self,
        X: ArrayLike,
        feature_names: Optional[Sequence[str]] = None,
    ) -> None:
        self.data = as_frame(X, feature_names)
        if len(self.data) == 0:
            raise ValueError("The reference dataset has no rows.")

    @property
    def n_rows(self) -> int:
        return len(self.data)

    @property
    def feature_names(self) -> tuple[str, ...]:
        return tuple(str(c) for c in self.data.columns)

    def sample(
        self,
        n: int,
        *,
        random_state: Optional[int] = None,
        replace: Optional[bool] = None,
    ) -> pd.DataFrame:
        """Draw *n* rows.

        Rows are drawn without replacement unless *n* exceeds the number of
        available rows (or ``replace=True`` is passed). The returned frame
        has a fresh ``0..n-1`` index.
        """
        if n < 1:
            raise ValueError(f"sample size must be >= 1, got {n!r}")
        if replace is None:
            replace = n > self.n_rows
        rng = np.random.RandomState(random_state)
        idx = rng.choice(self.n_rows, size=n, replace=replace)
        logger.info(
            "Sampled reference rows",
            n=n,
            n_rows=self.n_rows,
            replace=replace,
            random_state=random_state,
        )
        return self.data.iloc[idx].reset_index(drop=True)
