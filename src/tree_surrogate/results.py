"""Per-row surrogate diagnostics."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Any, Dict, Sequence, Union

import numpy as np
import pandas as pd

from .response import Response

# Reserved prefixes for the flat table; ".." keeps them clear of feature names.
NODE_COLUMN = "..node"
PATH_COLUMN = "..path"
MODEL_PREFIX = "..y.hat"
TREE_PREFIX = "..y.hat.tree"

Prediction = Union[float, str, Dict[str, float]]


@dataclass(frozen=True)
class SurrogateRecord:
    """Diagnostics for one sampled row.

    Attributes
    ----------
    features : dict
        The row's feature values.
    leaf_id : int
        Leaf of the surrogate tree the row falls into.
    path : str
        Decision path text of that leaf.
    prediction : float, str or dict
        The black-box model's output for the row.
    tree_prediction : float, str or dict
        The surrogate tree's output for the row.
    """

    features: Dict[str, Any]
    leaf_id: int
    path: str
    prediction: Prediction
    tree_prediction: Prediction


class SurrogateResults:
    """Sampled rows together with leaf assignments and both sets of predictions."""

    def __init__(
        self,
        features: pd.DataFrame,
        leaf_ids: Sequence[int],
        paths: Sequence[str],
        response: Response,
        tree_response: Response,
    ) -> None:
        n = len(features)
        if not (len(leaf_ids) == len(paths) == response.n_rows == tree_response.n_rows == n):
            raise ValueError("All per-row inputs must have the same number of rows.")
        self.features = features.reset_index(drop=True)
        self.leaf_ids = np.asarray(leaf_ids, dtype=int)
        self.paths = list(paths)
        self.response = response
        self.tree_response = tree_response

    def __len__(self) -> int:
        return len(self.features)

    @property
    def records(self) -> list[SurrogateRecord]:
        feature_rows = self.features.to_dict(orient="records")
        return [
            SurrogateRecord(
                features=feature_rows[i],
                leaf_id=int(self.leaf_ids[i]),
                path=self.paths[i],
                prediction=self.response.row(i),
                tree_prediction=self.tree_response.row(i),
            )
            for i in range(len(self))
        ]

    def to_frame(self) -> pd.DataFrame:
        """Flat table: features, ``..node``, ``..path``, model and tree predictions.

        Multi-class predictions are spread over ``..y.hat:<class>`` and
        ``..y.hat.tree:<class>`` columns.
        """
        frame = self.features.copy()
        frame[NODE_COLUMN] = self.leaf_ids
        frame[PATH_COLUMN] = self.paths
        for prefix, response in ((MODEL_PREFIX, self.response), (TREE_PREFIX, self.tree_response)):
            matrix = response.as_matrix()
            for j, col in enumerate(response.columns(prefix)):
                frame[col] = matrix[:, j]
        return frame

    def leaf_counts(self) -> Dict[str, int]:
        """Number of sampled rows per decision path."""
        return dict(Counter(self.paths))
