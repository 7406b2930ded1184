"""Tagged model-response variants consumed by fit, predict, results and plot."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Union

import numpy as np
import pandas as pd
from sklearn.tree import DecisionTreeClassifier, DecisionTreeRegressor

from .options import TreeOptions


@dataclass(frozen=True, eq=False)
class ScalarResponse:
    """One prediction per row: a numeric value or a class label.

    Attributes
    ----------
    values : ndarray of shape (n_rows,)
    name : str
        Label used when the response needs a name (e.g. the selected class).
    """

    values: np.ndarray
    name: str = "y.hat"

    @property
    def n_rows(self) -> int:
        return len(self.values)

    @property
    def is_categorical(self) -> bool:
        return self.values.dtype.kind not in "biuf"

    @property
    def class_names(self) -> tuple[str, ...]:
        if not self.is_categorical:
            return ()
        return tuple(str(c) for c in np.unique(self.values))

    def target(self) -> np.ndarray:
        return self.values

    def make_tree(self, options: TreeOptions):
        if self.is_categorical:
            return DecisionTreeClassifier(**options.estimator_kwargs())
        return DecisionTreeRegressor(**options.estimator_kwargs())

    def columns(self, prefix: str) -> list[str]:
        return [prefix]

    def as_matrix(self) -> np.ndarray:
        return self.values.reshape(-1, 1)

    def row(self, i: int):
        value = self.values[i]
        return value.item() if isinstance(value, np.generic) else value

    def like(self, values) -> ScalarResponse:
        """A response of the same kind holding *values*."""
        return ScalarResponse(values=np.asarray(values), name=self.name)


@dataclass(frozen=True, eq=False)
class PerClassResponse:
    """One probability column per class.

    Attributes
    ----------
    class_names : tuple of str
    probabilities : ndarray of shape (n_rows, n_classes)
    """

    class_names: tuple[str, ...]
    probabilities: np.ndarray

    @property
    def n_rows(self) -> int:
        return self.probabilities.shape[0]

    @property
    def is_categorical(self) -> bool:
        return False

    def target(self) -> np.ndarray:
        return self.probabilities

    def make_tree(self, options: TreeOptions) -> DecisionTreeRegressor:
        # Multi-output regression: leaf values are the mean probability per class.
        return DecisionTreeRegressor(**options.estimator_kwargs())

    def columns(self, prefix: str) -> list[str]:
        return [f"{prefix}:{c}" for c in self.class_names]

    def as_matrix(self) -> np.ndarray:
        return self.probabilities

    def row(self, i: int) -> Dict[str, float]:
        return {
            c: float(p) for c, p in zip(self.class_names, self.probabilities[i])
        }

    def like(self, values) -> PerClassResponse:
        return PerClassResponse(
            class_names=self.class_names, probabilities=np.asarray(values, dtype=float)
        )

    def argmax_classes(self) -> np.ndarray:
        names = np.asarray(self.class_names, dtype=object)
        return names[np.argmax(self.probabilities, axis=1)]


Response = Union[ScalarResponse, PerClassResponse]


def response_from_output(
    output,
    *,
    class_names: Optional[Sequence[str]] = None,
    class_: Optional[Union[str, int]] = None,
    categorical: bool = False,
) -> Response:
    """Normalise a raw model output into a :data:`Response`.

    Parameters
    ----------
    output : array-like, Series or DataFrame
        1-D output (or a single column) becomes a :class:`ScalarResponse`;
        two or more columns become a :class:`PerClassResponse`.
    class_names : sequence of str, optional
        Names for the output columns. Falls back to DataFrame column names,
        then to ``"0".."k-1"``.
    class_ : str or int, optional
        Select one column of a multi-column output (by name, or by position
        when no name matches) and return it as a scalar response.
    categorical : bool, default False
        Treat a single-column output as class labels even when it is numeric.
    """
    if isinstance(output, pd.DataFrame):
        if class_names is None:
            class_names = [str(c) for c in output.columns]
        arr = output.to_numpy()
    else:
        arr = np.asarray(output)

    if arr.ndim == 2 and arr.shape[1] == 1:
        arr = arr[:, 0]
    if arr.ndim == 1:
        if class_ is not None:
            raise ValueError(
                f"class_={class_!r} was given but the model returned a single column."
            )
        if categorical:
            arr = arr.astype(str).astype(object)
        return ScalarResponse(values=arr)
    if arr.ndim != 2:
        raise ValueError(f"Model output must be 1- or 2-dimensional, got shape {arr.shape}")

    n_cols = arr.shape[1]
    if class_names is None:
        class_names = [str(i) for i in range(n_cols)]
    names = tuple(str(c) for c in class_names)
    if len(names) != n_cols:
        raise ValueError(f"Got {len(names)} class names for {n_cols} output columns.")

    if class_ is not None:
        col = _resolve_class(class_, names)
        return ScalarResponse(values=arr[:, col].astype(float), name=names[col])
    return PerClassResponse(class_names=names, probabilities=arr.astype(float))


def _resolve_class(class_: Union[str, int], names: tuple[str, ...]) -> int:
    if str(class_) in names:
        return names.index(str(class_))
    if isinstance(class_, (int, np.integer)) and 0 <= class_ < len(names):
        return int(class_)
    raise ValueError(f"Unknown class {class_!r}; available classes: {list(names)}")
