"""Black-box model wrapper that turns raw predictions into a tagged response."""

from __future__ import annotations

from typing import Optional, Sequence, Union

import pandas as pd
from loguru import logger

from .response import PerClassResponse, Response, response_from_output

_METHODS = ("predict", "predict_proba")


class PredictionModel:
    """Query a black-box model on a sample of rows.

    Parameters
    ----------
    model : object or callable
        Any object exposing *method*, or a plain function ``f(X) -> output``.
    method : {"predict", "predict_proba"}, default "predict"
        Which prediction method to call. ``"predict_proba"`` yields one
        probability column per class.
    class_ : str or int, optional
        Restrict a multi-column output to a single class column.
    class_names : sequence of str, optional
        Names of the output columns. Defaults to ``model.classes_`` when
        present.
    """

    def __init__(
        self,
        model: object,
        *,
        method: str = "predict",
        class_: Optional[Union[str, int]] = None,
        class_names: Optional[Sequence[str]] = None,
    ) -> None:
        if method not in _METHODS:
            raise ValueError(
                f"method must be 'predict' or 'predict_proba', got {method!r}"
            )
        predict_fn = getattr(model, method, None)
        if predict_fn is None and callable(model) and method == "predict":
            predict_fn = model
        if predict_fn is None or not callable(predict_fn):
            raise TypeError(
                f"The model must expose a callable .{method}() method, "
                f"got {type(model).__name__!r}."
            )
        self.model = model
        self.method = method
        self.class_ = class_
        self._predict_fn = predict_fn
        self._class_names = tuple(str(c) for c in class_names) if class_names is not None else None

    @property
    def class_names(self) -> Optional[tuple[str, ...]]:
        if self._class_names is not None:
            return self._class_names
        classes = getattr(self.model, "classes_", None)
        if classes is not None and self.method == "predict_proba":
            return tuple(str(c) for c in classes)
        return None

    def predict(self, X: pd.DataFrame) -> Response:
        """Call the model on *X* and normalise its output."""
        output = self._predict_fn(X)
        if isinstance(output, pd.Series):
            output = output.to_numpy()
        response = response_from_output(
            output,
            class_names=self.class_names,
            class_=self.class_,
            categorical=self.method == "predict" and hasattr(self.model, "classes_"),
        )
        if response.n_rows != len(X):
            raise ValueError(
                f"The model returned {response.n_rows} predictions for {len(X)} rows."
            )
        kind = "per-class" if isinstance(response, PerClassResponse) else "scalar"
        logger.info("Queried model predictions", rows=len(X), response=kind)
        return response

