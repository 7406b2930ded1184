"""Protocol for surrogate workflows."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import pandas as pd
from numpy.typing import ArrayLike


@runtime_checkable
class SurrogateWorkflow(Protocol):
    """Minimal interface of a sample -> query -> fit surrogate workflow."""

    def sample(self) -> pd.DataFrame:
        """Draw (once) the rows the surrogate is fit on."""
        ...

    def query(self):
        """Return (once) the black-box model's response on the sample."""
        ...

    def fit(self) -> SurrogateWorkflow:
        """Fit the surrogate on the sample and the model response."""
        ...

    def predict(self, newdata: ArrayLike, type: str = "prob") -> pd.DataFrame:
        """Predict with the fitted surrogate."""
        ...

    def plot(self, **kwargs):
        """Render the surrogate's results."""
        ...
