"""Decision-tree surrogate: approximate a black-box model with a shallow tree.

Craven, M. W., & Shavlik, J. W. (1996). Extracting tree-structured
representations of trained neural networks. Advances in Neural Information
Processing Systems, 8, 24-30.
"""

from __future__ import annotations

import warnings
from typing import Any, Dict, Mapping, Optional, Sequence, Union

import pandas as pd
from loguru import logger
from matplotlib.figure import Figure
from numpy.typing import ArrayLike
from sklearn.exceptions import NotFittedError

from .options import TreeOptions
from .paths import LeafPath, extract_leaf_paths
from .prediction import PredictionModel
from .report import SurrogateSummary, compute_summary
from .response import PerClassResponse, Response
from .results import MODEL_PREFIX, SurrogateResults
from .sampling import DataSampler, as_frame
from .visualization import export_dot, plot_leaf_boxplots, plot_surrogate_tree

PREDICT_TYPES = ("prob", "class")
CLASS_COLUMN = "..class"


class TreeSurrogate:
    """Shallow decision tree fit on a black-box model's predictions.

    The workflow runs once: :meth:`sample` draws the rows, :meth:`query`
    asks the model for its predictions on them and :meth:`fit` grows the
    tree. Each stage caches its result, so calling a stage again is free.

    Parameters
    ----------
    predictor : PredictionModel
        The wrapped black-box model.
    sampler : DataSampler
        Reference data the sample is drawn from.
    sample_size : int, default 100
        Number of rows to draw.
    options : TreeOptions, optional
        Tree-fitting options. Defaults to ``TreeOptions()`` (depth 2).
    random_state : int, optional
        Seed for drawing the sample.
    """

    def __init__(
        self,
        predictor: PredictionModel,
        sampler: DataSampler,
        *,
        sample_size: int = 100,
        options: Optional[TreeOptions] = None,
        random_state: Optional[int] = None,
    ) -> None:
        if sample_size < 1:
            raise ValueError(f"sample_size must be >= 1, got {sample_size!r}")
        self.predictor = predictor
        self.sampler = sampler
        self.sample_size = sample_size
        self.options = options if options is not None else TreeOptions()
        self.random_state = random_state

        self._X_sample: Optional[pd.DataFrame] = None
        self._response: Optional[Response] = None
        self._tree = None
        self._leaf_paths: Dict[int, LeafPath] = {}
        self._results: Optional[SurrogateResults] = None

    # ------------------------------------------------------------------
    # Workflow stages
    # ------------------------------------------------------------------

    def sample(self) -> pd.DataFrame:
        if self._X_sample is None:
            self._X_sample = self.sampler.sample(
                self.sample_size, random_state=self.random_state
            )
        return self._X_sample

    def query(self) -> Response:
        if self._response is None:
            self._response = self.predictor.predict(self.sample())
        return self._response

    def fit(self) -> TreeSurrogate:
        """Fit the surrogate tree and compute the per-row diagnostics."""
        if self._tree is not None:
            return self
        X = self.sample()
        response = self.query()

        tree = response.make_tree(self.options)
        tree.fit(X, response.target())
        self._tree = tree
        if tree.get_n_leaves() == 1:
            warnings.warn(
                "The surrogate tree has no splits; every row falls into the root leaf.",
                UserWarning,
                stacklevel=2,
            )

        self._leaf_paths = extract_leaf_paths(tree, self.feature_names, self.class_names)
        leaf_ids = tree.apply(X)
        paths = [self._leaf_paths[int(leaf)].text for leaf in leaf_ids]
        self._results = SurrogateResults(
            features=X,
            leaf_ids=leaf_ids,
            paths=paths,
            response=response,
            tree_response=self._tree_response(X),
        )
        logger.info(
            "Fitted surrogate tree",
            depth=tree.get_depth(),
            leaves=tree.get_n_leaves(),
            multi_class=self.multi_class,
        )
        return self

    def run(self) -> TreeSurrogate:
        return self.fit()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def multi_class(self) -> bool:
        """Whether the model response has one probability column per class."""
        return isinstance(self.query(), PerClassResponse)

    @property
    def feature_names(self) -> tuple[str, ...]:
        return self.sampler.feature_names

    @property
    def class_names(self) -> tuple[str, ...]:
        return self.query().class_names

    @property
    def tree(self):
        self._check_fitted()
        return self._tree

    @property
    def leaf_paths(self) -> Dict[int, LeafPath]:
        self._check_fitted()
        return dict(self._leaf_paths)

    @property
    def results(self) -> SurrogateResults:
        self._check_fitted()
        return self._results

    def data(self) -> pd.DataFrame:
        """Sampled features with leaf, path and both predictions as columns."""
        return self.run().results.to_frame()

    def predict(self, newdata: ArrayLike, type: str = "prob") -> pd.DataFrame:
        """Predict with the surrogate tree.

        Parameters
        ----------
        newdata : DataFrame or array-like
            Rows to predict. DataFrame columns are matched by feature name;
            arrays must hold the features in training order.
        type : {"prob", "class"}, default "prob"
            ``"prob"`` returns the tree's value (or one probability column
            per class). ``"class"`` returns the most probable class in a
            ``..class`` column; it only differs from ``"prob"`` for
            per-class responses.

        Returns
        -------
        DataFrame
        """
        if type not in PREDICT_TYPES:
            raise ValueError(f"type must be 'prob' or 'class', got {type!r}")
        self._check_fitted()
        X = as_frame(newdata, self.feature_names)
        tree_response = self._tree_response(X)
        logger.debug("Predicted with surrogate tree", rows=len(X), type=type)

        if isinstance(tree_response, PerClassResponse):
            if type == "class":
                return pd.DataFrame(
                    {CLASS_COLUMN: tree_response.argmax_classes()}, index=X.index
                )
            return pd.DataFrame(
                tree_response.probabilities,
                columns=list(tree_response.class_names),
                index=X.index,
            )
        return pd.DataFrame({MODEL_PREFIX: tree_response.values}, index=X.index)

    def summary(self) -> SurrogateSummary:
        self.run()
        return compute_summary(
            self._tree, self._response, self._results.tree_response, self._leaf_paths
        )

    def plot(self, **kwargs) -> Figure:
        """Box plots of the predictions per leaf (see :func:`plot_leaf_boxplots`)."""
        return plot_leaf_boxplots(self.run().results, **kwargs)

    def plot_tree(self, **kwargs) -> Figure:
        """Draw the tree itself (see :func:`plot_surrogate_tree`)."""
        kwargs.setdefault("title", f"Surrogate tree for {self._output_label()}")
        return plot_surrogate_tree(
            self.tree, self.feature_names, self._tree_class_names(), **kwargs
        )

    def to_dot(self) -> str:
        """Export the surrogate tree as a Graphviz DOT string."""
        return export_dot(self.tree, self.feature_names, self._tree_class_names())

    def __str__(self) -> str:
        return str(self.summary())

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _check_fitted(self) -> None:
        if self._tree is None:
            raise NotFittedError(
                "This TreeSurrogate is not fitted yet. Call 'fit' or 'run' first."
            )

    def _tree_response(self, X: pd.DataFrame) -> Response:
        return self._response.like(self._tree.predict(X))

    def _output_label(self) -> str:
        response = self.query()
        if isinstance(response, PerClassResponse):
            return "P(" + ", ".join(response.class_names) + ")"
        return response.name

    def _tree_class_names(self) -> tuple[str, ...]:
        # Only classifiers carry class labels.
        if hasattr(self._tree, "classes_"):
            return tuple(str(c) for c in self._tree.classes_)
        return ()


def tree_surrogate(
    model: object,
    X: ArrayLike,
    sample_size: int = 100,
    class_: Optional[Union[str, int]] = None,
    tree_args: Optional[Union[TreeOptions, Mapping[str, Any]]] = None,
    *,
    method: str = "predict",
    feature_names: Optional[Sequence[str]] = None,
    class_names: Optional[Sequence[str]] = None,
    random_state: Optional[int] = None,
) -> TreeSurrogate:
    """Fit a decision-tree surrogate for *model* on a sample of *X*.

    Parameters
    ----------
    model : object
        Any model exposing ``predict(X)`` (and ``predict_proba(X)`` when
        ``method="predict_proba"``), or a plain callable.
    X : DataFrame or array-like
        Reference data.
    sample_size : int, default 100
        Number of rows drawn from *X* to fit the tree on.
    class_ : str or int, optional
        Explain only this class column of a multi-column output.
    tree_args : TreeOptions or dict, optional
        Tree options; dicts may use ``maxdepth``/``minsplit``/``minbucket``.
        Defaults to a tree of maximum depth 2.
    method : {"predict", "predict_proba"}, default "predict"
    feature_names : sequence of str, optional
    class_names : sequence of str, optional
    random_state : int, optional
        Seed for drawing the sample.

    Returns
    -------
    TreeSurrogate
        The fitted surrogate.
    """
    options = tree_args if isinstance(tree_args, TreeOptions) else TreeOptions.from_dict(tree_args)
    predictor = PredictionModel(
        model, method=method, class_=class_, class_names=class_names
    )
    sampler = DataSampler(X, feature_names=feature_names)
    return TreeSurrogate(
        predictor,
        sampler,
        sample_size=sample_size,
        options=options,
        random_state=random_state,
    ).run()


def predict(surrogate: TreeSurrogate, newdata: ArrayLike, type: str = "prob") -> pd.DataFrame:
    """Functional form of :meth:`TreeSurrogate.predict`."""
    return surrogate.predict(newdata, type=type)
