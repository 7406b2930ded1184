"""Surrogate visualisation helpers."""

from __future__ import annotations

import math
from typing import Optional, Sequence

import numpy as np
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure
from sklearn.tree import export_graphviz, plot_tree

from .response import PerClassResponse
from .results import SurrogateResults


def _new_figure(figsize: tuple[float, float]) -> Figure:
    # Agg canvas without pyplot: the caller owns the figure.
    fig = Figure(figsize=figsize)
    FigureCanvasAgg(fig)
    return fig


def plot_leaf_boxplots(
    results: SurrogateResults,
    *,
    figsize: Optional[tuple[float, float]] = None,
    ncols: int = 3,
    save_path: Optional[str] = None,
    dpi: int = 150,
) -> Figure:
    """Plot the predictions in each leaf, one panel per decision path.

    For a numeric response each panel is a box plot of the model's
    prediction among the rows in that leaf. For a label response each panel
    is a bar chart of the share of rows per model label. For a per-class
    response the rows are reshaped to one entry per tree class and each
    panel shows the tree's class probabilities, grouped by the class the
    model picked for the row.

    Parameters
    ----------
    results : SurrogateResults
        Per-row diagnostics of a fitted surrogate.
    figsize : tuple, optional
        Matplotlib figure size. Scales with the number of panels by default.
    ncols : int, default 3
        Maximum number of panels per row.
    save_path : str or None
        If given, save the figure to this path (PNG, PDF, SVG, ...).
    dpi : int, default 150
        Resolution when saving.

    Returns
    -------
    matplotlib.figure.Figure
    """
    paths = list(dict.fromkeys(results.paths))
    ncols = max(1, min(ncols, len(paths)))
    nrows = math.ceil(len(paths) / ncols)
    if figsize is None:
        figsize = (4.0 * ncols, 4.0 * nrows)

    fig = _new_figure(figsize)
    axes = fig.subplots(nrows, ncols, squeeze=False)
    path_arr = np.asarray(results.paths, dtype=object)
    response = results.response
    if isinstance(response, PerClassResponse):
        model_classes = response.argmax_classes()
        tree_probs = results.tree_response.probabilities
    elif response.is_categorical:
        labels = response.values.astype(str)

    for ax, path in zip(axes.flat, paths):
        mask = path_arr == path
        if isinstance(response, PerClassResponse):
            # One entry per (row, tree class), grouped by the model's class.
            groups = [
                tree_probs[mask & (model_classes == cls)].ravel()
                for cls in response.class_names
            ]
            ax.boxplot(groups)
            ax.set_xticks(range(1, len(response.class_names) + 1))
            ax.set_xticklabels(response.class_names)
            ax.set_ylabel("class probability")
        elif response.is_categorical:
            shares = [np.mean(labels[mask] == cls) for cls in response.class_names]
            ax.bar(range(len(shares)), shares)
            ax.set_xticks(range(len(shares)))
            ax.set_xticklabels(response.class_names)
            ax.set_ylim(0.0, 1.0)
            ax.set_ylabel("share of rows")
        else:
            ax.boxplot([response.values[mask].astype(float)])
            ax.set_xticks([])
            ax.set_ylabel(response.name)
        ax.set_title(path, fontsize=9)

    for ax in list(axes.flat)[len(paths):]:
        ax.set_visible(False)

    fig.tight_layout()
    if save_path is not None:
        fig.savefig(save_path, dpi=dpi, bbox_inches="tight")
    return fig


def plot_surrogate_tree(
    tree,
    feature_names: Sequence[str],
    class_names: Sequence[str] = (),
    *,
    title: str = "Surrogate decision tree",
    figsize: tuple[int, int] = (20, 10),
    fontsize: int = 9,
    save_path: Optional[str] = None,
    dpi: int = 150,
) -> Figure:
    """Draw the fitted surrogate tree with ``sklearn.tree.plot_tree``.

    Parameters
    ----------
    tree : DecisionTreeRegressor or DecisionTreeClassifier
        Fitted surrogate tree.
    feature_names, class_names : sequence of str
        Labels for features and, for a label tree, the predicted classes.
    title : str
        Figure title, typically naming the explained model output.
    figsize : tuple, default (20, 10)
    fontsize : int, default 9
        Font size for node labels.
    save_path : str or None
        If given, save the figure to this path.
    dpi : int, default 150
    """
    fig = _new_figure(figsize)
    ax = fig.subplots()
    plot_tree(
        tree,
        feature_names=list(feature_names),
        class_names=list(class_names) or None,
        filled=True,
        rounded=True,
        fontsize=fontsize,
        ax=ax,
    )
    ax.set_title(title, fontsize=fontsize + 4)

    if save_path is not None:
        fig.savefig(save_path, dpi=dpi, bbox_inches="tight")
    return fig


def export_dot(
    tree,
    feature_names: Sequence[str],
    class_names: Sequence[str] = (),
) -> str:
    """Graphviz DOT source of the surrogate tree."""
    return export_graphviz(
        tree,
        feature_names=list(feature_names),
        class_names=list(class_names) or None,
        filled=True,
        rounded=True,
        impurity=False,
    )
