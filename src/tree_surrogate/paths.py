"""Decision paths: the split conditions leading from the root to each leaf."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Sequence, Union

import numpy as np
from numpy.typing import ArrayLike
from sklearn.tree import DecisionTreeClassifier

LeafValue = Union[float, str, Dict[str, float]]

PATH_SEPARATOR = " &\n"
EMPTY_PATH = "TRUE"


@dataclass(frozen=True)
class Condition:
    """A single split condition, e.g. ``petal_width <= 0.8``."""

    feature: str
    operator: str  # "<=" or ">"
    threshold: float

    def __str__(self) -> str:
        return f"{self.feature} {self.operator} {self.threshold:.4f}"


@dataclass(frozen=True)
class LeafPath:
    """The branch from the tree root down to one leaf.

    Parameters
    ----------
    leaf_id : int
        Node id of the leaf inside the sklearn tree.
    conditions : tuple of Condition
        Split predicates on the branch, root first.
    samples : int
        Number of fitting rows that reached this leaf.
    value : float, str or dict
        The leaf prediction: a mean value, a class label, or a mapping of
        class name to mean probability.
    """

    leaf_id: int
    conditions: tuple[Condition, ...]
    samples: int
    value: LeafValue

    @property
    def text(self) -> str:
        """Conjunction of the conditions, one per line."""
        if not self.conditions:
            return EMPTY_PATH
        return PATH_SEPARATOR.join(str(c) for c in self.conditions)

    def __str__(self) -> str:
        if self.conditions:
            antecedent = " & ".join(str(c) for c in self.conditions)
        else:
            antecedent = EMPTY_PATH
        if isinstance(self.value, dict):
            outcome = ", ".join(f"{k}={v:.4f}" for k, v in self.value.items())
        elif isinstance(self.value, str):
            outcome = f"class = {self.value}"
        else:
            outcome = f"value = {self.value:.4f}"
        return f"IF {antecedent} THEN {outcome}  [samples={self.samples}]"


def extract_leaf_paths(
    tree,
    feature_names: Sequence[str],
    class_names: Sequence[str] = (),
) -> Dict[int, LeafPath]:
    """Depth-first walk over the sklearn tree internals.

    Returns a mapping of leaf id to :class:`LeafPath`, in left-to-right leaf
    order. Left children hold ``feature <= threshold``, right children
    ``feature > threshold``.
    """
    tree_ = tree.tree_
    feature = tree_.feature
    threshold = tree_.threshold
    children_left = tree_.children_left
    children_right = tree_.children_right
    value = tree_.value
    is_classifier = isinstance(tree, DecisionTreeClassifier)

    paths: Dict[int, LeafPath] = {}

    def _leaf_value(node_id: int) -> LeafValue:
        if is_classifier:
            return str(tree.classes_[int(np.argmax(value[node_id, 0]))])
        if tree_.n_outputs > 1:
            names = class_names or [str(i) for i in range(tree_.n_outputs)]
            return {
                str(name): float(v) for name, v in zip(names, value[node_id, :, 0])
            }
        return float(value[node_id, 0, 0])

    def _dfs(node_id: int, conditions: list[Condition]) -> None:
        if children_left[node_id] == children_right[node_id]:
            paths[node_id] = LeafPath(
                leaf_id=node_id,
                conditions=tuple(conditions),
                samples=int(tree_.n_node_samples[node_id]),
                value=_leaf_value(node_id),
            )
            return

        feat_name = (
            feature_names[feature[node_id]]
            if feature[node_id] < len(feature_names)
            else f"feature_{feature[node_id]}"
        )
        thresh = float(threshold[node_id])
        _dfs(
            children_left[node_id],
            conditions + [Condition(feat_name, "<=", thresh)],
        )
        _dfs(
            children_right[node_id],
            conditions + [Condition(feat_name, ">", thresh)],
        )

    _dfs(0, [])
    return paths


def decision_paths(
    tree,
    X: ArrayLike,
    feature_names: Sequence[str],
) -> list[str]:
    """Path text of the leaf each row of *X* lands in."""
    paths = extract_leaf_paths(tree, feature_names)
    return [paths[int(leaf)].text for leaf in tree.apply(X)]
