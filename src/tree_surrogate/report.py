"""Textual summary of a fitted surrogate and how well it mimics the model."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional

import numpy as np
from sklearn.metrics import accuracy_score, mean_squared_error, r2_score

from .paths import LeafPath
from .response import PerClassResponse, Response


@dataclass(frozen=True)
class SurrogateSummary:
    """Quantitative summary of a fitted surrogate tree.

    Attributes
    ----------
    task : str
        ``"regression"``, ``"classification"`` or ``"multiclass"``.
    num_samples : int
        Number of sampled rows the tree was fit on.
    depth : int
        Depth of the fitted tree.
    n_leaves : int
        Number of leaves (= decision paths).
    fidelity : float
        R² against the model output (regression, multiclass) or label
        agreement (classification).
    fidelity_r2 : float or None
        R² between tree and model (numeric outputs only).
    fidelity_mse : float or None
        MSE between tree and model (numeric outputs only).
    class_agreement : float or None
        Share of rows whose arg-max class agrees (multiclass only).
    leaf_paths : dict
        Leaf id to :class:`LeafPath`.
    """

    task: str
    num_samples: int
    depth: int
    n_leaves: int
    fidelity: float
    fidelity_r2: Optional[float] = None
    fidelity_mse: Optional[float] = None
    class_agreement: Optional[float] = None
    leaf_paths: Dict[int, LeafPath] = field(default_factory=dict)

    def __str__(self) -> str:
        lines = [
            "=== Tree Surrogate Summary ===",
            f"  Task: {self.task}",
            f"  Samples used: {self.num_samples}",
            f"  Tree depth: {self.depth}",
            f"  Tree leaves: {self.n_leaves}",
            f"  Fidelity (tree vs model): {self.fidelity:.4f}",
        ]
        if self.fidelity_r2 is not None:
            lines.append(f"  Fidelity R²: {self.fidelity_r2:.4f}")
        if self.fidelity_mse is not None:
            lines.append(f"  Fidelity MSE: {self.fidelity_mse:.4f}")
        if self.class_agreement is not None:
            lines.append(f"  Arg-max class agreement: {self.class_agreement:.4f}")
        if self.leaf_paths:
            lines.append("  Leaves:")
            for i, path in enumerate(self.leaf_paths.values(), 1):
                lines.append(f"    Leaf {i} (node {path.leaf_id}): {path}")
        return "\n".join(lines)


def compute_summary(
    tree,
    response: Response,
    tree_response: Response,
    leaf_paths: Dict[int, LeafPath],
) -> SurrogateSummary:
    """Compare the tree's predictions on the sample with the model's."""
    common = dict(
        num_samples=response.n_rows,
        depth=int(tree.get_depth()),
        n_leaves=int(tree.get_n_leaves()),
        leaf_paths=dict(leaf_paths),
    )

    if isinstance(response, PerClassResponse):
        y_bb = response.probabilities
        y_tree = tree_response.as_matrix()
        r2 = _r2_or_one(y_bb, y_tree)
        agreement = float(
            np.mean(response.argmax_classes() == tree_response.argmax_classes())
        )
        return SurrogateSummary(
            task="multiclass",
            fidelity=r2,
            fidelity_r2=r2,
            fidelity_mse=float(mean_squared_error(y_bb, y_tree)),
            class_agreement=agreement,
            **common,
        )

    if response.is_categorical:
        fidelity = float(accuracy_score(response.values, tree_response.target()))
        return SurrogateSummary(task="classification", fidelity=fidelity, **common)

    y_bb = response.values.astype(float)
    y_tree = tree_response.target().astype(float)
    r2 = _r2_or_one(y_bb, y_tree)
    return SurrogateSummary(
        task="regression",
        fidelity=r2,
        fidelity_r2=r2,
        fidelity_mse=float(mean_squared_error(y_bb, y_tree)),
        **common,
    )


def _r2_or_one(y_bb: np.ndarray, y_tree: np.ndarray) -> float:
    # R² is undefined for a constant model output.
    if float(np.var(y_bb)) == 0.0:
        return 1.0
    return float(r2_score(y_bb, y_tree))
