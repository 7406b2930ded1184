"""tree_surrogate - decision-tree surrogate explanations for black-box models."""

from .base import SurrogateWorkflow
from .logging import LoggingHandle, enable_logging
from .options import TreeOptions
from .paths import Condition, LeafPath, decision_paths, extract_leaf_paths
from .prediction import PredictionModel
from .report import SurrogateSummary, compute_summary
from .response import PerClassResponse, ScalarResponse, response_from_output
from .results import SurrogateRecord, SurrogateResults
from .sampling import DataSampler
from .surrogate import TreeSurrogate, predict, tree_surrogate
from .visualization import export_dot, plot_leaf_boxplots, plot_surrogate_tree

__all__ = [
    "tree_surrogate",
    "predict",
    "TreeSurrogate",
    "SurrogateWorkflow",
    "DataSampler",
    "PredictionModel",
    "ScalarResponse",
    "PerClassResponse",
    "response_from_output",
    "TreeOptions",
    # Paths and results
    "Condition",
    "LeafPath",
    "extract_leaf_paths",
    "decision_paths",
    "SurrogateRecord",
    "SurrogateResults",
    # Summary
    "SurrogateSummary",
    "compute_summary",
    # Plotting
    "plot_leaf_boxplots",
    "plot_surrogate_tree",
    "export_dot",
    # Logging
    "enable_logging",
    "LoggingHandle",
]
