"""Tree-fitting options for the surrogate."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Dict, Mapping, Optional

# Conditional-inference-tree option names and their sklearn counterparts.
_ALIASES: Dict[str, str] = {
    "maxdepth": "max_depth",
    "minsplit": "min_samples_split",
    "minbucket": "min_samples_leaf",
}


@dataclass(frozen=True)
class TreeOptions:
    """Configuration for the surrogate decision tree.

    Parameters
    ----------
    max_depth : int or None, default 2
        Maximum depth of the surrogate tree. ``None`` grows until the leaf
        size limits stop it.
    min_samples_split : int, default 20
        Minimum number of rows a node needs before a split is attempted.
    min_samples_leaf : int, default 7
        Minimum number of rows in each leaf.
    random_state : int or None, default 42
        Seed used by sklearn to break ties between equally good splits.
    extra : dict
        Any further keyword arguments for the sklearn estimator.
    """

    max_depth: Optional[int] = 2
    min_samples_split: int = 20
    min_samples_leaf: int = 7
    random_state: Optional[int] = 42
    extra: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.max_depth is not None and self.max_depth < 1:
            raise ValueError(f"max_depth must be None or >= 1, got {self.max_depth!r}")
        if self.min_samples_leaf < 1:
            raise ValueError(
                f"min_samples_leaf must be >= 1, got {self.min_samples_leaf!r}"
            )
        if self.min_samples_split < 2:
            raise ValueError(
                f"min_samples_split must be >= 2, got {self.min_samples_split!r}"
            )

    @classmethod
    def from_dict(cls, mapping: Optional[Mapping[str, Any]]) -> TreeOptions:
        """Build options from a loose option bag.

        Accepts the field names above as well as the ``maxdepth``,
        ``minsplit`` and ``minbucket`` spellings. Unknown keys are kept in
        :attr:`extra` and handed to the estimator as-is.
        """
        if not mapping:
            return cls()
        known = {f.name for f in fields(cls)} - {"extra"}
        kwargs: Dict[str, Any] = {}
        extra: Dict[str, Any] = {}
        for key, value in mapping.items():
            name = _ALIASES.get(key, key)
            if name in known:
                kwargs[name] = value
            elif name == "extra":
                extra.update(value)
            else:
                extra[key] = value
        return cls(extra=extra, **kwargs)

    def estimator_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for ``DecisionTreeRegressor``/``DecisionTreeClassifier``."""
        kwargs: Dict[str, Any] = dict(
            max_depth=self.max_depth,
            min_samples_split=self.min_samples_split,
            min_samples_leaf=self.min_samples_leaf,
            random_state=self.random_state,
        )
        kwargs.update(self.extra)
        return kwargs
