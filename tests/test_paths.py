"""Tests for paths.py - conditions, leaf paths and path extraction."""

import numpy as np
import pytest
from sklearn.datasets import load_iris
from sklearn.tree import DecisionTreeClassifier, DecisionTreeRegressor

from tree_surrogate.paths import (
    EMPTY_PATH,
    Condition,
    LeafPath,
    decision_paths,
    extract_leaf_paths,
)


@pytest.fixture()
def iris_data():
    iris = load_iris()
    return iris.data, iris.target, list(iris.feature_names)


class TestCondition:
    def test_str(self):
        assert str(Condition("petal_width", "<=", 0.8)) == "petal_width <= 0.8000"

    def test_frozen(self):
        c = Condition("f1", "<=", 1.0)
        with pytest.raises(AttributeError):
            c.feature = "f2"


class TestLeafPath:
    def test_text_joins_with_line_breaks(self):
        path = LeafPath(
            leaf_id=3,
            conditions=(Condition("f1", "<=", 1.0), Condition("f2", ">", 2.5)),
            samples=10,
            value=1.5,
        )
        assert path.text == "f1 <= 1.0000 &\nf2 > 2.5000"

    def test_empty_path(self):
        path = LeafPath(leaf_id=0, conditions=(), samples=5, value=0.0)
        assert path.text == EMPTY_PATH

    def test_str_regression(self):
        path = LeafPath(leaf_id=1, conditions=(Condition("f1", ">", 0.0),), samples=4, value=2.0)
        text = str(path)
        assert text.startswith("IF f1 > 0.0000")
        assert "THEN value = 2.0000" in text
        assert "samples=4" in text

    def test_str_per_class(self):
        path = LeafPath(leaf_id=1, conditions=(), samples=4, value={"a": 0.25, "b": 0.75})
        assert "a=0.2500, b=0.7500" in str(path)

    def test_str_label(self):
        path = LeafPath(leaf_id=1, conditions=(), samples=4, value="setosa")
        assert "THEN class = setosa" in str(path)


class TestExtractLeafPaths:
    def test_one_path_per_leaf(self, iris_data):
        X, y, feat = iris_data
        tree = DecisionTreeRegressor(max_depth=2, random_state=0).fit(X, y.astype(float))
        paths = extract_leaf_paths(tree, feat)
        assert len(paths) == tree.get_n_leaves()
        assert all(len(p.conditions) <= 2 for p in paths.values())
        assert sum(p.samples for p in paths.values()) == len(X)

    def test_leaf_ids_match_apply(self, iris_data):
        X, y, feat = iris_data
        tree = DecisionTreeRegressor(max_depth=3, random_state=0).fit(X, y.astype(float))
        paths = extract_leaf_paths(tree, feat)
        assert set(np.unique(tree.apply(X))) == set(paths)

    def test_conditions_hold_for_rows(self, iris_data):
        X, y, feat = iris_data
        tree = DecisionTreeRegressor(max_depth=3, random_state=0).fit(X, y.astype(float))
        paths = extract_leaf_paths(tree, feat)
        index = {name: i for i, name in enumerate(feat)}
        for row, leaf in zip(X, tree.apply(X)):
            for cond in paths[int(leaf)].conditions:
                value = np.float32(row[index[cond.feature]])
                if cond.operator == "<=":
                    assert value <= cond.threshold
                else:
                    assert value > cond.threshold

    def test_classifier_leaf_values_are_labels(self, iris_data):
        X, y, feat = iris_data
        labels = np.array(["a", "b", "c"], dtype=object)[y]
        tree = DecisionTreeClassifier(max_depth=2, random_state=0).fit(X, labels)
        values = {p.value for p in extract_leaf_paths(tree, feat).values()}
        assert values <= {"a", "b", "c"}

    def test_multi_output_leaf_values(self, iris_data):
        X, y, feat = iris_data
        onehot = np.eye(3)[y]
        tree = DecisionTreeRegressor(max_depth=2, random_state=0).fit(X, onehot)
        for path in extract_leaf_paths(tree, feat, ("a", "b", "c")).values():
            assert set(path.value) == {"a", "b", "c"}
            assert sum(path.value.values()) == pytest.approx(1.0)

    def test_decision_paths_per_row(self, iris_data):
        X, y, feat = iris_data
        tree = DecisionTreeRegressor(max_depth=2, random_state=0).fit(X, y.astype(float))
        texts = decision_paths(tree, X, feat)
        assert len(texts) == len(X)
        paths = extract_leaf_paths(tree, feat)
        expected = [paths[int(leaf)].text for leaf in tree.apply(X)]
        assert texts == expected
