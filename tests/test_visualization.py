"""Tests for visualization.py."""

import os

import matplotlib.pyplot as plt
import pandas as pd
import pytest
from matplotlib.figure import Figure
from sklearn.datasets import load_iris
from sklearn.ensemble import RandomForestClassifier

from tree_surrogate import plot_leaf_boxplots, tree_surrogate


@pytest.fixture()
def iris_data():
    iris = load_iris()
    X = pd.DataFrame(iris.data, columns=iris.feature_names)
    model = RandomForestClassifier(n_estimators=10, random_state=0).fit(X, iris.target)
    return X, model, list(iris.target_names)


class TestLeafBoxplots:
    def test_multiclass_plot_saves_file(self, iris_data, tmp_path):
        X, model, names = iris_data
        surrogate = tree_surrogate(
            model, X, method="predict_proba", class_names=names, random_state=0
        )
        path = os.path.join(tmp_path, "leaves.png")
        fig = surrogate.plot(save_path=path)
        assert isinstance(fig, Figure)
        assert os.path.exists(path)
        assert os.path.getsize(path) > 0
        visible = [ax for ax in fig.axes if ax.get_visible()]
        assert len(visible) == len(surrogate.leaf_paths)
        plt.close(fig)

    def test_scalar_plot(self, iris_data):
        X, model, names = iris_data
        surrogate = tree_surrogate(
            model, X, class_="setosa", method="predict_proba", class_names=names, random_state=0
        )
        fig = plot_leaf_boxplots(surrogate.results, ncols=1)
        titles = {ax.get_title() for ax in fig.axes if ax.get_visible()}
        assert titles == set(surrogate.results.paths)
        plt.close(fig)

    def test_label_output_plot(self, iris_data, tmp_path):
        X, _, names = iris_data
        labels = pd.Series(names).to_numpy()[load_iris().target]
        model = RandomForestClassifier(n_estimators=10, random_state=0).fit(X, labels)
        surrogate = tree_surrogate(model, X, 100, random_state=0)
        assert surrogate.results.response.is_categorical
        path = os.path.join(tmp_path, "labels.png")
        fig = surrogate.plot(save_path=path)
        assert os.path.exists(path)
        visible = [ax for ax in fig.axes if ax.get_visible()]
        assert {ax.get_title() for ax in visible} == set(surrogate.results.paths)
        for ax in visible:
            heights = [bar.get_height() for bar in ax.patches]
            assert sum(heights) == pytest.approx(1.0)

    def test_figures_not_registered_with_pyplot(self, iris_data):
        X, model, names = iris_data
        surrogate = tree_surrogate(
            model, X, method="predict_proba", class_names=names, random_state=0
        )
        before = plt.get_fignums()
        surrogate.plot()
        surrogate.plot_tree()
        assert plt.get_fignums() == before


class TestTreeRendering:
    def test_plot_tree_saves_file(self, iris_data, tmp_path):
        X, model, _ = iris_data
        surrogate = tree_surrogate(model, X, random_state=0)
        path = os.path.join(tmp_path, "tree.png")
        fig = surrogate.plot_tree(save_path=path)
        assert os.path.exists(path)
        assert fig.axes[0].get_title() == "Surrogate tree for y.hat"
        plt.close(fig)

    def test_tree_title_names_classes(self, iris_data):
        X, model, names = iris_data
        surrogate = tree_surrogate(
            model, X, method="predict_proba", class_names=names, random_state=0
        )
        fig = surrogate.plot_tree()
        assert fig.axes[0].get_title() == "Surrogate tree for P(setosa, versicolor, virginica)"

    def test_to_dot_has_labels(self, iris_data):
        X, model, _ = iris_data
        dot = tree_surrogate(model, X, random_state=0).to_dot()
        assert "digraph" in dot
        assert "label=" in dot
