#!/usr/bin/env python3
"""Demo: explain a regression forest and a classification forest with shallow trees."""

import warnings

warnings.filterwarnings("ignore")

import pandas as pd
from sklearn.datasets import load_iris, make_regression
from sklearn.ensemble import RandomForestClassifier, RandomForestRegressor

from tree_surrogate import tree_surrogate

# ── Regression ──────────────────────────────────────────────────────────
X, y = make_regression(n_samples=500, n_features=6, n_informative=3, random_state=0)
X = pd.DataFrame(X, columns=[f"feat_{i}" for i in range(X.shape[1])])
forest = RandomForestRegressor(n_estimators=50, random_state=0).fit(X, y)

dt = tree_surrogate(forest, X, sample_size=200, random_state=0)
print(dt.summary())
print(dt.predict(X.iloc[:5]))
dt.plot(save_path="regression_leaves.png")

# ── Classification ─────────────────────────────────────────────────────
iris = load_iris()
X = pd.DataFrame(iris.data, columns=iris.feature_names)
forest = RandomForestClassifier(n_estimators=50, random_state=0).fit(X, iris.target)

dt = tree_surrogate(
    forest,
    X,
    200,
    method="predict_proba",
    class_names=list(iris.target_names),
    tree_args={"maxdepth": 1},
    random_state=0,
)
print(dt.summary())
sample = X.sample(10, random_state=42)
print(dt.predict(sample))
print(dt.predict(sample, type="class"))
print(dt.data().head())
dt.plot(save_path="iris_leaves.png")
