"""
student_performance/inference.py

Purpose
-------
Centralizes "inference-time" logic (loading artifacts, validating inputs, scoring)
so the Streamlit app and any batch job score rows the same way.

Artifacts expected in artifacts/ (written by student_performance.train):
  - models/<name>.pkl : a pickled FittedModel
  - features.json      : model name -> ordered feature names

Models fitted with --normalize-features expect normalized inputs.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple

import joblib
import numpy as np
import pandas as pd

from student_performance.config import ARTIFACT_DIR
from student_performance.dataset import CSV_COLUMNS
from student_performance.features import Feature
from student_performance.regression import FittedModel


@dataclass(frozen=True)
class ModelBundle:
    """A fitted model plus the column names it expects, in coefficient order."""
    name: str
    model: FittedModel
    features: List[str]


def load_bundle(name: str = "model_3", artifact_dir: Path = ARTIFACT_DIR) -> ModelBundle:
    """
    Load one fitted model + its feature list from disk.

    Raises
    ------
    FileNotFoundError
        If required artifact files are missing.
    ValueError
        If features.json does not list `name` or disagrees with the pickled model.
    """
    model_path = artifact_dir / "models" / f"{name}.pkl"
    feat_path = artifact_dir / "features.json"

    if not model_path.exists():
        raise FileNotFoundError(
            f"Missing {model_path}. Train first (python -m student_performance.train)."
        )

    if not feat_path.exists():
        raise FileNotFoundError(
            f"Missing {feat_path}. Re-train to generate it (python -m student_performance.train)."
        )

    model = joblib.load(model_path)
    features = json.loads(feat_path.read_text()).get(name)

    if not isinstance(features, list) or not all(isinstance(x, str) for x in features):
        raise ValueError(f"features.json has no valid feature list for '{name}'.")
    if features != model.spec.names:
        raise ValueError(f"features.json lists {features} but {model_path.name} was fitted on {model.spec.names}.")

    return ModelBundle(name=name, model=model, features=features)


def available_models(artifact_dir: Path = ARTIFACT_DIR) -> List[str]:
    return sorted(p.stem for p in (artifact_dir / "models").glob("*.pkl"))


def _flag_value(v) -> float:
    if pd.isna(v) or (isinstance(v, str) and not v.strip()):
        return np.nan
    return 1.0 if v in ("Yes", True, 1, 1.0) else 0.0


def validate_features(df: pd.DataFrame, features: List[str]) -> Tuple[pd.DataFrame, List[str]]:
    """
    Validate and prepare a dataframe for scoring.

    This function:
      1) Ensures required columns are present (hard error if missing).
      2) Ignores unexpected columns (warning only).
      3) Coerces the extracurricular flag (Yes/No, True/False, 1/0) to 1.0/0.0
         and every other feature to numeric (non-numeric becomes NaN).
         A blank or missing flag becomes NaN, not 0.0.
      4) Reports missing values (warning). They are NOT imputed, so the
         affected rows score as NaN.

    Returns
    -------
    X : pd.DataFrame
        Feature matrix containing ONLY model features, in model order.
    warnings : List[str]
        Human-readable descriptions of non-fatal issues.
    """
    warnings: List[str] = []

    # --- 0) Accept the raw CSV headers as well as field names
    df = df.rename(columns=CSV_COLUMNS)

    # --- 1) Check required columns exist
    missing = [c for c in features if c not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {missing}")

    # --- 2) Identify extra columns
    extra = [c for c in df.columns if c not in features]
    if extra:
        warnings.append(f"Ignoring extra columns: {extra}")

    # --- 3) Select, order and coerce
    X = df[features].copy()
    flag = Feature.EXTRACURRICULAR_ACTIVITIES.field
    for c in features:
        if c == flag:
            X[c] = X[c].map(_flag_value).astype(float)
        else:
            X[c] = pd.to_numeric(X[c], errors="coerce")

    # --- 4) Report missing values
    n_missing = int(X.isna().sum().sum())
    if n_missing > 0:
        warnings.append(
            f"Found {n_missing} missing/non-numeric values; affected rows are scored as NaN."
        )

    return X, warnings


def score(df: pd.DataFrame, bundle: ModelBundle) -> pd.Series:
    """
    Predicted performance index for every row of `df`, aligned to df.index.
    """
    X, _ = validate_features(df, bundle.features)
    coef = pd.Series(bundle.model.coefficients, index=bundle.features)
    predicted = bundle.model.intercept + X.mul(coef, axis=1).sum(axis=1, skipna=False)
    return pd.Series(predicted.to_numpy(), index=df.index, name="predicted_performance_index")
