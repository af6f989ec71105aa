"""
student_performance/train.py

Fits the configured performance-index regressions and saves artifacts for
downstream scoring + dashboarding.

Steps
-----
1) Load the CSV (blank cells become NaN)
2) Optionally drop rows with missing values / zero performance index
3) Shuffle with an explicit seed and cut into train/eval
4) Per-column statistics on the training rows (and optional histograms)
5) Fit + evaluate every model configuration independently, min-max
   normalizing that model's own predictors and/or the response when asked
6) Save artifacts:
      artifacts/models/<name>.pkl  (one FittedModel per configuration)
      artifacts/features.json      (model name -> ordered feature names)
      artifacts/metrics.json       (MSE / R^2 per model, or the failure)
      artifacts/statistics.csv     (training-set column statistics)
      artifacts/config.json        (training run settings)
      artifacts/sample.csv         (raw evaluation rows, for demo scoring in Streamlit)

Run (default)
-------------
python -m student_performance.train

Run (custom)
------------
python -m student_performance.train --data data/Student_Performance.csv --train-ratio 0.8 --seed 7 \
    --features hours_studied,previous_scores --features 0,1,2,3,4
"""

from __future__ import annotations

import argparse
import json
import logging
import math
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

import joblib
import pandas as pd

from student_performance.config import (
    ARTIFACT_DIR,
    DEFAULT_DATA_PATH,
    DEFAULT_MODELS,
    DEFAULT_SEED,
    DEFAULT_TRAIN_RATIO,
    RunConfig,
)
from student_performance.dataset import (
    RESPONSE_FIELD,
    Observation,
    drop_missing,
    drop_zero_response,
    load_observations,
    observations_to_frame,
)
from student_performance.errors import StudentPerformanceError
from student_performance.evaluate import evaluate
from student_performance.features import Feature, FeatureSpec
from student_performance.normalize import normalize_observations
from student_performance.plots import plot_histograms
from student_performance.regression import FittedModel, fit
from student_performance.split import shuffle, split
from student_performance.stats import summarize_columns


logger = logging.getLogger(__name__)

CONTINUOUS_PREDICTORS = [f.field for f in Feature if f is not Feature.EXTRACURRICULAR_ACTIVITIES]


def _parse_feature_list(text: str) -> List:
    items = [t.strip() for t in text.split(",") if t.strip()]
    return [int(t) if t.isdigit() else t for t in items]


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Fit performance-index regression models.")
    parser.add_argument(
        "--data",
        type=str,
        default=str(DEFAULT_DATA_PATH),
        help="Path to the student performance CSV.",
    )
    parser.add_argument(
        "--artifact-dir",
        type=str,
        default=str(ARTIFACT_DIR),
        help="Where to write models, metrics and config.",
    )
    parser.add_argument(
        "--train-ratio",
        type=float,
        default=DEFAULT_TRAIN_RATIO,
        help="Fraction of rows used for training, strictly between 0 and 1.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=DEFAULT_SEED,
        help="Shuffle seed for reproducibility.",
    )
    parser.add_argument(
        "--features",
        action="append",
        default=None,
        help="Comma-separated feature names or ids (0-4). Repeat for several models; replaces the defaults.",
    )
    parser.add_argument(
        "--keep-missing",
        action="store_true",
        help="Do not drop rows with blank values (fitting will then fail for affected models).",
    )
    parser.add_argument(
        "--drop-zero-response",
        action="store_true",
        help="Drop rows whose performance index is 0.",
    )
    parser.add_argument(
        "--normalize-features",
        action="store_true",
        help="Min-max normalize the continuous predictors before fitting.",
    )
    parser.add_argument(
        "--normalize-response",
        action="store_true",
        help="Min-max normalize the performance index before fitting.",
    )
    parser.add_argument(
        "--histograms",
        action="store_true",
        help="Write per-column histogram PNGs to <artifact-dir>/graphs.",
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> RunConfig:
    """Translate CLI arguments into a RunConfig. Feature typos fail here, before any data is read."""
    if args.features:
        models = {
            f"model_{i}": FeatureSpec(_parse_feature_list(text))
            for i, text in enumerate(args.features, start=1)
        }
    else:
        models = dict(DEFAULT_MODELS)

    return RunConfig(
        data_path=Path(args.data),
        artifact_dir=Path(args.artifact_dir),
        train_ratio=args.train_ratio,
        seed=args.seed,
        drop_missing=not args.keep_missing,
        drop_zero_response=args.drop_zero_response,
        normalize_features=args.normalize_features,
        normalize_response=args.normalize_response,
        plot_histograms=args.histograms,
        models=models,
    )


def prepare_observations(observations: Sequence[Observation], config: RunConfig) -> List[Observation]:
    """Apply the configured row filters."""
    prepared = list(observations)
    if config.drop_missing:
        prepared = drop_missing(prepared)
    if config.drop_zero_response:
        prepared = drop_zero_response(prepared)
    return prepared


def normalized_fields(config: RunConfig) -> List[str]:
    fields: List[str] = []
    if config.normalize_features:
        fields.extend(CONTINUOUS_PREDICTORS)
    if config.normalize_response:
        fields.append(RESPONSE_FIELD)
    return fields


def _fields_for(spec: FeatureSpec, normalize: Sequence[str]) -> List[str]:
    """Normalized columns one model actually reads: its continuous predictors and, if asked, the response."""
    fields = [f for f in spec.names if f in normalize]
    if RESPONSE_FIELD in normalize:
        fields.append(RESPONSE_FIELD)
    return fields


def run_models(
    train: Sequence[Observation],
    evaluation: Sequence[Observation],
    models: Mapping[str, FeatureSpec],
    normalize: Sequence[str] = (),
) -> Tuple[Dict[str, FittedModel], Dict[str, Dict]]:
    """
    Fit and evaluate every model configuration against the same split.

    Columns named in `normalize` are min-max scaled over train + evaluation,
    per model and only where that model uses them, so a constant column only
    fails the models that read it. A failure in one configuration is logged
    and recorded in its metrics entry; the remaining configurations still run.

    Returns
    -------
    fitted : dict
        Model name -> FittedModel, for configurations that succeeded.
    metrics : dict
        Model name -> evaluation summary or {"error": ..., "operation": ...}.
    """
    fitted: Dict[str, FittedModel] = {}
    metrics: Dict[str, Dict] = {}

    for name, spec in models.items():
        try:
            model_train, model_eval = train, evaluation
            fields = _fields_for(spec, normalize)
            if fields:
                scaled = normalize_observations(list(train) + list(evaluation), fields)
                model_train, model_eval = scaled[:len(train)], scaled[len(train):]
            model = fit(model_train, spec)
            result = evaluate(model, model_eval)
        except StudentPerformanceError as e:
            logger.warning(f"{name} {spec.names} skipped: {e}")
            metrics[name] = {"features": spec.names, "error": str(e), "operation": e.operation}
            continue

        if not (math.isfinite(result.mse) and math.isfinite(result.r_squared)):
            logger.warning(f"{name} {spec.names} skipped: evaluation rows contain missing values")
            metrics[name] = {
                "features": spec.names,
                "error": "evaluate: metrics are NaN because evaluation rows contain missing values",
                "operation": "evaluate",
            }
            continue

        fitted[name] = model
        metrics[name] = result.to_dict()
        logger.info(f"{name} {spec.names}: MSE={result.mse:.2f}, R^2={result.r_squared:.6f}")

    return fitted, metrics


def save_artifacts(
    artifact_dir: Path,
    config: RunConfig,
    fitted: Mapping[str, FittedModel],
    metrics: Mapping[str, Dict],
    statistics: pd.DataFrame,
    evaluation: Sequence[Observation],
) -> None:
    model_dir = artifact_dir / "models"
    model_dir.mkdir(parents=True, exist_ok=True)

    for name, model in fitted.items():
        joblib.dump(model, model_dir / f"{name}.pkl")

    features = {name: model.spec.names for name, model in fitted.items()}
    (artifact_dir / "features.json").write_text(json.dumps(features, indent=2))
    (artifact_dir / "metrics.json").write_text(json.dumps(metrics, indent=2, allow_nan=False))
    (artifact_dir / "config.json").write_text(json.dumps(config.to_dict(), indent=2))
    statistics.to_csv(artifact_dir / "statistics.csv", index_label="column")

    observations_to_frame(evaluation).head(300).to_csv(artifact_dir / "sample.csv", index=False)


def run(config: RunConfig) -> Dict[str, Dict]:
    """Execute one full training run and return the per-model metrics."""
    # -----------------------------
    # 1) Load + filter
    # -----------------------------
    observations = prepare_observations(load_observations(config.data_path), config)

    # -----------------------------
    # 2) Shuffle + split
    # -----------------------------
    shuffled = shuffle(observations, config.seed)
    train_raw, eval_raw = split(shuffled, config.train_ratio)
    logger.info(f"Train Data Size: {len(train_raw)}")
    logger.info(f"Test Data Size: {len(eval_raw)}")

    # -----------------------------
    # 3) Training-set statistics
    # -----------------------------
    statistics = summarize_columns(train_raw)
    for col, row in statistics.iterrows():
        logger.info(
            f"{col}: mean={row['mean']:.2f} std={row['std_dev']:.2f} "
            f"min={row['min']:.2f} max={row['max']:.2f} "
            f"p25={row['p25']:.2f} p50={row['p50']:.2f} p75={row['p75']:.2f}"
        )
    if config.plot_histograms:
        plot_histograms(observations, config.artifact_dir / "graphs")

    # -----------------------------
    # 4) Per-model normalization + fit + evaluate
    # -----------------------------
    fitted, metrics = run_models(train_raw, eval_raw, config.models, normalized_fields(config))

    # -----------------------------
    # 5) Save artifacts
    # -----------------------------
    save_artifacts(config.artifact_dir, config, fitted, metrics, statistics, eval_raw)
    logger.info(f"Saved artifacts to: {config.artifact_dir.resolve()}")
    return metrics


def main(argv: Optional[Sequence[str]] = None) -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    config = build_config(parse_args(argv))
    run(config)


if __name__ == "__main__":
    main()
