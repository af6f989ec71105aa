"""
student_performance/config.py

Run settings for a training run. These are the only tunables the engine takes:
which feature subsets to fit, the train ratio and the shuffle seed, plus the
optional filtering/normalization steps applied before fitting.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping

from student_performance.features import Feature, FeatureSpec


ARTIFACT_DIR = Path("artifacts")
DEFAULT_DATA_PATH = Path("data/student_performance_synthetic.csv")
DEFAULT_TRAIN_RATIO = 0.8
DEFAULT_SEED = 42

# The three configurations reported by the original analysis.
DEFAULT_MODELS: Dict[str, FeatureSpec] = {
    "model_1": FeatureSpec([
        Feature.HOURS_STUDIED,
        Feature.PREVIOUS_SCORES,
        Feature.EXTRACURRICULAR_ACTIVITIES,
    ]),
    "model_2": FeatureSpec([
        Feature.PREVIOUS_SCORES,
        Feature.EXTRACURRICULAR_ACTIVITIES,
        Feature.SAMPLE_QUESTION_PAPERS_PRACTICED,
    ]),
    "model_3": FeatureSpec(list(Feature)),
}


@dataclass(frozen=True)
class RunConfig:
    data_path: Path = DEFAULT_DATA_PATH
    artifact_dir: Path = ARTIFACT_DIR
    train_ratio: float = DEFAULT_TRAIN_RATIO
    seed: int = DEFAULT_SEED
    drop_missing: bool = True
    drop_zero_response: bool = False
    normalize_features: bool = False
    normalize_response: bool = False
    plot_histograms: bool = False
    models: Mapping[str, FeatureSpec] = field(default_factory=lambda: dict(DEFAULT_MODELS))

    def to_dict(self) -> Dict:
        """JSON-friendly view, written to artifacts/config.json."""
        return {
            "data_path": str(self.data_path),
            "artifact_dir": str(self.artifact_dir),
            "train_ratio": self.train_ratio,
            "seed": self.seed,
            "drop_missing": self.drop_missing,
            "drop_zero_response": self.drop_zero_response,
            "normalize_features": self.normalize_features,
            "normalize_response": self.normalize_response,
            "plot_histograms": self.plot_histograms,
            "models": {name: spec.names for name, spec in self.models.items()},
            "model_type": "OrdinaryLeastSquares",
        }
