"""
student_performance/make_synthetic_data.py

Creates a realistic-looking synthetic student performance dataset in the same
layout as the public "Student Performance" CSV (same headers, Yes/No flag,
integer-valued habits).

Outputs:
  data/student_performance_synthetic.csv
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

import numpy as np
import pandas as pd

from student_performance.config import DEFAULT_DATA_PATH


logger = logging.getLogger(__name__)


def generate_student_performance_dataset(
    n_students: int = 10000,
    random_state: int = 42,
    missing_rate: float = 0.0,
) -> pd.DataFrame:
    rng = np.random.default_rng(random_state)

    # --- Study habits
    hours_studied = rng.integers(1, 10, size=n_students)
    previous_scores = rng.integers(40, 100, size=n_students)
    extracurricular = rng.binomial(1, 0.49, size=n_students)
    sleep_hours = rng.integers(4, 10, size=n_students)
    sample_papers = rng.integers(0, 10, size=n_students)

    # --- Outcome: mostly previous scores and hours studied
    performance = (
        -34.0
        + 2.85 * hours_studied
        + 1.02 * previous_scores
        + 0.61 * extracurricular
        + 0.48 * sleep_hours
        + 0.19 * sample_papers
        + rng.normal(0, 2.0, size=n_students)
    )
    performance = np.clip(np.round(performance), 10, 100)

    df = pd.DataFrame(
        {
            "Hours Studied": hours_studied.astype(float),
            "Previous Scores": previous_scores.astype(float),
            "Extracurricular Activities": np.where(extracurricular == 1, "Yes", "No"),
            "Sleep Hours": sleep_hours.astype(float),
            "Sample Question Papers Practiced": sample_papers.astype(float),
            "Performance Index": performance,
        }
    )

    # Blank out a fraction of numeric cells to exercise missing-value handling.
    if missing_rate > 0:
        numeric_cols = [c for c in df.columns if c != "Extracurricular Activities"]
        mask = rng.random((n_students, len(numeric_cols))) < missing_rate
        df[numeric_cols] = df[numeric_cols].mask(mask)

    return df


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate a synthetic student performance CSV.")
    parser.add_argument("--out", type=str, default=str(DEFAULT_DATA_PATH), help="Output CSV path.")
    parser.add_argument("--n-students", type=int, default=10000, help="Number of rows.")
    parser.add_argument("--random-state", type=int, default=42, help="Random seed.")
    parser.add_argument(
        "--missing-rate",
        type=float,
        default=0.0,
        help="Fraction of numeric cells left blank.",
    )
    return parser.parse_args()


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    args = parse_args()

    out_path = Path(args.out)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    df = generate_student_performance_dataset(
        n_students=args.n_students,
        random_state=args.random_state,
        missing_rate=args.missing_rate,
    )
    df.to_csv(out_path, index=False)

    logger.info(f"Wrote {len(df)} rows to {out_path}")
    logger.info(f"Mean performance index: {df['Performance Index'].mean():.2f}")
    logger.info(f"Columns: {list(df.columns)}")


if __name__ == "__main__":
    main()
