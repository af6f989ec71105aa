"""
student_performance/plots.py

Histogram images for the numeric columns of a dataset.
One PNG per column: <out_dir>/<ColumnName>_hist.png, 15cm x 15cm.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Sequence, Union

import matplotlib.pyplot as plt
import numpy as np

from student_performance.dataset import NUMERIC_FIELDS, Observation, column


logger = logging.getLogger(__name__)

FIGSIZE_IN = 15 / 2.54
DEFAULT_BINS = 16


def _title(field: str) -> str:
    return "".join(part.capitalize() for part in field.split("_"))


def histogram_figure(values: Sequence[float], title: str, bins: int = DEFAULT_BINS) -> plt.Figure:
    """Raw-count histogram; NaN values are left out of the plot."""
    data = np.asarray(values, dtype=float)
    data = data[~np.isnan(data)]

    fig, ax = plt.subplots(figsize=(FIGSIZE_IN, FIGSIZE_IN))
    ax.hist(data, bins=bins)
    ax.set_title(f"Histogram of {title}")
    ax.set_ylabel("Frequency")
    return fig


def plot_histograms(
    observations: Sequence[Observation],
    out_dir: Union[str, Path] = Path("graphs"),
    bins: int = DEFAULT_BINS,
) -> List[Path]:
    """Write one histogram per numeric column and return the written paths."""
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    written = []
    for field in NUMERIC_FIELDS:
        title = _title(field)
        fig = histogram_figure(column(observations, field), title, bins=bins)
        path = out_dir / f"{title}_hist.png"
        fig.savefig(path)
        plt.close(fig)
        written.append(path)

    logger.info(f"Wrote {len(written)} histograms to {out_dir}")
    return written
