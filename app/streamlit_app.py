"""
app/streamlit_app.py

Purpose
-------
A Streamlit dashboard that:
  - loads a student performance CSV (upload or synthetic demo data)
  - shows per-column statistics and histograms for the training split
  - fits an OLS model on a user-selected feature subset
  - reports MSE / R^2 on the evaluation split plus the fitted coefficients
  - scores rows with a saved model bundle when artifacts exist
"""

from pathlib import Path

import matplotlib.pyplot as plt
import pandas as pd
import streamlit as st

from student_performance.config import DEFAULT_SEED, DEFAULT_TRAIN_RATIO
from student_performance.data_dictionary import DATA_DICTIONARY
from student_performance.dataset import NUMERIC_FIELDS, column, drop_missing, observations_from_frame
from student_performance.errors import StudentPerformanceError
from student_performance.evaluate import evaluate
from student_performance.features import Feature, FeatureSpec
from student_performance.inference import available_models, load_bundle, score, validate_features
from student_performance.make_synthetic_data import generate_student_performance_dataset
from student_performance.normalize import normalize_observations
from student_performance.plots import histogram_figure
from student_performance.regression import fit
from student_performance.split import shuffle, split
from student_performance.stats import summarize_columns


st.set_page_config(
    page_title="Student Performance Regression",
    layout="wide",
)
st.title("📈 Student Performance Regression")

ART = Path("artifacts")


# ---------------------------------------------------------------------
# Caching helpers
# ---------------------------------------------------------------------
@st.cache_data
def get_demo_frame() -> pd.DataFrame:
    return generate_student_performance_dataset(n_students=2000, random_state=42)


# ---------------------------------------------------------------------
# Sidebar controls
# ---------------------------------------------------------------------
st.sidebar.header("Controls")

selected = st.sidebar.multiselect(
    "Features",
    options=[f.field for f in Feature],
    default=[f.field for f in Feature],
    help="Order of selection is the coefficient order.",
)
train_ratio = st.sidebar.slider("Train ratio", min_value=0.05, max_value=0.95, value=DEFAULT_TRAIN_RATIO, step=0.05)
seed = st.sidebar.number_input("Shuffle seed", min_value=0, value=DEFAULT_SEED, step=1)
normalize_features = st.sidebar.checkbox("Normalize continuous predictors", value=False)


# ---------------------------------------------------------------------
# Data input section
# ---------------------------------------------------------------------
st.subheader("Dataset")
file = st.file_uploader("Upload a Student Performance CSV", type="csv")

if file:
    raw = pd.read_csv(file, keep_default_na=False)
else:
    st.info("No file uploaded. Using a synthetic demo dataset.")
    raw = get_demo_frame()

try:
    observations = drop_missing(observations_from_frame(raw))
except ValueError as e:
    st.error("Input data failed validation.")
    st.code(str(e))
    st.stop()

if len(observations) == 0:
    st.warning("No complete rows available.")
    st.stop()

train, evaluation = split(shuffle(observations, int(seed)), train_ratio)
st.caption(f"Train rows: {len(train)} | Evaluation rows: {len(evaluation)}")


# ---------------------------------------------------------------------
# Statistics + histograms (training split)
# ---------------------------------------------------------------------
col1, col2 = st.columns([2, 1])

with col1:
    st.subheader("Training-set statistics")
    try:
        st.dataframe(summarize_columns(train), use_container_width=True)
    except StudentPerformanceError as e:
        st.warning(str(e))

with col2:
    st.subheader("Histogram")
    field = st.selectbox("Column", NUMERIC_FIELDS, format_func=lambda c: DATA_DICTIONARY.get(c, c))
    fig = histogram_figure(column(train, field), field)
    st.pyplot(fig)
    plt.close(fig)


# ---------------------------------------------------------------------
# Fit + evaluate
# ---------------------------------------------------------------------
st.subheader("Model")

try:
    spec = FeatureSpec(selected)
    if normalize_features:
        cont = [f for f in spec.names if f != Feature.EXTRACURRICULAR_ACTIVITIES.field]
        if cont:
            train, evaluation = split(
                normalize_observations(train + evaluation, cont),
                train_ratio,
            )
    result = evaluate(fit(train, spec), evaluation)
except StudentPerformanceError as e:
    st.error(f"Model could not be fitted: {e}")
    st.stop()

m1, m2 = st.columns(2)
m1.metric("MSE", f"{result.mse:.2f}")
m2.metric("R²", f"{result.r_squared:.6f}")
st.caption("R² is measured against the training-set mean performance index.")
st.dataframe(result.model.coefficients_by_name().to_frame(), use_container_width=True)


# ---------------------------------------------------------------------
# Score with a saved bundle
# ---------------------------------------------------------------------
names = available_models(ART) if ART.exists() else []
if names:
    st.subheader("Score with a saved model")
    name = st.selectbox("Saved model", names)
    try:
        bundle = load_bundle(name, ART)
        X, warnings = validate_features(raw, bundle.features)
        for w in warnings:
            st.warning(w)
    except (FileNotFoundError, ValueError) as e:
        st.error("Saved model could not be used.")
        st.code(str(e))
        st.stop()

    out = raw.copy()
    out["predicted_performance_index"] = score(raw, bundle)
    st.dataframe(out.head(50), use_container_width=True)
    st.download_button(
        "Download scored CSV",
        data=out.to_csv(index=False).encode("utf-8"),
        file_name="scored.csv",
        mime="text/csv",
    )
else:
    st.caption("No saved models found. Train first: `python -m student_performance.train`.")
