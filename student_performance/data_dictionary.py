"""
student_performance/data_dictionary.py

A simple mapping of column -> description used by the Streamlit UI and the
statistics report.
"""

DATA_DICTIONARY = {
    "hours_studied": "Total hours the student spent studying.",
    "previous_scores": "Score obtained in previous tests (0–100).",
    "extracurricular_activities": "Takes part in extracurricular activities (Yes/No; 1/0 as a feature).",
    "sleep_hours": "Average hours of sleep per day.",
    "sample_question_papers_practiced": "Number of sample question papers practiced.",
    "performance_index": "Target variable: overall performance index (10–100).",
    "predicted_performance_index": "Model-predicted performance index.",
}
