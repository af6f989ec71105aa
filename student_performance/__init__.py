"""Statistics and OLS regression for student performance data."""

__version__ = "0.1.0"
