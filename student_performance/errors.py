"""
student_performance/errors.py

Typed failures raised by the statistics and regression engine.

Two kinds exist:
  - InvalidInputError     : malformed configuration or arguments
                            (bad ratio, unknown feature, wrong vector length, empty input)
  - DegenerateInputError  : the requested quantity is statistically undefined
                            (constant column, rank-deficient design matrix, zero total variance)

Both carry the name of the failing operation and the offending parameters so a
caller running several model configurations can log the failure and move on.
"""

from __future__ import annotations

from typing import Any, Dict


class StudentPerformanceError(ValueError):
    """Base class for every engine failure."""

    def __init__(self, operation: str, message: str, **params: Any) -> None:
        self.operation = operation
        self.params: Dict[str, Any] = params
        detail = ", ".join(f"{k}={v!r}" for k, v in params.items())
        text = f"{operation}: {message}"
        if detail:
            text = f"{text} ({detail})"
        super().__init__(text)


class InvalidInputError(StudentPerformanceError):
    pass


class DegenerateInputError(StudentPerformanceError):
    pass
