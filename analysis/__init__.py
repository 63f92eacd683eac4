"""Pure analysis package for planboard.

This package contains deterministic, testable computations that operate on
in-memory project records and chart descriptors and return DTOs. It must not
import Django or perform any I/O.
"""

from .completeness import completeness_percentage, score_completeness
from .dispatch import layout_chart, resolve

__all__ = ["completeness_percentage", "layout_chart", "resolve", "score_completeness"]
