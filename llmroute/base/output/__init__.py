"""Output policy: plan derivation and response aggregation."""

from .output_plan import OutputPlan, PathLike
from .aggregator import ResponseAggregator

__all__ = ["OutputPlan", "PathLike", "ResponseAggregator"]
