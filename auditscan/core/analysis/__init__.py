"""
Analysis engine boundary.

Exports the AnalysisEngine protocol the dispatcher depends on and the
default engine that drives the scan lifecycle.
"""

from auditscan.core.analysis.engine import (
    AnalysisEngine,
    Analyzer,
    LifecycleAnalysisEngine,
    no_findings,
)

__all__ = ["AnalysisEngine", "Analyzer", "LifecycleAnalysisEngine", "no_findings"]
