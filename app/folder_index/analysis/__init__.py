"""Aggregate analysis of finished index tables."""

from folder_index.analysis.reports import AnalysisError, AnalysisReport, run_analysis

__all__ = ["AnalysisError", "AnalysisReport", "run_analysis"]
