"""Spam analysis services."""

from .analyzer import AnalysisService, analyze, report_payload, trigger_pattern

__all__ = ["AnalysisService", "analyze", "report_payload", "trigger_pattern"]
