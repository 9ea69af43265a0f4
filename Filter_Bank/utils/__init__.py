"""Utility modules for signal processing."""
from .rolling_stats import RollingStatistics, RollingTimeSeries, SignalComparison, StatsSummary, ComparisonSummary
from . import matrix2
