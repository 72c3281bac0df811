"""Reporting utilities for brains."""

from .metrics import EpochLog
from .summary import parameter_count, summarize, write_summary

__all__ = ["EpochLog", "parameter_count", "summarize", "write_summary"]
