"""
In-process timing statistics.

A Profiler records scopes and checkpoints into a timing tree; the report
generator turns that tree into rows and a severity-colored table.
"""
from .tree import Node, TimingTree
from .profiler import Profiler
from .report import DEFAULT_COLOR_SCHEMA, ReportGenerator, Row

__all__ = [
    'Node',
    'TimingTree',
    'Profiler',
    'ReportGenerator',
    'Row',
    'DEFAULT_COLOR_SCHEMA',
]
