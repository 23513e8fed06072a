"""Pure utility functions for Casper.

This module contains pure functions with ZERO dependencies on casper models
or other casper modules, so they can be imported from anywhere.

Modules:
- graphs: Topological sort and cycle detection
"""

from .graphs import topological_sort, find_cycle, CircularDependencyError

__all__ = [
    # Graphs
    "topological_sort",
    "find_cycle",
    "CircularDependencyError",
]
