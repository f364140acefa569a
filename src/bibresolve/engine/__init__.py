"""Batch orchestration engine.

This package provides the concurrent batch runner together with its
configuration and result types.
"""

from bibresolve.engine.config import BatchResult, ResolverConfig
from bibresolve.engine.runner import run_batch, run_job

__all__ = [
    "ResolverConfig",
    "BatchResult",
    "run_batch",
    "run_job",
]
