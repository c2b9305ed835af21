"""Worker module for load generation.

The load generator runs in a separate process to keep the Flask process
responsive while it burns CPU and holds memory.
"""

from resource_hog.workers.hog_config import HogConfiguration, parse_config
from resource_hog.workers.hog_worker import (
    allocate_memory,
    burn_cpu,
    hog_worker_target,
    perform_intensive_ops,
)

__all__ = [
    "HogConfiguration",
    "parse_config",
    "allocate_memory",
    "burn_cpu",
    "hog_worker_target",
    "perform_intensive_ops",
]
