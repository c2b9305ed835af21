"""Services module for resource-hog.

This module provides the HogController, which owns the lifecycle of the
single active load generator.
"""

from resource_hog.services.hog_controller import (
    GeneratorHandle,
    GeneratorSpawnError,
    HogController,
    HogError,
    HogState,
    StartResult,
    StatusResult,
    StopResult,
)

__all__ = [
    "GeneratorHandle",
    "GeneratorSpawnError",
    "HogController",
    "HogError",
    "HogState",
    "StartResult",
    "StatusResult",
    "StopResult",
]
