"""Application constants for resource-hog.

Centralizes magic numbers and configuration values to improve maintainability.
"""

# =============================================================================
# Hog Configuration Limits (values outside the range are clamped, not rejected)
# =============================================================================
HOG_MAX_MEMORY_MB = 2048
HOG_MIN_MEMORY_MB = 0
HOG_DEFAULT_MEMORY_MB = 256

HOG_MAX_CPU_SLICE_MS = 200
HOG_MIN_CPU_SLICE_MS = 1
HOG_DEFAULT_CPU_SLICE_MS = 20

HOG_MAX_MINUTES = 120
HOG_MIN_MINUTES = 1
HOG_DEFAULT_MINUTES = 10

HOG_MAX_INTENSITY = 100
HOG_MIN_INTENSITY = 1
HOG_DEFAULT_INTENSITY = 2

# =============================================================================
# Load Generator
# =============================================================================
HOG_CHUNK_SIZE_BYTES = 8 * 1024 * 1024  # 8 MiB
HOG_CHUNK_LOG_EVERY = 32  # log allocation progress every N chunks

# Intensive ops workload shape
HOG_OPS_STRING_PARTS = 100
HOG_OPS_ARRAY_LENGTH = 50

# =============================================================================
# Process Management
# =============================================================================
HOG_GRACE_PERIOD_SECONDS = 1.0  # stop signal -> forced terminate
HOG_MINUTE_SECONDS = 60.0  # length of one expiry "minute"
PROCESS_TERMINATE_TIMEOUT = 1  # seconds to join after terminate()
HOG_PROCESS_NAME = "resource-hog"

# =============================================================================
# Wire status values
# =============================================================================
STATUS_STARTED = "started"
STATUS_STOPPED = "stopped"
STATUS_RUNNING = "running"
STATUS_NOT_RUNNING = "not_running"
