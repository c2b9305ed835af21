"""Resource hog load generator.

Runs inside a dedicated worker process. Allocates and touches memory, then
burns CPU in bounded bursts until it is told to stop or its own expiry timer
fires. The expiry timer lives in the worker, so the hard runtime bound holds
even if the controller never sends a stop signal.
"""

import json
import logging
import math
import random
import re
import string
import threading
import time
from functools import reduce
from typing import Any, Dict, List

from resource_hog.constants import (
    HOG_CHUNK_SIZE_BYTES,
    HOG_CHUNK_LOG_EVERY,
    HOG_MINUTE_SECONDS,
    HOG_OPS_STRING_PARTS,
    HOG_OPS_ARRAY_LENGTH,
)
from resource_hog.workers.hog_config import HogConfiguration

logger = logging.getLogger(__name__)

_WORD_PATTERN = re.compile(r"[a-z]+")
_BASE36_DIGITS = string.digits + string.ascii_lowercase


def _base36(value: float) -> str:
    """Render the fractional part of a float as base-36 digits."""
    digits = []
    for _ in range(11):
        value *= 36
        digit = int(value)
        digits.append(_BASE36_DIGITS[digit])
        value -= digit
    return "0." + "".join(digits)


def perform_intensive_ops() -> float:
    """Run one round of mixed CPU work.

    Touches the FPU (transcendentals), the allocator and regex engine
    (string building and matching), list handling (sort/map/filter/reduce)
    and JSON encode/decode. Returns a value derived from the work so callers
    can keep it alive.
    """
    # Math
    total = math.sqrt(random.random() * 1_000_000)
    total += math.sin(random.random() * math.pi)
    total += math.cos(random.random() * math.pi)
    total += math.tan(random.random() * math.pi)
    total += math.log(random.random() * 10_000 + 1)
    total += math.exp(random.random() * 10)
    total += math.pow(random.random() * 100, 2)

    # Strings
    text = "".join(_base36(random.random()) for _ in range(HOG_OPS_STRING_PARTS))
    words = _WORD_PATTERN.findall(text)

    # Arrays
    values = [random.random() for _ in range(HOG_OPS_ARRAY_LENGTH)]
    values.sort()
    values.reverse()
    doubled = [x * 2 for x in values]
    total += reduce(lambda a, b: a + b, (x for x in doubled if x > 0.5), 0.0)

    # Objects
    payload = json.dumps({"data": values, "timestamp": time.time(), "str": text})
    decoded = json.loads(payload)

    return total + len(words) + len(decoded["data"])


def burn_cpu(duration_ms: int, intensity_multiplier: int) -> int:
    """Busy loop for duration_ms of wall-clock time.

    The burst is not interruptible; callers check for stop between bursts.

    Returns:
        Number of loop iterations completed
    """
    end = time.perf_counter() + duration_ms / 1000.0
    iterations = 0
    while time.perf_counter() < end:
        for _ in range(intensity_multiplier):
            perform_intensive_ops()
        iterations += 1
    return iterations


def allocate_memory(target_mb: int, should_stop, chunk_size: int = HOG_CHUNK_SIZE_BYTES) -> List[bytearray]:
    """Allocate and fill chunks until target_mb is reached or should_stop().

    Every byte of every chunk is written so the pages are resident, not just
    reserved.

    Args:
        target_mb: Memory to allocate in MiB
        should_stop: Zero-arg callable checked before each chunk
        chunk_size: Size of each chunk in bytes

    Returns:
        The allocated chunks (caller keeps them alive)
    """
    target_bytes = target_mb * 1024 * 1024
    chunks: List[bytearray] = []
    allocated = 0

    logger.info("Starting memory allocation: %sMB", target_mb)

    while allocated < target_bytes and not should_stop():
        fill = random.randrange(256)
        chunk = bytearray(bytes([fill])) * chunk_size
        chunks.append(chunk)
        allocated += chunk_size

        if len(chunks) % HOG_CHUNK_LOG_EVERY == 0:
            logger.info("Allocated %sMB", allocated // (1024 * 1024))

    logger.info("Memory allocation complete: %sMB", allocated // (1024 * 1024))
    return chunks


def hog_worker_target(
    config: HogConfiguration,
    stop_event,
    minute_seconds: float = HOG_MINUTE_SECONDS,
) -> Dict[str, Any]:
    """Standalone worker function for multiprocessing.

    This function is pickle-able and is used as the target for the
    controller's multiprocessing.Process.

    Args:
        config: Clamped hog configuration
        stop_event: multiprocessing.Event set by the controller to stop
        minute_seconds: Length of one expiry minute in seconds

    Returns:
        Execution summary dictionary
    """
    expired = threading.Event()
    expiry_seconds = config.max_minutes * minute_seconds
    expiry_timer = threading.Timer(expiry_seconds, expired.set)
    expiry_timer.daemon = True
    expiry_timer.start()

    def should_stop() -> bool:
        return stop_event.is_set() or expired.is_set()

    logger.info("Starting resource hog with config: %s", config.to_dict())
    start_time = time.time()
    chunks: List[bytearray] = []
    bursts = 0
    iterations = 0

    try:
        if config.memory_mb > 0:
            chunks = allocate_memory(config.memory_mb, should_stop)

        logger.info("Starting CPU burn loop")
        while not should_stop():
            iterations += burn_cpu(config.cpu_slice_ms, config.intensity_multiplier)
            bursts += 1
            # Yield so the stop signal and expiry timer get scheduled
            time.sleep(0)
    finally:
        expiry_timer.cancel()

    reason = "expired" if expired.is_set() and not stop_event.is_set() else "stopped"
    if reason == "expired":
        logger.info("Auto-stopping after %s minutes", config.max_minutes)
    else:
        logger.info("Stopping CPU burn loop")

    bytes_allocated = sum(len(chunk) for chunk in chunks)
    chunks.clear()

    return {
        "reason": reason,
        "bytes_allocated": bytes_allocated,
        "bursts": bursts,
        "iterations": iterations,
        "duration_seconds": round(time.time() - start_time, 2),
    }
