"""Threading utilities for sizing the background probe pools."""

import os
import sys
from typing import Dict, Any, Optional


def is_free_threading_enabled() -> bool:
    """Detect if Python is running with free-threading enabled.

    Returns:
        True if running on Python 3.13+ with the GIL disabled
    """
    is_gil_enabled = getattr(sys, "_is_gil_enabled", None)
    if is_gil_enabled is None:
        return False
    return not is_gil_enabled()


def get_python_threading_mode() -> str:
    """Get a description of the current threading mode."""
    is_gil_enabled = getattr(sys, "_is_gil_enabled", None)
    if is_gil_enabled is None:
        return "GIL-enabled (Python < 3.13)"
    return "GIL-enabled" if is_gil_enabled() else "free-threading"


def get_optimal_worker_count(user_specified: Optional[int] = None, cap: int = 32) -> int:
    """Calculate the status probe worker count.

    Probes spend their time waiting on git subprocesses, so the pool is sized
    for I/O-bound work rather than CPU count alone.

    Args:
        user_specified: User-specified worker count, if provided
        cap: Upper bound for the auto-detected count

    Returns:
        Number of workers for parallel probing
    """
    if user_specified is not None and user_specified > 0:
        return user_specified

    cpu_count = os.cpu_count() or 1

    if is_free_threading_enabled():
        return min(cap * 2, cpu_count * 2)

    # CPU_count + 4 is the usual heuristic for I/O-bound pools
    return min(cap, cpu_count + 4)


def get_threading_info() -> Dict[str, Any]:
    """Get information about the Python threading configuration."""
    return {
        "mode": get_python_threading_mode(),
        "free_threading": is_free_threading_enabled(),
        "cpu_count": os.cpu_count() or 1,
        "optimal_workers": get_optimal_worker_count(),
        "python_version": f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}",
    }
