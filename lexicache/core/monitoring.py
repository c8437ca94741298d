"""
Monitoring utilities for metrics and error tracking
"""
from typing import Dict, Any, Optional
from datetime import datetime, timezone
from functools import wraps
import logging
import time

logger = logging.getLogger(__name__)


def track_error(
    error_type: str,
    code: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None
):
    """
    Track error for monitoring.

    Args:
        error_type: Type of error (e.g. "adapter.locales.create")
        code: Machine-readable error code, if known
        metadata: Additional metadata
    """
    error_data = {
        "error_type": error_type,
        "code": code,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "metadata": metadata or {},
    }

    logger.error(f"Error tracked: {error_data}")


def track_metric(
    metric_name: str,
    value: float,
    tags: Optional[Dict[str, str]] = None
):
    """
    Track metric for monitoring.

    Args:
        metric_name: Name of metric
        value: Metric value
        tags: Additional tags
    """
    metric_data = {
        "metric": metric_name,
        "value": value,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "tags": tags or {},
    }

    logger.info(f"Metric: {metric_data}")


def monitor_performance(func):
    """
    Decorator to time a coroutine and report its duration.

    Usage:
        @monitor_performance
        async def init(self):
            ...
    """
    @wraps(func)
    async def wrapper(*args, **kwargs):
        start_time = time.perf_counter()
        status = "success"
        try:
            return await func(*args, **kwargs)
        except Exception as e:
            status = "error"
            track_error(
                f"{func.__qualname__}.error",
                code=getattr(getattr(e, "code", None), "value", None),
                metadata={"error": str(e)}
            )
            raise
        finally:
            track_metric(
                f"{func.__qualname__}.duration",
                time.perf_counter() - start_time,
                tags={"status": status}
            )

    return wrapper
