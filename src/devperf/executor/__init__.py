"""
Task execution for the devperf package.

Provides the managed thread pool used to deliver events to listeners.
"""

from .thread_pool import ManagedThreadPoolExecutor, ThreadPoolConfig

__all__ = [
    "ManagedThreadPoolExecutor",
    "ThreadPoolConfig",
]
