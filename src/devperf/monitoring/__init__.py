"""
Continuous monitoring for the devperf package.

Session registry, timer-driven scheduler and event dispatch to listeners.
"""

from .dispatcher import EventDispatcher
from .listeners import CallbackListener, ChannelTransport, PerformanceListener
from .registry import SessionRegistry
from .scheduler import MonitoringScheduler

__all__ = [
    "CallbackListener",
    "ChannelTransport",
    "EventDispatcher",
    "MonitoringScheduler",
    "PerformanceListener",
    "SessionRegistry",
]
