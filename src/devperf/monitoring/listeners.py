"""
Listener interfaces for session events.

A listener receives the results and error messages of one session. How the
events leave the process is up to the listener: ChannelTransport, for
example, forwards them as named events through an emit callable.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional

from ..models.performance import PerformanceResult

logger = logging.getLogger(__name__)

ResultCallback = Callable[[PerformanceResult], None]
ErrorCallback = Callable[[str], None]


class PerformanceListener(ABC):
    """Receives the events of a monitoring session."""

    @abstractmethod
    def on_result(self, result: PerformanceResult) -> None:
        pass

    @abstractmethod
    def on_error(self, message: str) -> None:
        pass


class CallbackListener(PerformanceListener):
    """Adapts plain callables to the listener interface; either may be None."""

    def __init__(self, on_result: Optional[ResultCallback] = None,
                 on_error: Optional[ErrorCallback] = None):
        self._on_result = on_result
        self._on_error = on_error

    def on_result(self, result: PerformanceResult) -> None:
        if self._on_result is not None:
            self._on_result(result)

    def on_error(self, message: str) -> None:
        if self._on_error is not None:
            self._on_error(message)


class ChannelTransport(PerformanceListener):
    """
    Publishes session events on named channels.

    Results go to ``<namespace>Performance_<session_id>`` with the result's
    ``to_dict()`` payload, errors to ``<namespace>Error_<session_id>`` with a
    ``{"message": ...}`` payload.

    Args:
        session_id: Session whose events this transport carries.
        emit: Callable taking (channel_name, payload).
        namespace: Optional channel prefix, for example ``"DroidDex_"``.
    """

    def __init__(self, session_id: str, emit: Callable[[str, Dict[str, Any]], None],
                 namespace: str = ""):
        self.session_id = session_id
        self.emit = emit
        self.namespace = namespace

    @property
    def result_channel(self) -> str:
        return f"{self.namespace}Performance_{self.session_id}"

    @property
    def error_channel(self) -> str:
        return f"{self.namespace}Error_{self.session_id}"

    def on_result(self, result: PerformanceResult) -> None:
        self.emit(self.result_channel, result.to_dict())

    def on_error(self, message: str) -> None:
        self.emit(self.error_channel, {"message": message})
