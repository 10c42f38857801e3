"""Diagnostic channel for AI decision visibility.

Messages have no effect on the simulation. When disabled, nothing is
forwarded; call sites that format per tick check ``enabled`` first.
"""

from typing import Callable, Optional
import logging

logger = logging.getLogger(__name__)

DiagnosticSink = Callable[[str], None]


class DiagnosticChannel:
    """
    Gated sink for free-form diagnostic strings.

    Usage:
        channel = DiagnosticChannel(enabled=True, sink=messages.append)
        channel.emit("AI idle: all skills on cooldown")
    """

    def __init__(self, enabled: bool = False, sink: Optional[DiagnosticSink] = None):
        self.enabled = enabled
        self.sink = sink

    def emit(self, message: str) -> None:
        if not self.enabled:
            return
        if self.sink is not None:
            self.sink(message)
        else:
            logger.debug(message)

    @classmethod
    def disabled(cls) -> "DiagnosticChannel":
        return cls(enabled=False)
