"""Graceful shutdown on termination signals."""

from __future__ import annotations

import os
import signal
import threading
from types import FrameType
from typing import Optional

if os.name == "nt":
    _SHUTDOWN_SIGNALS: tuple[signal.Signals, ...] = (signal.SIGINT,)
else:
    _SHUTDOWN_SIGNALS = (signal.SIGINT, signal.SIGTERM)

_lock = threading.Lock()
_installed = False


def setup_signal_handler() -> threading.Event:
    """Install handlers for the shutdown signals and return a stop event.

    The event is set on the first signal; a second signal ends the process
    with exit code 1. Calling this more than once raises RuntimeError.
    """
    global _installed
    with _lock:
        if _installed:
            raise RuntimeError("signal handler has already been set up")
        _installed = True

    stop = threading.Event()
    received = 0

    def _handle(signum: int, frame: Optional[FrameType]) -> None:
        nonlocal received
        received += 1
        if received == 1:
            stop.set()
        else:
            os._exit(1)

    for sig in _SHUTDOWN_SIGNALS:
        signal.signal(sig, _handle)
    return stop