"""Latest-wins debouncing for rapidly changing inputs."""

import logging
import threading
from typing import Any, Callable, Optional, Tuple

logger = logging.getLogger(__name__)

DEFAULT_WAIT_SECONDS = 0.3


class Debouncer:
    """
    Collapse bursts of calls into a single invocation of ``callback``.

    Each call to ``call()`` replaces any pending invocation and restarts the
    wait window, so only the most recent arguments are ever applied.
    Superseded calls are dropped, not merged.
    """

    def __init__(self, callback: Callable[..., Any], wait_seconds: float = DEFAULT_WAIT_SECONDS):
        self.callback = callback
        self.wait_seconds = wait_seconds
        self._lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None
        self._pending: Optional[Tuple[tuple, dict]] = None

    @property
    def is_pending(self) -> bool:
        with self._lock:
            return self._pending is not None

    def call(self, *args, **kwargs) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._pending = (args, kwargs)
            self._timer = threading.Timer(self.wait_seconds, self._fire)
            self._timer.daemon = True
            self._timer.start()

    def _take_pending(self) -> Optional[Tuple[tuple, dict]]:
        with self._lock:
            pending, self._pending = self._pending, None
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            return pending

    def _fire(self) -> None:
        pending = self._take_pending()
        if pending is None:
            return
        args, kwargs = pending
        try:
            self.callback(*args, **kwargs)
        except Exception:
            logger.exception("Debounced callback failed")

    def flush(self) -> bool:
        """
        Run the pending invocation now, on the calling thread.

        Returns:
            True if there was a pending invocation.
        """
        pending = self._take_pending()
        if pending is None:
            return False
        args, kwargs = pending
        self.callback(*args, **kwargs)
        return True

    def cancel(self) -> None:
        """Drop the pending invocation, if any."""
        self._take_pending()
