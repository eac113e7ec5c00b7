"""
Timer Coordination Service - keeps at most one task timer running.

Architecture Decision: Explicit handle registry
Timers are registered under their ``handle_id`` rather than tracked by object
identity, so membership is explicit and a stale reference can never
masquerade as a registered timer.
"""

import logging
from typing import Dict, List, Optional, Protocol

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    """What the coordinator needs from a registered timer"""

    @property
    def handle_id(self) -> str: ...

    @property
    def is_running(self) -> bool: ...

    def stop_timer(self) -> None: ...


class TimerCoordinationService:
    """
    Registry of live task timers.

    Call ``stop_all_except(handle)`` right before starting ``handle`` so that
    exactly one timer runs afterwards.
    """

    def __init__(self):
        self._registered: Dict[str, TimerHandle] = {}

    @property
    def registered_count(self) -> int:
        return len(self._registered)

    def is_registered(self, handle: TimerHandle) -> bool:
        return handle.handle_id in self._registered

    def register(self, handle: TimerHandle) -> None:
        """Add a timer; registering twice is a no-op"""
        if handle.handle_id not in self._registered:
            self._registered[handle.handle_id] = handle
            logger.debug(f"Registered timer {handle.handle_id}")

    def unregister(self, handle: TimerHandle) -> None:
        """Remove a timer if present"""
        if self._registered.pop(handle.handle_id, None) is not None:
            logger.debug(f"Unregistered timer {handle.handle_id}")

    def stop_all_except(self, except_handle: Optional[TimerHandle] = None) -> None:
        """
        Stop every running registered timer other than ``except_handle``.

        Args:
            except_handle: Timer to leave untouched; None stops all of them
        """
        except_id = except_handle.handle_id if except_handle is not None else None
        # stop_timer() may unregister re-entrantly, so iterate over a copy
        for handle_id, handle in list(self._registered.items()):
            if handle_id != except_id and handle.is_running:
                logger.debug(f"Stopping timer {handle_id}")
                handle.stop_timer()

    def running_handles(self) -> List[TimerHandle]:
        return [h for h in self._registered.values() if h.is_running]

    def clear(self) -> None:
        """Forget every registered timer (teardown)"""
        self._registered.clear()
