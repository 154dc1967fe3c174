"""
Change Bus — the single "state-updated" channel.

Publishers emit after a mutation is fully applied. Every notice carries a
cause so subscribers can tell genuine edits from restores.
"""

import logging
from typing import Callable, List

from cosmos_kernel.models.timeline import ChangeCause, ChangeNotice

logger = logging.getLogger(__name__)

STATE_UPDATED = "state-updated"

Listener = Callable[[ChangeNotice], None]


class ChangeBus:
    """Synchronous pub/sub. Listeners run in subscription order, in the emitting turn."""

    def __init__(self):
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener. Returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def emit(
        self,
        cause: ChangeCause = ChangeCause.EDIT,
        reason: str = "state-change",
    ) -> ChangeNotice:
        notice = ChangeNotice(cause=cause, reason=reason)
        logger.debug("%s (%s: %s)", STATE_UPDATED, cause.value, reason)
        for listener in list(self._listeners):
            listener(notice)
        return notice

    @property
    def listener_count(self) -> int:
        return len(self._listeners)
