"""Injectable container for the session state."""

import logging
from typing import Callable, Optional

from snapbridge.session.state import SessionState, Transition, reduce

logger = logging.getLogger(__name__)

Listener = Callable[[SessionState, Transition], None]


class SessionStore:
    """Holds the authoritative SessionState and applies transitions.

    The store trusts its callers: it does not stop two operations from
    dispatching concurrently. Gating on ``state.locked`` is the caller's job.
    """

    def __init__(self, initial: Optional[SessionState] = None):
        self._state = initial or SessionState()
        self._listeners: list[Listener] = []

    @property
    def state(self) -> SessionState:
        return self._state

    def dispatch(self, transition: Transition) -> SessionState:
        """Apply a transition and notify listeners."""
        self._state = reduce(self._state, transition)
        logger.debug("Session transition: %s", transition)
        for listener in list(self._listeners):
            listener(self._state, transition)
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
