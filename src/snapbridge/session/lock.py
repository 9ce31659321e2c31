"""Single-flight lock for user-triggered operations.

The lock is the ``locked`` flag of the session state. Acquiring it sets the
flag; leaving the block clears it again whatever happened inside, including
failures and task cancellation.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from snapbridge.errors import OperationInProgressError
from snapbridge.session.state import SetLocked
from snapbridge.session.store import SessionStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def operation_lock(
    store: SessionStore,
    operation: str = "operation",
) -> AsyncIterator[SessionStore]:
    """Hold the session lock for the duration of one operation.

    Args:
        store: Session store whose lock flag is held
        operation: Description for logging

    Raises:
        OperationInProgressError: If another operation holds the lock

    Example:
        async with operation_lock(store, operation="balance"):
            result = await invoker.request_balance()
    """
    if store.state.locked:
        logger.warning(f"Lock busy, rejecting {operation}")
        raise OperationInProgressError(operation)

    store.dispatch(SetLocked(True))
    logger.debug(f"Lock acquired: {operation}")
    try:
        yield store
    finally:
        store.dispatch(SetLocked(False))
        logger.debug(f"Lock released: {operation}")
