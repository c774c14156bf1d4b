"""Race an awaitable against a millisecond deadline."""

import asyncio
from typing import Awaitable, Optional, TypeVar

from ..exceptions import HookTimeoutError

T = TypeVar("T")


def _discard_outcome(task: "asyncio.Future[T]") -> None:
    # Retrieve the late outcome so asyncio does not report it as never retrieved
    if not task.cancelled():
        task.exception()


async def with_timeout(
    pending: Awaitable[T], timeout_ms: int, name: Optional[str] = None
) -> T:
    """Await ``pending`` for at most ``timeout_ms`` milliseconds.

    When the deadline elapses first the pending work is cancelled and its
    eventual outcome is discarded, never returned to the caller.

    A ``TimeoutError`` raised by ``pending`` itself is propagated unchanged;
    only an elapsed deadline produces ``HookTimeoutError``.

    Args:
        pending: Coroutine, task or future to wait for
        timeout_ms: Deadline in milliseconds
        name: Optional label used in the timeout error message

    Returns:
        Whatever ``pending`` resolves to

    Raises:
        HookTimeoutError: If the deadline elapses before ``pending`` settles
    """
    task = asyncio.ensure_future(pending)
    try:
        done, _ = await asyncio.wait({task}, timeout=timeout_ms / 1000)
    except asyncio.CancelledError:
        task.cancel()
        raise

    if task not in done:
        task.add_done_callback(_discard_outcome)
        task.cancel()
        raise HookTimeoutError(timeout_ms, name)

    return task.result()
