from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, Optional, TypeVar

from .errors import GigError


logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class Outcome(Generic[T]):
    value: Optional[T] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


Callback = Callable[[Outcome[Any]], None]


async def _resolve(op: Awaitable[T], callback: Callback) -> None:
    try:
        value = await op
    except GigError as e:
        callback(Outcome(error=e))
        return
    except Exception as e:
        logger.error(f"Unexpected error in dispatched operation: {e!r}")
        callback(Outcome(error=e))
        return
    callback(Outcome(value=value))


def dispatch(op: Awaitable[T], callback: Callback, pending: set[asyncio.Task]) -> asyncio.Task:
    """Run `op` in the background and hand its outcome to `callback` once.

    The callback never runs before this function returns. Any exception from
    `op` becomes `Outcome.error`; cancellation skips the callback. `pending`
    holds a reference to the task until it finishes.
    """
    task = asyncio.create_task(_resolve(op, callback))
    pending.add(task)
    task.add_done_callback(pending.discard)
    return task
