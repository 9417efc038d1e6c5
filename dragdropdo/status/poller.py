"""Polling a task until it reaches a terminal state.

The poller fetches the status right away, hands every snapshot to the
optional ``on_update`` callback and returns as soon as the task is
``completed`` or ``failed``. Between fetches it sleeps for ``interval``
seconds. The deadline is checked before every fetch, so no request is sent
once ``timeout`` seconds have elapsed.
"""

import asyncio
import logging
import time
from collections.abc import Callable
from typing import Optional

from dragdropdo.const import DEFAULT_POLL_INTERVAL_SECONDS, DEFAULT_POLL_TIMEOUT_SECONDS
from dragdropdo.exceptions import D3ClientError, D3TimeoutError
from dragdropdo.models import TaskStatus
from dragdropdo.status.status_accessor import StatusAccessor

logger = logging.getLogger(__name__)

StatusCallback = Callable[[TaskStatus], None]


def _positive_or(value: Optional[float], default: float) -> float:
    if value is None or value <= 0:
        return default
    return value


class StatusPoller:
    """Repeatedly fetches a task status until it terminates or times out."""

    def __init__(
        self,
        accessor: StatusAccessor,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize the poller.

        Args:
            accessor: Source of status snapshots.
            clock: Monotonic clock in seconds.
            sleep: Blocking wait used between fetches. ``time.sleep``
                resumes after signals, so the sync poll is only interrupted
                by a sleep callable or signal handler that raises
                ``InterruptedError``. The asyncio variant is stopped by
                cancelling its task instead.
        """
        self._accessor = accessor
        self._clock = clock
        self._sleep = sleep

    def _check_deadline(self, started: float, timeout: float) -> None:
        if self._clock() - started > timeout:
            raise D3TimeoutError(f"Polling timed out after {timeout:g}s")

    def poll_status(
        self,
        main_task_id: str,
        file_task_id: Optional[str] = None,
        interval: Optional[float] = None,
        timeout: Optional[float] = None,
        on_update: Optional[StatusCallback] = None,
    ) -> TaskStatus:
        """Poll a task until it completes or fails.

        Args:
            main_task_id: Task id returned when the operation was created.
            file_task_id: Optional id of a single file inside the task.
            interval: Seconds between fetches, 2 by default.
            timeout: Seconds before giving up, 300 by default.
            on_update: Called with every fetched status, terminal or not.

        Returns:
            The first status whose operation status is terminal.

        Raises:
            D3TimeoutError: If the deadline passes before a terminal status.
            D3ClientError: If a fetch fails, or if the sleep raises
                ``InterruptedError``.
        """
        interval = _positive_or(interval, DEFAULT_POLL_INTERVAL_SECONDS)
        timeout = _positive_or(timeout, DEFAULT_POLL_TIMEOUT_SECONDS)
        started = self._clock()

        while True:
            self._check_deadline(started, timeout)
            status = self._accessor.get_status(main_task_id, file_task_id)
            if on_update is not None:
                on_update(status)
            if status.is_terminal:
                logger.info(
                    "Task %s finished with status %s",
                    main_task_id,
                    status.operation_status,
                )
                return status
            try:
                self._sleep(interval)
            except InterruptedError as e:
                raise D3ClientError("Polling interrupted") from e

    async def apoll_status(
        self,
        main_task_id: str,
        file_task_id: Optional[str] = None,
        interval: Optional[float] = None,
        timeout: Optional[float] = None,
        on_update: Optional[StatusCallback] = None,
    ) -> TaskStatus:
        """Asyncio variant of :meth:`poll_status`.

        Fetches run in the default executor and the wait between them is an
        ``asyncio.sleep``. Cancelling the awaiting task stops polling.
        """
        interval = _positive_or(interval, DEFAULT_POLL_INTERVAL_SECONDS)
        timeout = _positive_or(timeout, DEFAULT_POLL_TIMEOUT_SECONDS)
        loop = asyncio.get_running_loop()
        started = self._clock()

        while True:
            self._check_deadline(started, timeout)
            status = await loop.run_in_executor(
                None, self._accessor.get_status, main_task_id, file_task_id
            )
            if on_update is not None:
                on_update(status)
            if status.is_terminal:
                logger.info(
                    "Task %s finished with status %s",
                    main_task_id,
                    status.operation_status,
                )
                return status
            await asyncio.sleep(interval)
