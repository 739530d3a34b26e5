"""
Deferred release of uploaded image buffers.

After a submission is handled its images are kept in memory for a fixed
delay and then released. This is memory hygiene only: the pending tasks are
cancelled without error when the application shuts down.

Every pending release pins both images of its submission, up to
2 x MAX_IMAGE_BYTES, until the delay elapses. Resident memory therefore grows
with submissions per IMAGE_RETENTION_SECONDS; ``retained_bytes`` reports it.
"""

import asyncio
import logging
from typing import Dict

from paylink.models.submission import ValidatedFiles

logger = logging.getLogger(__name__)


class BufferReleaseScheduler:

    def __init__(self, delay_seconds: float = 3600):
        self.delay_seconds = delay_seconds
        self._tasks: Dict[asyncio.Task, ValidatedFiles] = {}

    @property
    def pending(self) -> int:
        """Number of submissions whose images are still held in memory."""
        return len(self._tasks)

    @property
    def retained_bytes(self) -> int:
        return sum(files.size for files in self._tasks.values())

    async def _release_later(self, files: ValidatedFiles, delay: float) -> None:
        await asyncio.sleep(delay)
        files.release()

    def _forget(self, task: asyncio.Task) -> None:
        self._tasks.pop(task, None)

    def schedule(self, files: ValidatedFiles) -> asyncio.Task:
        """Release files after the configured delay. Must be called from a running loop."""
        task = asyncio.get_running_loop().create_task(
            self._release_later(files, self.delay_seconds)
        )
        self._tasks[task] = files
        task.add_done_callback(self._forget)
        logger.debug(
            f"Holding {files.size} image bytes for {self.delay_seconds}s "
            f"({self.pending} pending, {self.retained_bytes} bytes retained)"
        )
        return task

    def cancel_all(self) -> int:
        """Cancel every pending release and return how many were dropped."""
        cancelled = 0
        for task in list(self._tasks):
            if not task.done():
                task.cancel()
                cancelled += 1
        self._tasks.clear()
        if cancelled:
            logger.info(f"Dropped {cancelled} pending image release(s) on shutdown")
        return cancelled
