# senate_sync/pacing.py
"""Single-worker task queue with a fixed delay between tasks."""

import logging
import time
from collections import deque
from dataclasses import dataclass
from typing import Any, Callable, Deque, List, Optional, Tuple

from tqdm import tqdm

logger = logging.getLogger(__name__)


@dataclass
class TaskOutcome:
    value: Any = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class PacedTaskQueue:
    """Run queued tasks one at a time, sleeping ``delay_seconds`` between them.

    Only one task is ever in flight. A failing task is recorded and the
    queue moves on to the next one.
    """

    def __init__(self, delay_seconds: float, sleep: Callable[[float], None] = time.sleep):
        if delay_seconds < 0:
            raise ValueError(f"delay_seconds cannot be negative, got {delay_seconds}")
        self.delay_seconds = delay_seconds
        self._sleep = sleep
        self._tasks: Deque[Tuple[Callable[..., Any], tuple, dict]] = deque()

    def __len__(self) -> int:
        return len(self._tasks)

    def submit(self, fn: Callable[..., Any], *args, **kwargs) -> None:
        self._tasks.append((fn, args, kwargs))

    def run(self, desc: Optional[str] = None) -> List[TaskOutcome]:
        """Drain the queue in FIFO order and return outcomes in submission order.

        A progress bar is shown when ``desc`` is given.
        """
        outcomes: List[TaskOutcome] = []
        first = True
        progress = tqdm(total=len(self._tasks), desc=desc, unit='task', disable=desc is None)
        while self._tasks:
            fn, args, kwargs = self._tasks.popleft()
            if not first and self.delay_seconds:
                self._sleep(self.delay_seconds)
            first = False
            try:
                outcomes.append(TaskOutcome(value=fn(*args, **kwargs)))
            except Exception as e:
                logger.error(f"Queued task {getattr(fn, '__name__', fn)} failed: {e}")
                outcomes.append(TaskOutcome(error=e))
            progress.update(1)
        progress.close()
        return outcomes
