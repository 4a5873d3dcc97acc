# Copyright 2026 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
# SPDX-License-Identifier: Apache-2.0

"""Asyncio helpers for repeating work on a fixed interval."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable

Sleep = Callable[[float], Awaitable[None]]
Tick = Callable[[], Awaitable[bool]]


class RepeatingTimer:
    """Runs an async tick every ``interval`` seconds until disarmed.

    Ticks are fire-and-await: the next wait starts only after the previous
    tick has returned, so two ticks never overlap. The tick returns ``True`` to
    keep going and ``False`` to stop.

    At most one loop runs per timer. ``arm()`` on an armed timer disarms the
    running loop first.

    Typical usage:
        ```python
        async def tick() -> bool:
            return not await job_done()

        timer = RepeatingTimer(5.0, tick)
        timer.arm()
        await timer.wait()
        ```

    Args:
        interval: Seconds to wait before each tick.
        tick: Coroutine function called on every tick.
        sleep: Sleep function, replaceable in tests.
        name: Task name used for debugging.
    """

    def __init__(
        self,
        interval: float,
        tick: Tick,
        *,
        sleep: Sleep = asyncio.sleep,
        name: str = 'repeating-timer',
    ) -> None:
        if interval <= 0:
            raise ValueError('Interval must be positive')
        self.interval = interval
        self._tick = tick
        self._sleep = sleep
        self._name = name
        self._task: asyncio.Task[None] | None = None
        self.arm_count = 0
        self.disarm_count = 0

    @property
    def active(self) -> bool:
        """Whether a loop is armed and not finished."""
        return self._task is not None and not self._task.done()

    def arm(self) -> None:
        """Start the loop, replacing any loop already running."""
        self.disarm()
        self.arm_count += 1
        self._task = asyncio.get_running_loop().create_task(self._run(), name=self._name)

    def disarm(self) -> bool:
        """Stop the loop.

        Safe to call from inside a tick: the running tick is not cancelled and
        the loop ends after it returns.

        Returns:
            True if a loop was active.
        """
        task, self._task = self._task, None
        if task is None or task.done():
            return False
        self.disarm_count += 1
        if task is not asyncio.current_task():
            task.cancel()
        return True

    async def wait(self) -> None:
        """Wait until the current loop ends, whether finished or disarmed."""
        task = self._task
        if task is None:
            return
        try:
            await asyncio.shield(task)
        except asyncio.CancelledError:
            if not task.cancelled():
                raise

    async def _run(self) -> None:
        me = asyncio.current_task()
        while self._task is me:
            await self._sleep(self.interval)
            if self._task is not me:
                return
            if not await self._tick():
                if self._task is me:
                    self._task = None
                return
