from __future__ import annotations

import asyncio
import random
from typing import Awaitable, Callable, Sequence

from ..restaurants.models import RestaurantRecord

RecordCallback = Callable[[RestaurantRecord], None]


class SelectionAnimator:
    """
    Roulette-style pick: flicker through random restaurants, stop on the last.

    Every tick draws uniformly and independently, so the winner (the final
    draw) is uniform over the records.
    """

    def __init__(
        self,
        tick_interval: float = 0.15,
        tick_count: int = 15,
        rng: random.Random | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.tick_interval = tick_interval
        self.tick_count = tick_count
        self._rng = rng or random.Random()
        self._sleep = sleep

    def select(
        self,
        records: Sequence[RestaurantRecord],
        on_tick: RecordCallback,
        on_done: RecordCallback,
    ) -> asyncio.Task | None:
        """
        Start the selection on the running event loop.

        Returns the task driving it; cancelling the task stops any further
        ``on_tick`` calls and suppresses ``on_done``. Empty ``records`` is a
        no-op and returns ``None``.
        """
        if not records:
            return None
        snapshot = tuple(records)
        return asyncio.get_running_loop().create_task(
            self._run(snapshot, on_tick, on_done)
        )

    async def _run(
        self,
        records: tuple[RestaurantRecord, ...],
        on_tick: RecordCallback,
        on_done: RecordCallback,
    ) -> RestaurantRecord:
        chosen = records[0]
        for _ in range(self.tick_count):
            await self._sleep(self.tick_interval)
            chosen = records[self._rng.randrange(len(records))]
            on_tick(chosen)
        on_done(chosen)
        return chosen
