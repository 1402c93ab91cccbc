"""A queue handing captured frames from the capture thread to the analysis thread."""

from __future__ import annotations

import threading
import time
from collections import deque
from dataclasses import dataclass
from typing import Any, Callable

QUEUE_MIN = 8 * 1024
_REBALANCE_INTERVAL = 5
_DEMAND_FACTOR = 0.15
_REDUCTION_STEPS = (100_000, 50_000, 20_000, 10_000)


@dataclass
class _Slot:
    header: Any = None
    packet: bytes | None = None


class PacketQueue:
    """Frames pushed by the capture side and drained in batches by the analysis side.

    Slots are recycled through a free list that starts with ``QUEUE_MIN``
    entries; it grows when the consumer stalls and is trimmed back by
    :meth:`rebalance` once demand falls.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._free: deque[_Slot] = deque(_Slot() for _ in range(QUEUE_MIN))
        self._used: deque[_Slot] = deque()
        self.free_miss = 0
        self.mangled_items = 0
        self._rebalance_last_buffer_time: int | None = None
        self._rebalance_buffers_used = 0
        self.last_buffers_used = 0
        self._rebalance_queue_time_last = 0

    @property
    def free_depth(self) -> int:
        return len(self._free)

    @property
    def used_depth(self) -> int:
        return len(self._used)

    def push(self, header: Any, packet: bytes | None) -> None:
        """Queue one captured frame, taking a free slot or creating a new one."""
        with self._lock:
            if self._free:
                slot = self._free.popleft()
            else:
                self.free_miss += 1
                slot = _Slot()
            slot.header = header
            slot.packet = None if packet is None else bytes(packet)
            self._used.append(slot)

    def service(self, handler: Callable[[Any, bytes], Any], now: int | None = None) -> int:
        """Hand every queued frame to ``handler`` in arrival order; return how many."""
        with self._lock:
            if not self._used:
                return 0
            items, self._used = self._used, deque()
        count = len(items)

        for slot in items:
            try:
                if slot.header is not None and slot.packet is not None:
                    handler(slot.header, slot.packet)
                else:
                    self.mangled_items += 1
            finally:
                slot.header = None
                slot.packet = None
                with self._lock:
                    self._free.append(slot)

        if now is None:
            now = int(time.time())
        if self._rebalance_last_buffer_time != now:
            self._rebalance_last_buffer_time = now
            self.last_buffers_used = self._rebalance_buffers_used
            self._rebalance_buffers_used = 0
        self._rebalance_buffers_used += count
        return count

    def _free_reduce(self, count: int) -> int:
        removed = 0
        with self._lock:
            while count > 0 and len(self._free) > QUEUE_MIN:
                self._free.popleft()
                count -= 1
                removed += 1
        return removed

    def rebalance(self, now: int | None = None) -> int:
        """Release idle free slots left over from a stall; return how many were released."""
        if now is None:
            now = int(time.time())
        if self._rebalance_queue_time_last + _REBALANCE_INTERVAL >= now:
            return 0
        self._rebalance_queue_time_last = now

        demand = self.last_buffers_used * _DEMAND_FACTOR
        avail = float(self.free_depth)
        if avail <= demand:
            return 0
        balance = avail - demand
        for step in _REDUCTION_STEPS:
            if balance > step:
                return self._free_reduce(step)
        return 0