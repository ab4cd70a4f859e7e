"""FIFO of statistic requests made before the pixel buffer exists."""
from dataclasses import dataclass
from typing import Callable, List


@dataclass
class PendingRequest:
    """A result callback paired with the statistic it asked for."""

    callback: Callable[[object], None]
    operation: Callable[[], object]
    name: str = ""


class RequestQueue:
    """Holds pending requests until they are drained, once, in submission order."""

    def __init__(self):
        self._pending: List[PendingRequest] = []

    def __len__(self):
        return len(self._pending)

    def push(self, request: PendingRequest):
        self._pending.append(request)

    def take_all(self) -> List[PendingRequest]:
        """Remove and return every pending request, oldest first."""
        pending, self._pending = self._pending, []
        return pending

    def clear(self) -> int:
        """Drop all pending requests and return how many there were."""
        return len(self.take_all())
