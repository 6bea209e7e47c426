"""
Admission gate interface.
Allows swapping how admissions for one event are serialized.
"""

from abc import ABC, abstractmethod
from typing import AsyncContextManager


class AdmissionGate(ABC):
    """
    A per-event serialization point around the count-then-insert sequence.

    Implementations:
    - InProcessAdmissionGate: one asyncio.Lock per event, single process only
    - RedisAdmissionGate: one Redis lock per event, shared by every process
    """

    @abstractmethod
    def hold(self, event_id: int) -> AsyncContextManager[None]:
        """
        Async context manager that is entered by at most one admission
        for `event_id` at a time.

        Args:
            event_id: Event whose capacity is being checked
        """
        ...
